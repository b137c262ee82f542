"""
CLI for ``apidoc endpoint``: endpoint management commands.
"""

from __future__ import annotations

import typer

from apidoc.cli.utils import output_result, run_operation

app = typer.Typer(no_args_is_help=True)


@app.command("add")
def add_endpoint(
    module_id: str = typer.Argument(..., help="Owning module ID"),
    name: str = typer.Argument(..., help="Endpoint name"),
    declaration: str = typer.Option("", "--declaration", "-s", help="Function declaration"),
    description: str = typer.Option("", "--description", "-d"),
    dry_run: bool = typer.Option(False, "--dry-run"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Create an endpoint inside a module."""
    from apidoc.ops.endpoints import add_endpoint as _add
    from apidoc.ops.requests import AddEndpointRequest

    request = AddEndpointRequest(
        module_id=module_id, name=name, declaration=declaration, description=description
    )
    result = run_operation(_add, request, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Endpoint created")


@app.command("list")
def list_endpoints(
    module_id: str = typer.Argument(..., help="Module ID"),
    name: str | None = typer.Option(None, "--name", "-n", help="Case-insensitive name filter"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List a module's endpoints."""
    from apidoc.ops.endpoints import list_endpoints as _list
    from apidoc.ops.requests import ListEndpointsRequest

    result = run_operation(_list, ListEndpointsRequest(module_id=module_id, name=name))
    output_result(result, as_json=json_out, title="Endpoints")


@app.command("show")
def show_endpoint(
    endpoint_id: str = typer.Argument(..., help="Endpoint ID"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show an endpoint."""
    from apidoc.ops.endpoints import get_endpoint_details as _get

    result = run_operation(_get, endpoint_id)
    output_result(result, as_json=json_out, title=f"Endpoint: {endpoint_id}")


@app.command("update")
def update_endpoint(
    endpoint_id: str = typer.Argument(..., help="Endpoint ID"),
    name: str | None = typer.Option(None, "--name", "-n"),
    declaration: str | None = typer.Option(None, "--declaration", "-s"),
    description: str | None = typer.Option(None, "--description", "-d"),
    dry_run: bool = typer.Option(False, "--dry-run"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Change an endpoint's name, declaration or description."""
    from apidoc.ops.endpoints import update_endpoint as _update
    from apidoc.ops.requests import UpdateEndpointRequest

    request = UpdateEndpointRequest(
        endpoint_id=endpoint_id, name=name, declaration=declaration, description=description
    )
    result = run_operation(_update, request, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Endpoint updated")
