"""
CLI for ``apidoc sync``: document regeneration commands.
"""

from __future__ import annotations

import typer

from apidoc.cli.utils import output_result, run_operation

app = typer.Typer(no_args_is_help=True)


@app.command("all")
def sync_all(
    dry_run: bool = typer.Option(False, "--dry-run", help="Render without writing files"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Regenerate every module, endpoint and the index page."""
    from apidoc.ops.sync import sync_all as _sync

    result = run_operation(_sync, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Synced")


@app.command("module")
def sync_module(
    module_id: str | None = typer.Argument(None, help="Module ID"),
    path: str | None = typer.Option(None, "--path", "-p", help="Module path instead of ID"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Render without writing files"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Regenerate one module subtree."""
    from apidoc.ops.requests import ModuleSelector
    from apidoc.ops.sync import sync_module as _sync

    result = run_operation(_sync, ModuleSelector(module_id=module_id, path=path), dry_run=dry_run)
    output_result(result, as_json=json_out, title="Synced")


@app.command("endpoint")
def sync_endpoint(
    endpoint_id: str = typer.Argument(..., help="Endpoint ID"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Render without writing files"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Regenerate one endpoint document."""
    from apidoc.ops.sync import sync_endpoint as _sync

    result = run_operation(_sync, endpoint_id, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Synced")
