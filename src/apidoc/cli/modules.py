"""
CLI for ``apidoc module``: module management commands.
"""

from __future__ import annotations

import typer

from apidoc.cli.utils import output_result, run_operation

app = typer.Typer(no_args_is_help=True)


@app.command("add")
def add_module(
    name: str = typer.Argument(..., help="Module name"),
    description: str = typer.Option("", "--description", "-d"),
    parent: str | None = typer.Option(None, "--parent", "-p", help="Parent module path, e.g. billing/invoices"),
    dry_run: bool = typer.Option(False, "--dry-run"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Create a module, at the root or under --parent."""
    from apidoc.ops.modules import add_module as _add
    from apidoc.ops.requests import AddModuleRequest

    request = AddModuleRequest(name=name, description=description, parent_path=parent)
    result = run_operation(_add, request, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Module created")


@app.command("list")
def list_modules(
    name: str | None = typer.Option(None, "--name", "-n", help="Case-insensitive name filter"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List root modules."""
    from apidoc.ops.modules import list_modules as _list

    result = run_operation(_list, name)
    output_result(result, as_json=json_out, title="Modules")


@app.command("show")
def show_module(
    module_id: str | None = typer.Argument(None, help="Module ID"),
    path: str | None = typer.Option(None, "--path", "-p", help="Module path instead of ID"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show a module by ID or by --path."""
    from apidoc.ops.modules import get_module_details as _get
    from apidoc.ops.requests import ModuleSelector

    result = run_operation(_get, ModuleSelector(module_id=module_id, path=path))
    output_result(result, as_json=json_out, title=f"Module: {module_id or path}")


@app.command("update")
def update_module(
    module_id: str | None = typer.Argument(None, help="Module ID"),
    path: str | None = typer.Option(None, "--path", "-p", help="Module path instead of ID"),
    name: str | None = typer.Option(None, "--name", "-n"),
    description: str | None = typer.Option(None, "--description", "-d"),
    dry_run: bool = typer.Option(False, "--dry-run"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Rename a module or change its description."""
    from apidoc.ops.modules import update_module as _update
    from apidoc.ops.requests import ModuleSelector, UpdateModuleRequest

    request = UpdateModuleRequest(
        target=ModuleSelector(module_id=module_id, path=path),
        name=name,
        description=description,
    )
    result = run_operation(_update, request, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Module updated")


@app.command("move")
def move_module(
    module_id: str = typer.Argument(..., help="Module to move"),
    new_parent_id: str = typer.Argument(..., help="New parent module ID"),
    dry_run: bool = typer.Option(False, "--dry-run"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Move a module (and its subtree) under another module."""
    from apidoc.ops.modules import move_module as _move
    from apidoc.ops.requests import MoveModuleRequest

    request = MoveModuleRequest(module_id=module_id, new_parent_id=new_parent_id)
    result = run_operation(_move, request, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Module moved")


@app.command("detach")
def detach_module(
    parent_id: str = typer.Argument(..., help="Parent module ID"),
    module_id: str = typer.Argument(..., help="Child module ID"),
    dry_run: bool = typer.Option(False, "--dry-run"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Detach a child module from its parent."""
    from apidoc.ops.modules import detach_module as _detach
    from apidoc.ops.requests import DetachModuleRequest

    request = DetachModuleRequest(parent_id=parent_id, module_id=module_id)
    result = run_operation(_detach, request, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Module detached")
