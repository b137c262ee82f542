"""
CLI for ``apidoc index``: root index maintenance.
"""

from __future__ import annotations

import typer

from apidoc.cli.utils import output_result, run_operation

app = typer.Typer(no_args_is_help=True)


@app.command("rebuild")
def rebuild_index(
    dry_run: bool = typer.Option(False, "--dry-run"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Rewrite the root index from all modules that have no parent."""
    from apidoc.ops.modules import rebuild_root_index as _rebuild

    result = run_operation(_rebuild, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Root modules")
