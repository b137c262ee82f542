"""
CLI for ``apidoc sample``: seed a catalog with example data.
"""

from __future__ import annotations

import typer

from apidoc.cli.utils import output_result, run_operation

app = typer.Typer(no_args_is_help=True)


@app.command("load")
def load_sample(
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Create the sample user/product modules and generate their documents."""
    from apidoc.ops.samples import load_sample_data

    result = run_operation(load_sample_data, dry_run=dry_run)
    output_result(result, as_json=json_out, title="Sample data")
