"""
CLI for ``apidoc config``: configuration inspection.
"""

from __future__ import annotations

import typer
from rich.table import Table

from apidoc.cli.utils import console

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show current configuration."""
    from apidoc.core.settings import get_settings

    settings = get_settings()

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    if format == "env":
        for key, value in sorted(settings.model_dump(mode="json").items()):
            console.print(f"APIDOC_{key.upper()}={'' if value is None else value}")
        return

    table = Table()
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Data directory", str(settings.data_dir))
    table.add_row("Docs directory", str(settings.docs_dir))
    table.add_row("Storage backend", settings.storage_backend.value)
    if settings.storage_backend.value == "sqlite":
        table.add_row("SQLite path", str(settings.resolved_sqlite_path))
    table.add_row("Log level", settings.log_level)
    table.add_row("Log format", settings.log_format)
    console.print(table)
