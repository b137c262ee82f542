"""
Root Typer application for the apidoc CLI.
"""

from __future__ import annotations

import typer
from rich.markup import escape
from typer import Typer

from apidoc import __version__
from apidoc.cli.utils import err_console
from apidoc.core.errors import ConfigError
from apidoc.core.logging import configure_logging
from apidoc.core.settings import get_settings

app = Typer(
    name="apidoc",
    help="apidoc: hierarchical API documentation catalog with markdown sync.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"apidoc {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """apidoc CLI: manage modules and endpoints, regenerate documentation."""
    try:
        settings = get_settings(_force_reload=True)
    except ConfigError as exc:
        err_console.print(f"[bold red]Configuration error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_format == "json",
        force=True,
    )


# ── Sub-command registration ─────────────────────────────────────────────

from apidoc.cli.config import app as config_app  # noqa: E402
from apidoc.cli.endpoints import app as endpoint_app  # noqa: E402
from apidoc.cli.index import app as index_app  # noqa: E402
from apidoc.cli.modules import app as module_app  # noqa: E402
from apidoc.cli.sample import app as sample_app  # noqa: E402
from apidoc.cli.sync import app as sync_app  # noqa: E402

app.add_typer(module_app, name="module", help="Module management.")
app.add_typer(endpoint_app, name="endpoint", help="Endpoint management.")
app.add_typer(sync_app, name="sync", help="Regenerate documentation.")
app.add_typer(index_app, name="index", help="Root index maintenance.")
app.add_typer(config_app, name="config", help="Configuration inspection.")
app.add_typer(sample_app, name="sample", help="Example data.")
