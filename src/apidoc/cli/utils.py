"""
CLI utility helpers: output formatting and operation dispatch.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from apidoc.catalog.container import Catalog
from apidoc.core.settings import get_settings
from apidoc.ops.context import OperationContext
from apidoc.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)


# ── Dispatch ─────────────────────────────────────────────────────────────


def run_operation(
    func: Callable[..., Awaitable[OperationResult[Any]]],
    *args: Any,
    dry_run: bool = False,
) -> OperationResult[Any]:
    """Run one async operation against a catalog built from settings."""

    async def _call() -> OperationResult[Any]:
        async with Catalog(get_settings()) as catalog:
            ctx = OperationContext(catalog=catalog, caller="cli", dry_run=dry_run)
            return await func(ctx, *args)

    return asyncio.run(_call())


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal; failures exit with status 1."""
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        if as_json:
            console.print_json(json.dumps(result.to_dict(), default=str))
        else:
            err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}")
        raise typer.Exit(code=1)

    for warning in result.warnings:
        err_console.print(f"[yellow]Warning:[/yellow] {warning}")

    data = result.data

    if as_json:
        payload = _to_dict(data) if not isinstance(data, list | tuple) else [_to_dict(d) for d in data]
        console.print_json(json.dumps(payload, default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(str(v) for v in d.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs; nested ref lists one per line."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        if isinstance(v, list) and v and isinstance(v[0], dict):
            console.print(f"  [cyan]{k}[/cyan]:")
            for item in v:
                console.print(f"    - {item.get('name', '')} [dim]({item.get('id', '')})[/dim]")
        elif isinstance(v, list) and v:
            console.print(f"  [cyan]{k}[/cyan]:")
            for item in v:
                console.print(f"    - {item}")
        else:
            console.print(f"  [cyan]{k}[/cyan]: {v}")
