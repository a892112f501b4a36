"""
CLI output helpers.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from minimal_annotation.framework.processor import EntityResult

console = Console()
err_console = Console(stderr=True)

# Keys every pass carries; hidden from the rendered results.
BOOKKEEPING_KEYS = frozenset(
    {"root", "path", "namespaces", "namespace", "class", "target", "method", "instance"}
)


def _facts(context: Any) -> dict[str, Any]:
    return {k: v for k, v in context.items() if k not in BOOKKEEPING_KEYS}


def result_to_dict(result: EntityResult) -> dict[str, Any]:
    """Plain-dict view of an :class:`EntityResult`."""
    return {
        "entity": result.entity,
        "path": result.context.get("path"),
        "context": _facts(result.context),
        "operations": {name: _facts(ctx) for name, ctx in result.operations.items()},
        "leftover": [type(handler).__name__ for handler in result.leftover],
    }


def output_results(results: list[EntityResult], *, as_json: bool = False) -> None:
    """Render scan results as JSON or a Rich table."""
    if as_json:
        # rich soft-wraps long lines
        typer.echo(json.dumps([result_to_dict(r) for r in results], indent=2, default=str))
        return

    if not results:
        console.print("[dim]No entities found.[/dim]")
        return

    table = Table(title="Entities", show_lines=False, pad_edge=False)
    for col in ("entity", "context", "operations"):
        table.add_column(col, overflow="fold")
    for result in results:
        data = result_to_dict(result)
        operations = ", ".join(
            f"{name} {facts}" if facts else name for name, facts in data["operations"].items()
        )
        table.add_row(data["entity"], str(data["context"] or ""), operations)
    console.print(table)
