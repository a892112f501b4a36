"""
Root Typer application for the minimal-annotation CLI.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from typer import Typer

from minimal_annotation.cli.utils import err_console, output_results
from minimal_annotation.core.container import Container
from minimal_annotation.core.errors import AnnotationError
from minimal_annotation.core.logging import configure_logging
from minimal_annotation.core.settings import get_settings
from minimal_annotation.framework.processor import AnnotationProcessor
from minimal_annotation.framework.scanner import Scanner

app = Typer(
    name="minimal-annotation",
    help="Discover annotated classes and run their handlers.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from minimal_annotation import __version__

        typer.echo(f"minimal-annotation {__version__}")
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
    """minimal-annotation CLI."""


@app.command("scan")
def scan(
    path: Path = typer.Argument(..., exists=True, help="Directory or module file to scan."),
    import_root: Path | None = typer.Option(
        None,
        "--import-root",
        "-I",
        help="Directory prepended to sys.path so scanned modules import (default: PATH).",
    ),
    json_out: bool = typer.Option(False, "--json"),
    log_level: str | None = typer.Option(None, "--log-level", "-l"),
) -> None:
    """Scan PATH and run the handlers of every annotated class."""
    settings = get_settings()
    configure_logging(level=log_level or settings.log_level, json_format=settings.json_logs)

    root = (import_root or (path if path.is_dir() else path.parent)).resolve()
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))

    with Container(settings) as container:
        scanner = Scanner(AnnotationProcessor(container=container), settings=settings)
        try:
            results = scanner.scan(path.resolve())
        except AnnotationError as exc:
            err_console.print(f"[bold red]Error[/bold red] ({exc.category.value}): {exc.message}")
            for key, value in exc.context.to_dict().items():
                err_console.print(f"  [cyan]{key}[/cyan]: {value}")
            raise typer.Exit(code=1) from exc
    output_results(results, as_json=json_out)


if __name__ == "__main__":
    app()
