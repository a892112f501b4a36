"""Command-line interface (``minimal-annotation``)."""

from minimal_annotation.cli.app import app

__all__ = ["app"]
