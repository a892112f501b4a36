"""Routing annotations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from minimal_annotation.framework.handler import Annotation, Target
from minimal_annotation.framework.metadata import attribute
from minimal_annotation.framework.registry import register_annotation


@attribute
@register_annotation()
class Prefix(Annotation):
    """Path prefix shared by every route of a controller.

    Runs before :class:`Route` so routes can read ``context["prefix"]``.
    """

    context_key = "prefix"
    targets = frozenset({Target.ENTITY})
    priority = 10

    def __init__(self, path: str) -> None:
        self.path = path

    def handle(self, context: Mapping[str, Any]) -> str:
        return self.path


@attribute
@register_annotation()
class Route(Annotation):
    """HTTP method and path of an operation."""

    context_key = "route"
    targets = frozenset({Target.OPERATION})
    priority = 5

    def __init__(self, method: str, path: str) -> None:
        self.method = method.upper()
        self.path = path

    def handle(self, context: Mapping[str, Any]) -> tuple[str, str]:
        return (self.method, self.path)
