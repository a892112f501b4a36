"""Dependency declaration annotation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from minimal_annotation.framework.handler import Annotation
from minimal_annotation.framework.metadata import attribute
from minimal_annotation.framework.registry import register_annotation


@attribute
@register_annotation()
class Inject(Annotation):
    """Names the services an entity or operation depends on.

    The highest built-in priority, so every other handler already sees
    ``context["inject"]``.
    """

    context_key = "inject"
    priority = 20

    def __init__(self, *services: str) -> None:
        self.services = services

    def handle(self, context: Mapping[str, Any]) -> tuple[str, ...] | None:
        return self.services or None
