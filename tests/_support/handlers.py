"""Configurable handlers for queue, dispatch and processor tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from minimal_annotation.framework.handler import Annotation, Target

BOTH = frozenset({Target.ENTITY, Target.OPERATION})


class StubHandler(Annotation):
    """Records every call and returns a fixed result."""

    def __init__(
        self,
        priority: int = 0,
        *,
        key: str | None = None,
        result: Any = None,
        targets: frozenset[Target] = BOTH,
    ) -> None:
        self._priority = priority
        self._key = key
        self._result = result
        self._targets = frozenset(targets)
        self.calls: list[dict[str, Any]] = []

    def get_priority(self) -> int:
        return self._priority

    def get_context_key(self) -> str | None:
        return self._key

    def get_targets(self) -> frozenset[Target]:
        return self._targets

    def handle(self, context: Mapping[str, Any]) -> Any:
        self.calls.append(dict(context))
        return self._result


class OtherHandler(StubHandler):
    pass


class ThirdHandler(StubHandler):
    pass


class EchoKey(Annotation):
    """Returns what an earlier handler stored under ``source``."""

    context_key = "echo"
    priority = 1

    def __init__(self, source: str) -> None:
        self.source = source

    def handle(self, context: Mapping[str, Any]) -> Any:
        return context.get(self.source)


class Exploding(Annotation):
    priority = 3

    def handle(self, context: Mapping[str, Any]) -> Any:
        raise RuntimeError("boom")


class EntityOnly(Annotation):
    context_key = "entity_only"
    targets = frozenset({Target.ENTITY})

    def handle(self, context: Mapping[str, Any]) -> Any:
        return context["class"]


class OperationOnly(Annotation):
    context_key = "operation_only"
    targets = frozenset({Target.OPERATION})

    def handle(self, context: Mapping[str, Any]) -> Any:
        return context["method"]


class AbstractHandler(Annotation):
    """Never overrides ``handle``."""


class NotAHandler:
    def __init__(self, *args: Any) -> None:
        self.args = args


class Needy(Annotation):
    def __init__(self, required: str) -> None:
        self.required = required

    def handle(self, context: Mapping[str, Any]) -> Any:
        return None
