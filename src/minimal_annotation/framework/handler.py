"""
Annotation handler capability.

Any object exposing ``handle``, ``get_context_key``, ``get_targets`` and
``get_priority`` is a handler.  :class:`Annotation` is a convenience base
class that derives the last three from class attributes::

    class Route(Annotation):
        context_key = "route"
        targets = frozenset({Target.OPERATION})
        priority = 5

        def __init__(self, method: str, path: str) -> None:
            self.method = method
            self.path = path

        def handle(self, context):
            return (self.method, self.path)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar, Protocol, runtime_checkable


class Target(str, Enum):
    """Kind of declaration an annotation is attached to."""

    ENTITY = "entity"
    OPERATION = "operation"


@runtime_checkable
class AnnotationHandler(Protocol):
    def handle(self, context: Mapping[str, Any]) -> Any: ...

    def get_context_key(self) -> str | None: ...

    def get_targets(self) -> frozenset[Target]: ...

    def get_priority(self) -> int: ...


def implements_handler(candidate: Any) -> bool:
    """True when ``candidate`` is a class providing the handler capability."""
    return isinstance(candidate, type) and issubclass(candidate, AnnotationHandler)


class Annotation(ABC):
    """Base class for annotation handlers."""

    context_key: ClassVar[str | None] = None
    targets: ClassVar[frozenset[Target]] = frozenset({Target.ENTITY, Target.OPERATION})
    priority: ClassVar[int] = 0

    @abstractmethod
    def handle(self, context: Mapping[str, Any]) -> Any:
        """Run against ``context``; a non-None result is stored under the context key."""

    def get_context_key(self) -> str | None:
        return self.context_key

    def get_targets(self) -> frozenset[Target]:
        return frozenset(self.targets)

    def get_priority(self) -> int:
        return self.priority

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.get_priority()})"
