"""Annotation handler registry.

Manifesto:
    An explicit name-to-type table lets the resolver find handler classes
    without relying on whatever happens to be importable, which keeps name
    resolution testable in isolation.

Tags:
    minimal-annotation, framework, registry, handler-discovery, lookup

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from minimal_annotation.core.logging import get_logger
from minimal_annotation.core.naming import qualified_name

logger = get_logger(__name__)

H = TypeVar("H", bound=type)


class HandlerRegistry:
    """Maps fully-qualified annotation names to handler types."""

    def __init__(self) -> None:
        self._registry: dict[str, type] = {}

    def register(self, handler_type: type, name: str | None = None) -> type:
        key = name or qualified_name(handler_type)
        existing = self._registry.get(key)
        if existing is not None and existing is not handler_type:
            raise ValueError(f"Annotation '{key}' is already registered")
        self._registry[key] = handler_type
        logger.debug("annotation_registered", name=key, cls=handler_type.__name__)
        return handler_type

    def get(self, name: str) -> type | None:
        return self._registry.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def names(self) -> list[str]:
        return sorted(self._registry)

    def clear(self) -> None:
        self._registry.clear()


# Global annotation registry
default_registry = HandlerRegistry()


def register_annotation(name: str | None = None) -> Callable[[H], H]:
    """Decorator to register a handler class in the default registry."""

    def decorator(cls: H) -> H:
        default_registry.register(cls, name)
        return cls

    return decorator


def list_annotations() -> list[str]:
    """List all registered annotation names."""
    return default_registry.names()


def clear_registry() -> None:
    """Clear registry (for testing)."""
    default_registry.clear()
