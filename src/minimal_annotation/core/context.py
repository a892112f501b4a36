"""
Immutable processing context.

A :class:`ProcessingContext` is the key/value state handed to every handler.
It is never mutated: :meth:`ProcessingContext.merge` returns a new snapshot,
so a result folded in during one operation pass cannot leak into a sibling
operation or back into the entity-level snapshot.

Well-known keys:
    root        scan origin
    path        file currently being scanned
    namespaces  namespace -> directory mappings read from the manifest
    namespace   namespace the current file belongs to
    class       fully-qualified entity name
    target      :class:`~minimal_annotation.framework.handler.Target`
    method      operation name (operation passes only)
    instance    entity instance, once materialised
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any


class ProcessingContext(Mapping[str, Any]):
    """Read-only mapping with copy-on-merge semantics."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        data = dict(values or {})
        data.update(kwargs)
        self._values = MappingProxyType(data)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ProcessingContext({dict(self._values)!r})"

    def merge(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> ProcessingContext:
        """Create new context with merged values."""
        current = dict(self._values)
        current.update(values or {})
        current.update(kwargs)
        return ProcessingContext(current)

    def without(self, *keys: str) -> ProcessingContext:
        return ProcessingContext({k: v for k, v in self._values.items() if k not in keys})

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    @property
    def target(self) -> Any:
        return self._values.get("target")


def as_context(value: Mapping[str, Any] | None) -> ProcessingContext:
    """Accept a plain mapping wherever a context is expected."""
    if isinstance(value, ProcessingContext):
        return value
    return ProcessingContext(value)
