"""
Declaring annotations on classes and methods.

``annotate`` records a :class:`MetadataEntry` on the decorated object::

    @annotate("Prefix", "/users")
    class User:
        @annotate(Route, "GET", "/")
        def index(self): ...

A type argument is recorded under its fully-qualified name.  A bare name
(``"Prefix"``) is qualified with the declaring module, just like an
annotation that was never imported; the resolver later falls back to the
built-in namespace when that name does not exist.

Entries are stored in source order (top decorator first).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from minimal_annotation.core.naming import qualified_name

METADATA_ATTR = "__annotation_metadata__"

T = TypeVar("T")


class Attribute:
    """Declaration marker for annotation types.

    Entries naming this type mark the decorated class as an annotation
    definition; the processor never treats them as annotations themselves.
    """


ATTRIBUTE = qualified_name(Attribute)


@dataclass(frozen=True)
class MetadataEntry:
    """One declared annotation: its name and raw arguments."""

    name: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    @property
    def arguments(self) -> Any:
        """Raw arguments as merged into the context for plain facts.

        The positional tuple when no keywords were given, otherwise a dict
        keyed by positional index and keyword name.
        """
        if not self.kwargs:
            return self.args
        merged: dict[Any, Any] = dict(enumerate(self.args))
        merged.update(self.kwargs)
        return merged

    @property
    def is_marker(self) -> bool:
        return self.name == ATTRIBUTE


def _entry_name(name: str | type, owner: Any) -> str:
    if isinstance(name, type):
        return qualified_name(name)
    if "." in name:
        return name
    return f"{owner.__module__}.{name}"


def annotate(name: str | type, *args: Any, **kwargs: Any) -> Callable[[T], T]:
    """Attach an annotation to a class or function."""

    def decorator(target: T) -> T:
        entry = MetadataEntry(_entry_name(name, target), tuple(args), dict(kwargs))
        # Only entries declared on this very object; a subclass never
        # inherits its base's list.
        existing = vars(target).get(METADATA_ATTR, ())
        # decorators apply bottom-up, prepend to keep source order
        setattr(target, METADATA_ATTR, (entry, *existing))
        return target

    return decorator


def attribute(cls: type[T]) -> type[T]:
    """Mark ``cls`` as an annotation definition."""
    return annotate(Attribute)(cls)


def declared_metadata(target: Any) -> tuple[MetadataEntry, ...]:
    """Entries declared directly on ``target`` (a class or function)."""
    return tuple(vars(target).get(METADATA_ATTR, ())) if hasattr(target, "__dict__") else ()
