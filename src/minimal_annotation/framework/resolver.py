"""
Metadata normalization.

Turns one declared :class:`~minimal_annotation.framework.metadata.MetadataEntry`
into either a :class:`Fact` (merged straight into the context) or a
:class:`HandlerRef` (a handler type to construct and queue).

Resolution of a name ``N`` runs an ordered list of resolvers; the first one
that yields a type wins:

1. :class:`LiteralResolver` - ``N`` itself, unless it is the declaration marker
2. :class:`BuiltinResolver` - ``<builtin namespace>.<simple name of N>``

A candidate that is missing or does not implement the handler capability
degrades to ``Fact(lower_first(simple_name(N)), raw arguments)``; unknown
tags never abort discovery.

Resolvers look names up through a :class:`TypeLookup`, so tests can swap the
import machinery for an explicit table.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from minimal_annotation.core.logging import get_logger
from minimal_annotation.core.naming import import_string, lower_first, simple_name
from minimal_annotation.core.settings import AnnotationSettings, get_settings

from .handler import implements_handler
from .metadata import ATTRIBUTE, Attribute, MetadataEntry
from .registry import HandlerRegistry, default_registry

logger = get_logger(__name__)


# ── Normalized variants ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Fact:
    """Opaque key/value merged into the context as-is."""

    key: str
    value: Any


@dataclass(frozen=True)
class HandlerRef:
    """Resolved handler type plus the entry that declared it."""

    handler_type: type
    entry: MetadataEntry


Normalized = Fact | HandlerRef


# ── Type lookups ─────────────────────────────────────────────────────────


class TypeLookup(Protocol):
    def find(self, name: str) -> type | None: ...


class RegistryLookup:
    """Looks names up in a :class:`HandlerRegistry`."""

    def __init__(self, registry: HandlerRegistry | None = None) -> None:
        self.registry = registry if registry is not None else default_registry

    def find(self, name: str) -> type | None:
        return self.registry.get(name)


class ImportLookup:
    """Imports the dotted name; only classes count as found."""

    def find(self, name: str) -> type | None:
        try:
            found = import_string(name)
        except ImportError:
            return None
        return found if isinstance(found, type) else None


class ChainLookup:
    def __init__(self, *lookups: TypeLookup) -> None:
        self.lookups = lookups

    def find(self, name: str) -> type | None:
        for lookup in self.lookups:
            found = lookup.find(name)
            if found is not None:
                return found
        return None


# ── Resolvers ────────────────────────────────────────────────────────────


class NameResolver(Protocol):
    def resolve(self, name: str) -> type | None: ...


class LiteralResolver:
    def __init__(self, lookup: TypeLookup) -> None:
        self.lookup = lookup

    def resolve(self, name: str) -> type | None:
        found = self.lookup.find(name)
        if found is Attribute:
            return None
        return found


class BuiltinResolver:
    def __init__(self, lookup: TypeLookup, namespace: str) -> None:
        self.lookup = lookup
        self.namespace = namespace

    def resolve(self, name: str) -> type | None:
        return self.lookup.find(f"{self.namespace}.{simple_name(name)}")


class MetadataNormalizer:
    """Applies the resolver chain to metadata entries."""

    def __init__(self, resolvers: Sequence[NameResolver]) -> None:
        self.resolvers = list(resolvers)

    @classmethod
    def default(
        cls,
        settings: AnnotationSettings | None = None,
        registry: HandlerRegistry | None = None,
    ) -> MetadataNormalizer:
        settings = settings or get_settings()
        lookup = ChainLookup(RegistryLookup(registry), ImportLookup())
        return cls([LiteralResolver(lookup), BuiltinResolver(lookup, settings.builtin_namespace)])

    def resolve(self, name: str) -> type | None:
        for resolver in self.resolvers:
            found = resolver.resolve(name)
            if found is not None:
                return found
        return None

    def normalize(self, entry: MetadataEntry) -> Normalized | None:
        """None for the declaration marker, otherwise a fact or a handler."""
        if entry.name == ATTRIBUTE:
            return None
        candidate = self.resolve(entry.name)
        if candidate is None or not implements_handler(candidate):
            key = lower_first(simple_name(entry.name))
            logger.debug("metadata.fact", name=entry.name, key=key)
            return Fact(key, entry.arguments)
        return HandlerRef(candidate, entry)
