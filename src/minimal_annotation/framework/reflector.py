"""
Entity reflection.

The processor never inspects classes directly; it asks a :class:`Reflector`
for an entity's type, its declared metadata and its public operations.
:class:`ModuleReflector` is the default, backed by ``importlib`` and the
entries recorded by :func:`~minimal_annotation.framework.metadata.annotate`.
"""

from __future__ import annotations

import inspect
from importlib import import_module
from types import ModuleType
from typing import Any, Protocol

from minimal_annotation.core.errors import EntityNotFoundError
from minimal_annotation.core.naming import import_string, qualified_name

from .metadata import MetadataEntry, declared_metadata


class Reflector(Protocol):
    def load(self, entity_name: str) -> type: ...

    def list_declared_metadata(self, target: Any) -> list[MetadataEntry]: ...

    def list_public_operations(self, entity: type) -> list[str]: ...

    def operation(self, entity: type, name: str) -> Any: ...

    def list_entities(self, module_name: str) -> list[str] | None: ...


def _unwrap(member: Any) -> Any:
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    return member


def _is_operation(member: Any) -> bool:
    return inspect.isfunction(_unwrap(member))


class ModuleReflector:
    """Reflects classes living in importable modules."""

    def load(self, entity_name: str) -> type:
        try:
            entity = import_string(entity_name)
        except ImportError as exc:
            raise EntityNotFoundError(entity_name, cause=exc) from exc
        if not inspect.isclass(entity):
            raise EntityNotFoundError(entity_name)
        return entity

    def list_declared_metadata(self, target: Any) -> list[MetadataEntry]:
        entries = list(declared_metadata(target))
        unwrapped = _unwrap(target)
        if unwrapped is not target:
            # staticmethod/classmethod may share the function's __dict__
            entries.extend(
                entry
                for entry in declared_metadata(unwrapped)
                if not any(entry is seen for seen in entries)
            )
        return entries

    def list_public_operations(self, entity: type) -> list[str]:
        """Public methods in declaration order, own members before inherited ones."""
        names: list[str] = []
        seen: set[str] = set()
        for klass in entity.__mro__:
            if klass is object:
                continue
            for name, member in vars(klass).items():
                if name in seen:
                    continue
                seen.add(name)
                if not name.startswith("_") and _is_operation(member):
                    names.append(name)
        return names

    def operation(self, entity: type, name: str) -> Any:
        return inspect.getattr_static(entity, name)

    def list_entities(self, module_name: str) -> list[str] | None:
        """Classes defined in ``module_name``; None when the module does not exist."""
        try:
            module = import_module(module_name)
        except ModuleNotFoundError as exc:
            if exc.name and (module_name == exc.name or module_name.startswith(exc.name + ".")):
                return None
            raise
        return _defined_classes(module)


def _defined_classes(module: ModuleType) -> list[str]:
    names = (
        qualified_name(value)
        for value in vars(module).values()
        if inspect.isclass(value) and value.__module__ == module.__name__
    )
    return list(dict.fromkeys(names))
