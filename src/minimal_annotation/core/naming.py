"""Dotted-name helpers shared by the container, reflector and resolver."""

from __future__ import annotations

from importlib import import_module
from typing import Any


def qualified_name(obj: Any) -> str:
    """``"<module>.<qualname>"`` of a class or function."""
    return f"{obj.__module__}.{obj.__qualname__}"


def simple_name(name: str) -> str:
    """Last dotted component: ``"app.annotations.Route"`` -> ``"Route"``."""
    return name.rsplit(".", 1)[-1]


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def _is_module_prefix(missing: str | None, module_name: str) -> bool:
    if not missing:
        return False
    return module_name == missing or module_name.startswith(missing + ".")


def import_string(dotted: str) -> Any:
    """Import the object a dotted path points at.

    The longest importable module prefix is used, the remaining components are
    looked up as attributes, so nested classes (``pkg.mod.Outer.Inner``) work.

    Raises:
        ImportError: nothing lives at ``dotted``. A module that exists but fails
            to import for another reason propagates its own error.
    """
    parts = dotted.split(".")
    for index in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:index])
        try:
            obj: Any = import_module(module_name)
        except ModuleNotFoundError as exc:
            if _is_module_prefix(exc.name, module_name):
                continue
            raise
        for attr in parts[index:]:
            try:
                obj = getattr(obj, attr)
            except AttributeError as exc:
                raise ImportError(f"No object named '{dotted}'", name=dotted) from exc
        return obj
    raise ImportError(f"No object named '{dotted}'", name=dotted)
