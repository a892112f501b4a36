"""
Object-construction container.

:class:`Container` is the collaborator the annotation processor uses to
materialise entity instances (``get``, memoised) and handler instances
(``make``, always fresh).  Keys are types or dotted names; a key without an
explicit binding is resolved by importing it.

Usage::

    from minimal_annotation.core.container import Container

    container = Container()
    container.bind("app.Router", Router)         # singleton factory
    router = container.get("app.Router")         # lazy-created, memoised
    route  = container.make(Route, "GET", "/")   # fresh every call

    # As a context manager for automatic cleanup:
    with Container() as c:
        c.get(UserController)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .errors import BindingNotFoundError
from .logging import get_logger
from .naming import import_string, qualified_name
from .settings import AnnotationSettings, get_settings

logger = get_logger(__name__)

Factory = Callable[..., Any]


@dataclass
class Binding:
    factory: Factory
    singleton: bool = True


def _key(key: Any) -> str:
    return key if isinstance(key, str) else qualified_name(key)


class Container:
    """Lazy dependency container.

    Singletons are created on first :meth:`get` and released via
    :meth:`close` (or the context-manager protocol).
    """

    def __init__(self, settings: AnnotationSettings | None = None) -> None:
        self._settings = settings
        self._bindings: dict[str, Binding] = {}
        self._instances: dict[str, Any] = {}
        self.instance(Container, self)

    @property
    def settings(self) -> AnnotationSettings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    # ── Registration ─────────────────────────────────────────────

    def bind(self, key: Any, factory: Factory | None = None, *, singleton: bool = True) -> None:
        """Register ``factory`` (defaults to ``key`` itself) under ``key``."""
        name = _key(key)
        if factory is None:
            if isinstance(key, str):
                raise TypeError(f"A factory is required to bind '{name}'")
            factory = key
        self._bindings[name] = Binding(factory=factory, singleton=singleton)
        self._instances.pop(name, None)

    def instance(self, key: Any, obj: Any) -> None:
        """Register an already-built object as the singleton for ``key``."""
        self._instances[_key(key)] = obj

    def has(self, key: Any) -> bool:
        name = _key(key)
        return name in self._instances or name in self._bindings

    # ── Resolution ───────────────────────────────────────────────

    def _factory(self, key: Any) -> Factory:
        name = _key(key)
        binding = self._bindings.get(name)
        if binding is not None:
            return binding.factory
        if not isinstance(key, str):
            return key
        try:
            return import_string(name)
        except ImportError as exc:
            raise BindingNotFoundError(name) from exc

    def get(self, key: Any) -> Any:
        """Memoised fetch: built once, then returned on every call."""
        name = _key(key)
        if name in self._instances:
            return self._instances[name]
        obj = self._factory(key)()
        binding = self._bindings.get(name)
        if binding is None or binding.singleton:
            self._instances[name] = obj
        logger.debug("container.resolved", key=name)
        return obj

    def make(self, key: Any, *args: Any, **kwargs: Any) -> Any:
        """Fresh construction with explicit constructor arguments."""
        return self._factory(key)(*args, **kwargs)

    # ── Lifecycle ────────────────────────────────────────────────

    def close(self) -> None:
        """Close every memoised instance that exposes ``close()``."""
        for name, obj in list(self._instances.items()):
            if obj is self:
                continue
            closer = getattr(obj, "close", None)
            if callable(closer):
                try:
                    closer()
                except Exception:
                    logger.warning("container.close_failed", key=name, exc_info=True)
        self._instances = {qualified_name(Container): self}

    def __enter__(self) -> Container:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


# ── Global convenience ───────────────────────────────────────────────────

_global_container: Container | None = None


def get_container() -> Container:
    """Get (or create) a module-level :class:`Container`."""
    global _global_container
    if _global_container is None:
        _global_container = Container()
    return _global_container


def reset_container() -> None:
    """Drop the module-level container (primarily for testing)."""
    global _global_container
    if _global_container is not None:
        _global_container.close()
    _global_container = None
