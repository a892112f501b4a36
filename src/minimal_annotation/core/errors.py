"""
Structured error types for annotation discovery and dispatch.

Every failure raised by the resolver, processor, scanner or container extends
:class:`AnnotationError` so callers can catch one base type and still read the
entity, method and handler that were being processed when it happened.

Manifesto:
    - **Typed hierarchy:** Construction, invocation and lookup failures differ
    - **Rich context:** Errors carry entity/method/handler names for logging
    - **Error chaining:** The original exception is kept as ``cause``
    - **Fail loud:** A crashing handler aborts the scan instead of leaving a
      half-wired application behind

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     AnnotationError                          │
        │               (category, context, cause)                     │
        ├─────────────────────────────────────────────────────────────┤
        │  ResolutionError        HandlerError          ConfigError    │
        │  (RESOLUTION)           (HANDLER)             (CONFIG)       │
        │       │                     │                     │          │
        │  EntityNotFoundError   HandlerConstructionError  ManifestError│
        │                        HandlerInvocationError                │
        │                                                              │
        │  ContainerError                                              │
        │  (CONTAINER)                                                 │
        │       │                                                      │
        │  BindingNotFoundError                                        │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = HandlerInvocationError("Route failed").with_context(
    ...     entity="app.controller.User", method="index"
    ... )
    >>> error.context.method
    'index'
    >>> error.to_dict()["category"]
    'HANDLER'

Tags:
    error-handling, exception-hierarchy, error-context, minimal-annotation

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and logging."""

    RESOLUTION = "RESOLUTION"
    HANDLER = "HANDLER"
    CONTAINER = "CONTAINER"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        entity: Fully-qualified name of the entity being processed
        method: Operation name when the failure happened in an operation pass
        handler: Fully-qualified name of the handler type involved
        path: Filesystem path being scanned
        metadata: Additional key-value pairs
    """

    entity: str | None = None
    method: str | None = None
    handler: str | None = None
    path: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["entity", "method", "handler", "path"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class AnnotationError(Exception):
    """
    Base exception for all annotation framework errors.

    Subclasses set ``default_category`` to classify themselves.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> AnnotationError:
        """
        Add context to this error (fluent API).

        Usage:
            raise HandlerConstructionError("Bad args").with_context(
                entity="app.controller.User",
                handler="minimal_annotation.builtins.Route",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# RESOLUTION ERRORS
# =============================================================================


class ResolutionError(AnnotationError):
    """A name could not be turned into the type it refers to."""

    default_category = ErrorCategory.RESOLUTION


class EntityNotFoundError(ResolutionError):
    """Entity name does not denote a loadable class."""

    def __init__(self, name: str, *, cause: BaseException | None = None):
        super().__init__(f"Entity not found: {name}", cause=cause)
        self.context.entity = name


# =============================================================================
# HANDLER ERRORS (abort the scan)
# =============================================================================


class HandlerError(AnnotationError):
    """Failure while building or running an annotation handler."""

    default_category = ErrorCategory.HANDLER


class HandlerConstructionError(HandlerError):
    """The handler type could not be instantiated with the declared arguments."""


class HandlerInvocationError(HandlerError):
    """``handle(context)`` raised."""


# =============================================================================
# CONTAINER ERRORS
# =============================================================================


class ContainerError(AnnotationError):
    """Object-construction collaborator failure."""

    default_category = ErrorCategory.CONTAINER


class BindingNotFoundError(ContainerError):
    """No binding or importable type exists for a container key."""

    def __init__(self, key: str):
        super().__init__(f"No binding for '{key}'")
        self.key = key


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(AnnotationError):
    """Invalid configuration."""

    default_category = ErrorCategory.CONFIG


class ManifestError(ConfigError):
    """Package manifest is unreadable or does not match the expected layout."""

    def __init__(self, path: str, message: str, *, cause: BaseException | None = None):
        super().__init__(f"Invalid manifest {path}: {message}", cause=cause)
        self.context.path = path


def categorize_error(error: BaseException) -> ErrorCategory:
    """Get the category of an arbitrary exception."""
    if isinstance(error, AnnotationError):
        return error.category
    if isinstance(error, (ImportError, LookupError)):
        return ErrorCategory.RESOLUTION
    if isinstance(error, TypeError):
        return ErrorCategory.HANDLER
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "AnnotationError",
    "ResolutionError",
    "EntityNotFoundError",
    "HandlerError",
    "HandlerConstructionError",
    "HandlerInvocationError",
    "ContainerError",
    "BindingNotFoundError",
    "ConfigError",
    "ManifestError",
    "categorize_error",
]
