"""
Core primitives shared by the annotation framework.

- errors: structured exception hierarchy
- logging: structlog configuration
- settings: pydantic-settings configuration
- container: object-construction collaborator
- context: immutable processing context
"""

from minimal_annotation.core.container import Container, get_container, reset_container
from minimal_annotation.core.context import ProcessingContext
from minimal_annotation.core.errors import (
    AnnotationError,
    EntityNotFoundError,
    HandlerConstructionError,
    HandlerError,
    HandlerInvocationError,
    ManifestError,
)
from minimal_annotation.core.settings import AnnotationSettings, get_settings

__all__ = [
    "AnnotationError",
    "AnnotationSettings",
    "Container",
    "EntityNotFoundError",
    "HandlerConstructionError",
    "HandlerError",
    "HandlerInvocationError",
    "ManifestError",
    "ProcessingContext",
    "get_container",
    "get_settings",
    "reset_container",
]
