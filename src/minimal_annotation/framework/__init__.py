"""
Annotation framework - metadata resolution and dispatch.

This module provides:
- Declaring annotations (``annotate``, ``attribute``)
- Handler capability and base class
- Name resolution with built-in fallback
- Priority queue and dispatch engine
- Entity processor and directory scanner
"""

from minimal_annotation.framework.dispatcher import DispatchResult, run_eligible
from minimal_annotation.framework.handler import Annotation, AnnotationHandler, Target
from minimal_annotation.framework.metadata import Attribute, MetadataEntry, annotate, attribute
from minimal_annotation.framework.processor import AnnotationProcessor, EntityResult
from minimal_annotation.framework.queue import AnnotationQueue
from minimal_annotation.framework.registry import clear_registry, list_annotations, register_annotation
from minimal_annotation.framework.resolver import Fact, HandlerRef, MetadataNormalizer
from minimal_annotation.framework.scanner import Scanner

__all__ = [
    # Declaring
    "annotate",
    "attribute",
    "Attribute",
    "MetadataEntry",
    # Handlers
    "Annotation",
    "AnnotationHandler",
    "Target",
    # Registry
    "register_annotation",
    "list_annotations",
    "clear_registry",
    # Resolution and dispatch
    "Fact",
    "HandlerRef",
    "MetadataNormalizer",
    "AnnotationQueue",
    "DispatchResult",
    "run_eligible",
    # Processing
    "AnnotationProcessor",
    "EntityResult",
    "Scanner",
]
