"""minimal-annotation: annotation discovery and dispatch for dependency-injection frameworks."""

from minimal_annotation.framework import (
    Annotation,
    AnnotationProcessor,
    Scanner,
    Target,
    annotate,
    attribute,
)

__version__ = "0.1.0"

__all__ = [
    "Annotation",
    "AnnotationProcessor",
    "Scanner",
    "Target",
    "annotate",
    "attribute",
    "__version__",
]
