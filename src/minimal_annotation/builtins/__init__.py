"""
Built-in annotations.

This module is the fallback namespace: an annotation name that does not
resolve on its own is looked up here by its simple name, so ``"Route"``
declared in any module finds :class:`Route`.
"""

from minimal_annotation.builtins.injection import Inject
from minimal_annotation.builtins.routing import Prefix, Route

__all__ = ["Inject", "Prefix", "Route"]
