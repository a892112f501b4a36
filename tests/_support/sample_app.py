"""Annotated classes used by the processor tests.

``Prefix``, ``Route`` and ``Deprecated`` are declared by bare name and are not
defined in this module, exactly like annotations a user forgot to import.
"""

from minimal_annotation.framework.metadata import annotate, attribute

from tests._support.handlers import EntityOnly, Exploding, OperationOnly


@annotate("Prefix", "/users")
class UserController:
    instances = 0

    def __init__(self) -> None:
        type(self).instances += 1

    @annotate("Route", "GET", "/")
    def index(self):
        return "index"

    @annotate("Route", "post", "/")
    @annotate("Deprecated", since="2.0")
    def store(self):
        return "store"

    def show(self):
        return "show"

    def _helper(self):
        return "private"


@annotate("Cacheable", 60)
class PlainService:
    def run(self):
        return None


@annotate(EntityOnly)
@annotate(OperationOnly)
class GatedController:
    def first(self):
        return None

    def second(self):
        return None


class BrokenController:
    @annotate(Exploding)
    def explode(self):
        return None


@attribute
class CustomMarker:
    """Annotation definition; the marker entry must be skipped."""
