"""Tests for declaring annotations and reflecting on them."""

import pytest

from minimal_annotation.core.errors import EntityNotFoundError
from minimal_annotation.framework.metadata import (
    ATTRIBUTE,
    MetadataEntry,
    annotate,
    attribute,
    declared_metadata,
)
from minimal_annotation.framework.reflector import ModuleReflector

from tests._support.handlers import StubHandler


@annotate("First", 1)
@annotate(StubHandler, key="k")
class Declared:
    @annotate("Route", "GET", "/")
    def index(self):
        return None

    @staticmethod
    @annotate("Cached")
    def helper():
        return None

    @annotate("Outer")
    @classmethod
    def build(cls):
        return cls()

    def _private(self):
        return None

    @property
    def name(self):
        return "declared"


class Child(Declared):
    def extra(self):
        return None

    def index(self):
        return None


class TestAnnotate:
    def test_source_order(self):
        names = [entry.name for entry in declared_metadata(Declared)]
        assert names == [f"{__name__}.First", "tests._support.handlers.StubHandler"]

    def test_bare_name_qualified_with_module(self):
        entry = declared_metadata(Declared)[0]
        assert entry == MetadataEntry(f"{__name__}.First", (1,))

    def test_dotted_name_kept(self):
        @annotate("pkg.mod.Thing")
        def fn():
            return None

        assert declared_metadata(fn)[0].name == "pkg.mod.Thing"

    def test_subclass_does_not_inherit_entries(self):
        assert declared_metadata(Child) == ()

    def test_attribute_marker(self):
        @attribute
        class Marked:
            pass

        assert declared_metadata(Marked)[0].name == ATTRIBUTE
        assert declared_metadata(Marked)[0].is_marker

    def test_arguments(self):
        assert MetadataEntry("x", (1, 2)).arguments == (1, 2)
        assert MetadataEntry("x", (1,), {"a": 2}).arguments == {0: 1, "a": 2}


class TestModuleReflector:
    def test_public_operations_in_declaration_order(self):
        assert ModuleReflector().list_public_operations(Declared) == ["index", "helper", "build"]

    def test_inherited_operations_follow_own(self):
        assert ModuleReflector().list_public_operations(Child) == [
            "extra",
            "index",
            "helper",
            "build",
        ]

    def test_metadata_on_wrapped_methods(self):
        reflector = ModuleReflector()
        helper = reflector.operation(Declared, "helper")
        build = reflector.operation(Declared, "build")

        assert [e.name for e in reflector.list_declared_metadata(helper)] == [f"{__name__}.Cached"]
        assert [e.name for e in reflector.list_declared_metadata(build)] == [f"{__name__}.Outer"]

    def test_load(self):
        assert ModuleReflector().load(f"{__name__}.Declared") is Declared

    def test_load_missing(self):
        with pytest.raises(EntityNotFoundError):
            ModuleReflector().load(f"{__name__}.Missing")

    def test_load_non_class(self):
        with pytest.raises(EntityNotFoundError):
            ModuleReflector().load(f"{__name__}.pytest")

    def test_list_entities(self):
        names = ModuleReflector().list_entities("tests._support.sample_app")
        assert names[0] == "tests._support.sample_app.UserController"
        assert "tests._support.handlers.EntityOnly" not in names

    def test_list_entities_missing_module(self):
        assert ModuleReflector().list_entities("tests._support.no_such_module") is None
