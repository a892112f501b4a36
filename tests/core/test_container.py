"""Tests for minimal_annotation.core.container: object-construction collaborator.

Covers memoised ``get``, fresh ``make``, bindings, lifecycle management and
the global convenience singleton.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from minimal_annotation.core.container import Container, get_container, reset_container
from minimal_annotation.core.errors import BindingNotFoundError


class Service:
    def __init__(self, name: str = "default") -> None:
        self.name = name


class TestContainerGet:
    def test_get_memoises(self):
        c = Container(MagicMock())
        assert c.get(Service) is c.get(Service)

    def test_get_by_dotted_name(self):
        c = Container(MagicMock())
        obj = c.get(f"{__name__}.Service")
        assert isinstance(obj, Service)
        assert c.get(Service) is obj

    def test_get_unknown_name_raises(self):
        c = Container(MagicMock())
        with pytest.raises(BindingNotFoundError):
            c.get("nowhere.to.be.Found")

    def test_container_resolves_itself(self):
        c = Container(MagicMock())
        assert c.get(Container) is c


class TestContainerMake:
    def test_make_is_fresh(self):
        c = Container(MagicMock())
        first = c.make(Service, "a")
        second = c.make(Service, "a")
        assert first is not second
        assert first.name == "a"

    def test_make_passes_keywords(self):
        c = Container(MagicMock())
        assert c.make(Service, name="kw").name == "kw"

    def test_make_does_not_touch_singleton(self):
        c = Container(MagicMock())
        singleton = c.get(Service)
        c.make(Service, "other")
        assert c.get(Service) is singleton


class TestBindings:
    def test_bind_factory(self):
        c = Container(MagicMock())
        c.bind("app.Service", lambda: Service("bound"))
        assert c.get("app.Service").name == "bound"
        assert c.has("app.Service")

    def test_bind_non_singleton(self):
        c = Container(MagicMock())
        c.bind(Service, singleton=False)
        assert c.get(Service) is not c.get(Service)

    def test_bind_string_requires_factory(self):
        c = Container(MagicMock())
        with pytest.raises(TypeError):
            c.bind("app.Service")

    def test_instance(self):
        c = Container(MagicMock())
        obj = Service("fixed")
        c.instance(Service, obj)
        assert c.get(Service) is obj

    def test_rebind_drops_cached_instance(self):
        c = Container(MagicMock())
        first = c.get(Service)
        c.bind(Service, lambda: Service("new"))
        assert c.get(Service) is not first


class TestContainerLifecycle:
    def test_settings_uses_provided(self):
        settings = MagicMock()
        assert Container(settings).settings is settings

    def test_close_calls_close(self):
        c = Container(MagicMock())
        resource = MagicMock()
        c.instance("app.Resource", resource)
        c.close()
        resource.close.assert_called_once()
        assert not c.has("app.Resource")

    def test_close_logs_failures(self):
        c = Container(MagicMock())
        resource = MagicMock()
        resource.close.side_effect = RuntimeError("fail")
        c.instance("app.Resource", resource)
        c.close()  # does not raise

    def test_context_manager(self):
        resource = MagicMock()
        with Container(MagicMock()) as c:
            c.instance("app.Resource", resource)
        resource.close.assert_called_once()


class TestGlobalContainer:
    def test_get_container_is_singleton(self):
        assert get_container() is get_container()

    def test_reset_container(self):
        first = get_container()
        reset_container()
        assert get_container() is not first
