"""
Shared pytest fixtures for minimal-annotation tests.

This module provides:
- Settings, registry and logging resets for test isolation
- A fresh container and processor per test
- ``source_tree``: writes an importable package tree under tmp_path
"""

import sys
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

from minimal_annotation.core.container import Container, reset_container
from minimal_annotation.core.settings import AnnotationSettings, clear_settings_cache
from minimal_annotation.framework.processor import AnnotationProcessor


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop cached settings, the global container and logging configuration."""
    for var in [
        "ANNOTATION_BUILTIN_NAMESPACE",
        "ANNOTATION_MANIFEST_NAME",
        "ANNOTATION_EXCLUDED_DIR",
        "ANNOTATION_SOURCE_SUFFIX",
        "ANNOTATION_LOG_LEVEL",
        "ANNOTATION_JSON_LOGS",
    ]:
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    reset_container()
    yield
    clear_settings_cache()
    reset_container()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


# =============================================================================
# Framework Fixtures
# =============================================================================


@pytest.fixture
def settings() -> AnnotationSettings:
    return AnnotationSettings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def container(settings: AnnotationSettings) -> Generator[Container, None, None]:
    with Container(settings) as c:
        yield c


@pytest.fixture
def processor(container: Container, settings: AnnotationSettings) -> AnnotationProcessor:
    return AnnotationProcessor(container=container, settings=settings)


# =============================================================================
# Source Tree Fixture
# =============================================================================


@pytest.fixture
def source_tree(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Callable[[dict[str, str]], Path], None, None]:
    """
    Write ``{relative_path: source}`` under ``tmp_path/src`` and make it importable.

    Usage:
        root = source_tree({"shop/cart.py": "class Cart: ..."})
    """
    root = tmp_path / "src"

    def build(files: dict[str, str], *, import_root: Path | None = None) -> Path:
        for relative, source in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(source), encoding="utf-8")
        monkeypatch.syspath_prepend(str(import_root or root))
        return root

    yield build

    # forget every module imported from the tree
    for name, module in list(sys.modules.items()):
        locations = [getattr(module, "__file__", None) or "", *getattr(module, "__path__", [])]
        if any(str(location).startswith(str(tmp_path)) for location in locations):
            del sys.modules[name]
