"""
Scan driver.

Walks a source tree, maps every module file to its dotted module name and
hands each class defined there to the :class:`AnnotationProcessor`.

A directory holding a manifest (``annotations.json`` by default) restricts the
walk to the namespaces it declares::

    {
        "name": "acme/app",
        "autoload": {"app": "src/app"}
    }

Each namespace directory becomes its own root, so ``src/app/controller/user.py``
maps to module ``app.controller.user``.  Without a manifest every child is
walked except the dependency directory (``vendor`` by default).

Manifesto:
    A tree may hold scripts, fixtures and data files next to the modules, so
    anything that does not map to an importable module is skipped quietly.
    A malformed manifest is logged and ignored rather than aborting boot.

Tags:
    minimal-annotation, framework, discovery, scanning

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from minimal_annotation.core.context import ProcessingContext, as_context
from minimal_annotation.core.errors import ManifestError
from minimal_annotation.core.logging import get_logger
from minimal_annotation.core.settings import AnnotationSettings

from .processor import AnnotationProcessor, EntityResult

log = get_logger(__name__)


class PackageManifest(BaseModel):
    """Namespace to directory mapping for one package."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    autoload: dict[str, str] = Field(default_factory=dict)

    @field_validator("autoload")
    @classmethod
    def _normalize_namespaces(cls, value: dict[str, str]) -> dict[str, str]:
        return {namespace.strip("."): directory for namespace, directory in value.items()}


def read_manifest(path: Path) -> PackageManifest:
    """Parse a manifest file.

    Raises:
        ManifestError: the file cannot be read or is not a valid manifest.
    """
    try:
        return PackageManifest.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise ManifestError(str(path), str(exc), cause=exc) from exc


class Scanner:
    """Depth-first, single-threaded directory walker."""

    def __init__(
        self,
        processor: AnnotationProcessor | None = None,
        settings: AnnotationSettings | None = None,
    ) -> None:
        self.processor = processor or AnnotationProcessor(settings=settings)
        self.settings = settings or self.processor.container.settings

    def scan(self, path: str | Path, context: Mapping[str, Any] | None = None) -> list[EntityResult]:
        """Process every entity found under ``path``."""
        path = Path(path)
        context = as_context(context)
        if "root" not in context:
            context = context.merge(root=str(path if path.is_dir() else path.parent))

        if path.is_dir():
            manifest = self._manifest(path)
            if manifest is not None:
                return self._scan_namespaces(path, manifest, context)
            results: list[EntityResult] = []
            for child in sorted(path.iterdir()):
                if child.name in (self.settings.excluded_dir, "__pycache__"):
                    continue
                results.extend(self.scan(child, context))
            return results
        return self._scan_file(path, context)

    def _manifest(self, directory: Path) -> PackageManifest | None:
        manifest_path = directory / self.settings.manifest_name
        if not manifest_path.is_file():
            return None
        try:
            manifest = read_manifest(manifest_path)
        except ManifestError as exc:
            log.warning("scan.manifest_invalid", **exc.to_dict())
            return None
        if not manifest.autoload:
            log.warning("scan.manifest_empty", path=str(manifest_path))
            return None
        return manifest

    def _scan_namespaces(
        self, path: Path, manifest: PackageManifest, context: ProcessingContext
    ) -> list[EntityResult]:
        context = context.merge(namespaces=dict(manifest.autoload))
        results: list[EntityResult] = []
        for namespace, directory in manifest.autoload.items():
            child = path / directory
            log.debug("scan.namespace", namespace=namespace, path=str(child))
            results.extend(self.scan(child, context.merge(namespace=namespace, root=str(child))))
        return results

    def module_name(self, path: Path, context: Mapping[str, Any]) -> str | None:
        """Dotted module name for ``path``, or None when it cannot be a module."""
        if path.suffix != self.settings.source_suffix:
            return None
        relative = path.relative_to(context["root"])
        if not relative.name:
            return None
        parts = list(relative.with_suffix("").parts)
        if parts and parts[-1] == "__init__":
            parts.pop()
        namespace = context.get("namespace")
        if namespace:
            parts = [*namespace.split("."), *parts]
        if not parts or not all(part.isidentifier() for part in parts):
            return None
        return ".".join(parts)

    def _scan_file(self, path: Path, context: ProcessingContext) -> list[EntityResult]:
        context = context.merge(path=str(path))
        module_name = self.module_name(path, context)
        if module_name is None:
            return []
        entities = self.processor.reflector.list_entities(module_name)
        if entities is None:
            log.debug("scan.module_skipped", module=module_name, path=str(path))
            return []
        return [self.processor.parse(entity, context) for entity in entities]
