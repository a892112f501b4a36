"""
Centralized settings for annotation discovery.

All fields can be set via ``ANNOTATION_*`` environment variables (e.g.
``ANNOTATION_EXCLUDED_DIR=third_party``) or a ``.env`` file.

Fields
──────
builtin_namespace : Module searched when an annotation name does not resolve
manifest_name     : File name of the package manifest looked up per directory
excluded_dir      : Dependency directory never walked without a manifest
source_suffix     : Suffix of files that map to modules
log_level         : Structlog log level
json_logs         : Force JSON (True) or console (False) rendering; auto when unset

Tags:
    settings, configuration, pydantic, environment, minimal-annotation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnnotationSettings(BaseSettings):
    """Annotation framework configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ANNOTATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Resolution ───────────────────────────────────────────────
    builtin_namespace: str = Field(
        default="minimal_annotation.builtins",
        description="Module holding the built-in annotation handlers",
    )

    # ── Scanning ─────────────────────────────────────────────────
    manifest_name: str = "annotations.json"
    excluded_dir: str = "vendor"
    source_suffix: str = ".py"

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    json_logs: bool | None = None

    @field_validator("builtin_namespace")
    @classmethod
    def _strip_namespace(cls, value: str) -> str:
        return value.strip(".")

    @field_validator("source_suffix")
    @classmethod
    def _dotted_suffix(cls, value: str) -> str:
        return value if value.startswith(".") else f".{value}"


_settings_cache: dict[str, AnnotationSettings] = {}


def get_settings(*, _force_reload: bool = False) -> AnnotationSettings:
    """Load, validate, and cache an :class:`AnnotationSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = AnnotationSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = ["AnnotationSettings", "get_settings", "clear_settings_cache"]
