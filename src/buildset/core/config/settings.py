"""
Centralized settings for buildset.

Manifesto:
    One validated, cached settings object tells the scanner where build
    documents live, which module attribute holds a Python document, and
    how to log.  Values come from ``BUILDSET_*`` environment variables and
    the ``.env`` cascade discovered by :mod:`~buildset.core.config.loader`.

Tags:
    buildset, configuration, settings, pydantic, caching, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import pydantic
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from buildset.core.errors import ConfigError


class BuildSetSettings(BaseSettings):
    """buildset configuration.

    All fields can be set via ``BUILDSET_*`` environment variables (e.g.
    ``BUILDSET_BUILDS_DIR=firmware/builds``) or through ``.env`` files.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDSET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Documents ────────────────────────────────────────────────
    project_root: Path | None = Field(default=None, description="Directory relative paths are anchored at")
    builds_dir: Path = Field(default=Path("builds"), description="Root of the build document tree")
    document_attribute: str = Field(
        default="build",
        min_length=1,
        description="Module attribute holding the document in .py build files",
    )

    # ── Execution hand-off ───────────────────────────────────────
    default_channel: Literal["stable", "nightly"] = Field(default="stable")
    asset_suffix: str = Field(default=".bin")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: Literal["console", "json"] = Field(default="console")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return level

    def resolve_builds_dir(self) -> Path:
        """Return ``builds_dir`` anchored at ``project_root`` (or cwd) when relative."""
        if self.builds_dir.is_absolute():
            return self.builds_dir
        return (self.project_root or Path.cwd()) / self.builds_dir


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, BuildSetSettings] = {}


def get_settings(
    *,
    project_root: Path | None = None,
    _force_reload: bool = False,
) -> BuildSetSettings:
    """Load, validate, and cache a :class:`BuildSetSettings` instance.

    Parameters
    ----------
    project_root:
        Override the auto-detected project root.
    _force_reload:
        Bypass cache and reload from disk.
    """
    from .loader import discover_env_files, find_project_root

    root = (project_root or find_project_root()).resolve()
    cache_key = str(root)

    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    env_files = discover_env_files(root)
    try:
        settings = BuildSetSettings(
            _env_file=env_files or None,  # type: ignore[call-arg]
            project_root=root,
        )
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigError(f"Invalid setting {key}: {first['msg']}", cause=exc) from exc

    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
