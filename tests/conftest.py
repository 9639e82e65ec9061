"""
Shared pytest fixtures for buildset tests.

This module provides:
- Settings-cache and logging isolation between tests
- Factories for raw build documents (full, extended, partial)
- A helper that writes a document tree to ``tmp_path``

Usage:
    def test_something(full_build, write_tree, tmp_path):
        write_tree({"base.yaml": full_build("base")})
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import structlog
import yaml

from buildset.core.config import clear_settings_cache


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch):
    """Fresh settings and default structlog config for every test."""
    for key in (
        "BUILDSET_BUILDS_DIR",
        "BUILDSET_DOCUMENT_ATTRIBUTE",
        "BUILDSET_DEFAULT_CHANNEL",
        "BUILDSET_ASSET_SUFFIX",
        "BUILDSET_LOG_LEVEL",
        "BUILDSET_LOG_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


# =============================================================================
# Document factories
# =============================================================================


def _full_build(name: str, **fields: Any) -> dict[str, Any]:
    document: dict[str, Any] = {
        "board_env": "mega2560",
        "meta": {
            "stable_name": f"{name}-{{{{marlin_version}}}}",
            "nightly_name": f"{name}-nightly-{{{{current_date}}}}",
        },
        "based_on": {
            "repo": "https://github.com/MarlinFirmware/Configurations.git",
            "path": f"config/examples/{name}",
            "stable_branch": "release-2.1.2",
            "nightly_branch": "bugfix-2.1.x",
        },
    }
    document.update(fields)
    return document


def _extended_build(name: str, extends: str | list[str], **fields: Any) -> dict[str, Any]:
    document: dict[str, Any] = {
        "extends": extends,
        "meta": {
            "stable_name": f"{name}-{{{{marlin_version}}}}",
            "nightly_name": f"{name}-nightly-{{{{current_date}}}}",
        },
    }
    document.update(fields)
    return document


def _partial(**fields: Any) -> dict[str, Any]:
    document: dict[str, Any] = {"partial": True}
    document.update(fields)
    return document


@pytest.fixture
def full_build() -> Callable[..., dict[str, Any]]:
    """Factory for a valid full build document whose asset names derive from *name*."""
    return _full_build


@pytest.fixture
def extended_build() -> Callable[..., dict[str, Any]]:
    """Factory for an extended build document."""
    return _extended_build


@pytest.fixture
def partial() -> Callable[..., dict[str, Any]]:
    """Factory for a partial document."""
    return _partial


# =============================================================================
# Build trees on disk
# =============================================================================


@pytest.fixture
def builds_dir(tmp_path: Path) -> Path:
    root = tmp_path / "builds"
    root.mkdir()
    return root


@pytest.fixture
def write_tree(builds_dir: Path) -> Callable[[dict[str, Any]], Path]:
    """Write ``{relative_path: content}`` under ``builds_dir``.

    Dict content is serialized according to the file suffix; strings are
    written verbatim.
    """

    def _write(files: dict[str, Any]) -> Path:
        for name, content in files.items():
            path = builds_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                path.write_text(content, encoding="utf-8")
            elif path.suffix == ".json":
                path.write_text(json.dumps(content), encoding="utf-8")
            else:
                path.write_text(yaml.safe_dump(content, sort_keys=False), encoding="utf-8")
        return builds_dir

    return _write
