"""
Project-root and environment-file discovery.

Manifesto:
    Configuration cascading must be predictable and debuggable.  Earlier
    files are overridden by later ones, and real environment variables
    always win (pydantic-settings handles that last step).

Implements the cascading load order::

    .env.base  →  .env.local  →  .env  →  real env vars

Tags:
    buildset, configuration, env-files, cascading, loader

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path

ENV_FILE_NAMES = (".env.base", ".env.local", ".env")


def find_project_root(start: Path | None = None) -> Path:
    """Walk upward from *start* to find the project root.

    Recognised root markers (checked in order):

    * ``pyproject.toml``
    * ``.git`` directory
    * ``setup.py``

    Falls back to *start* (or cwd) when no marker is found.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / "pyproject.toml").exists():
            return directory
        if (directory / ".git").exists():
            return directory
        if (directory / "setup.py").exists():
            return directory
    return current


def discover_env_files(project_root: Path | None = None) -> list[Path]:
    """Return the ``.env`` files under *project_root* that exist, in load order."""
    root = (project_root or find_project_root()).resolve()
    return [root / name for name in ENV_FILE_NAMES if (root / name).is_file()]
