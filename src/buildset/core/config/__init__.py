"""Validated settings and ``.env`` discovery for buildset.

Architecture::

    settings.py       BuildSetSettings (pydantic-settings) + get_settings() cache
    loader.py         project-root + .env file discovery

Tags:
    buildset, configuration, settings, pydantic, env-files
"""

from .loader import (
    discover_env_files,
    find_project_root,
)
from .settings import (
    BuildSetSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "BuildSetSettings",
    "get_settings",
    "clear_settings_cache",
    "find_project_root",
    "discover_env_files",
]
