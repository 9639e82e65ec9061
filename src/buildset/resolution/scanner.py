"""Build document discovery and loading.

Every file under the builds directory is one document; its identity is its
POSIX path relative to that directory (``creality/ender3.yaml``), and
``include``/``extends`` refer to documents by that identity.

Supported formats:

==========  ==============================================================
Suffix      Document value
==========  ==============================================================
``.py``     Module attribute ``build`` (configurable).  If callable it is
            invoked with no arguments; an awaitable result is awaited.
``.yaml``   ``yaml.safe_load`` of the file (also ``.yml``)
``.json``   ``json.loads`` of the file
``.toml``   ``tomllib.loads`` of the file
==========  ==============================================================

Hidden entries, ``__pycache__`` directories and ``.pyc`` files are skipped.
Documents are loaded one at a time; no retries are attempted.
"""

from __future__ import annotations

import importlib.util
import inspect
import json
import re
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from buildset.core.errors import DocumentLoadError
from buildset.core.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_SUFFIXES = (".py", ".yaml", ".yml", ".json", ".toml")

_MODULE_NAME_RE = re.compile(r"\W")


def _is_ignored(path: Path) -> bool:
    return path.name.startswith(".") or path.name == "__pycache__" or path.suffix == ".pyc"


def scan_document_names(root: Path) -> list[str]:
    """Return the identity of every document under *root*, in traversal order."""
    root = Path(root)
    if not root.is_dir():
        raise DocumentLoadError(str(root), f"Build directory {root} does not exist")

    names: list[str] = []
    _walk(root, root, names)
    return names


def _walk(root: Path, directory: Path, names: list[str]) -> None:
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if _is_ignored(entry):
            continue
        if entry.is_dir():
            _walk(root, entry, names)
        else:
            names.append(entry.relative_to(root).as_posix())


async def load_raw_document(root: Path, name: str, *, attribute: str = "build") -> Any:
    """Load the raw (unvalidated) value of one document."""
    path = Path(root) / name
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DocumentLoadError(
            name,
            f"Invalid build {name}, unsupported file type {suffix or '(none)'}",
        )

    try:
        if suffix == ".py":
            value = _load_python_document(path, name, attribute)
            if callable(value):
                value = value()
            if inspect.isawaitable(value):
                value = await value
            return value

        text = path.read_text(encoding="utf-8")
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(text)
        if suffix == ".json":
            return json.loads(text)
        return tomllib.loads(text)
    except DocumentLoadError:
        raise
    except Exception as exc:
        raise DocumentLoadError(name, f"Invalid build {name}, failed to load: {exc}", cause=exc) from exc


def _load_python_document(path: Path, name: str, attribute: str) -> Any:
    module_name = "buildset_documents." + _MODULE_NAME_RE.sub("_", name)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise DocumentLoadError(name, f"Invalid build {name}, cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    if not hasattr(module, attribute):
        raise DocumentLoadError(name, f"Invalid build {name}, module defines no '{attribute}'")
    return getattr(module, attribute)


async def load_raw_documents(
    root: Path, names: Iterable[str], *, attribute: str = "build"
) -> dict[str, Any]:
    """Load every named document, in order."""
    documents: dict[str, Any] = {}
    for name in names:
        documents[name] = await load_raw_document(root, name, attribute=attribute)
        logger.debug("document_loaded", document=name)
    return documents
