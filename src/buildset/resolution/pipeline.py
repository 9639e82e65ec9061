"""End-to-end build set resolution.

Manifesto:
    A build tree is only useful downstream once it is fully concrete: no
    partials, no ``extends`` chains, no option both enabled and disabled,
    no two builds fighting over an artifact name.  This module runs the
    stages in their fixed order and hands back either the whole resolved
    set or a single fatal error.

Architecture::

    scan_document_names      files under the builds directory
          ↓
    load_raw_documents       static values / (async) factories
          ↓
    classify_documents       PARTIAL | EXTENDED | FULL, schema-checked
          ↓
    resolve_partials         includes merged, partials dropped
          ↓
    resolve_extensions       extends chains folded, memoized
          ↓
    validate_builds          self-conflicts fixed, schema + uniqueness
          ↓
    dict[name, BuildDocument]

The registry is created here and threaded through every stage; stages run
strictly one after another.

Tags:
    buildset, pipeline, resolution, merge, inheritance

Doc-Types:
    api-reference
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from buildset.core.config import BuildSetSettings, get_settings
from buildset.core.logging import get_logger
from buildset.resolution.classifier import classify_documents
from buildset.resolution.conflicts import Conflict
from buildset.resolution.extensions import resolve_extensions
from buildset.resolution.models import BuildDocument, DocumentKind
from buildset.resolution.partials import resolve_partials
from buildset.resolution.registry import BuildRegistry
from buildset.resolution.scanner import load_raw_documents, scan_document_names
from buildset.resolution.validator import validate_builds

logger = get_logger(__name__)


@dataclass
class BuildSet:
    """A resolved build set plus the conflicts reconciled along the way."""

    builds: dict[str, BuildDocument]
    conflicts: list[Conflict] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.builds)


def build_registry(raw_documents: Mapping[str, Any]) -> BuildRegistry:
    """Classify raw documents and resolve partials and extensions."""
    registry = BuildRegistry(classify_documents(raw_documents))
    logger.info(
        "builds_classified",
        full=len(registry.of_kind(DocumentKind.FULL)),
        extended=len(registry.of_kind(DocumentKind.EXTENDED)),
        partial=len(registry.of_kind(DocumentKind.PARTIAL)),
    )

    resolve_partials(registry)
    logger.debug("partials_resolved", remaining=len(registry))

    resolve_extensions(registry)
    logger.debug("extensions_resolved", remaining=len(registry))
    return registry


def resolve_build_set(raw_documents: Mapping[str, Any]) -> BuildSet:
    """Run every in-memory stage over already-loaded raw documents."""
    registry = build_registry(raw_documents)
    builds = validate_builds(registry)
    return BuildSet(builds=builds, conflicts=list(registry.conflicts))


def resolve_documents(raw_documents: Mapping[str, Any]) -> dict[str, BuildDocument]:
    """Like :func:`resolve_build_set` but return only the builds."""
    return resolve_build_set(raw_documents).builds


async def load_build_set(
    root: Path | str | None = None,
    *,
    settings: BuildSetSettings | None = None,
) -> BuildSet:
    """Scan, load and resolve the build documents under *root*.

    *root* defaults to ``settings.builds_dir``.
    """
    settings = settings or get_settings()
    root = Path(root) if root is not None else settings.resolve_builds_dir()

    names = scan_document_names(root)
    logger.info("builds_scanned", root=str(root), count=len(names))

    raw_documents = await load_raw_documents(root, names, attribute=settings.document_attribute)
    build_set = resolve_build_set(raw_documents)
    logger.info(
        "builds_resolved",
        count=len(build_set.builds),
        conflicts=len(build_set.conflicts),
    )
    return build_set


async def load_builds(
    root: Path | str | None = None,
    *,
    settings: BuildSetSettings | None = None,
) -> dict[str, BuildDocument]:
    """Resolve the build documents under *root* to ``{name: BuildDocument}``."""
    return (await load_build_set(root, settings=settings)).builds


def resolve_builds(
    root: Path | str | None = None,
    *,
    settings: BuildSetSettings | None = None,
) -> dict[str, BuildDocument]:
    """Synchronous wrapper around :func:`load_builds`."""
    return asyncio.run(load_builds(root, settings=settings))
