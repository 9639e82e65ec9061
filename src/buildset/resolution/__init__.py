"""Build document resolution.

Architecture::

    models.py       pydantic schemas (BuildDocument, ExtendedDocument, PartialDocument)
    scanner.py      document discovery + loading (.py / .yaml / .json / .toml)
    classifier.py   kind detection + structural validation
    conflicts.py    enable/disable conflict reconciliation
    registry.py     pipeline-local BuildRegistry
    partials.py     include merging
    extensions.py   extends folding (memoized, cycle-checked)
    validator.py    self-conflict fix-up, schema + uniqueness checks
    pipeline.py     load_builds / resolve_builds
"""

from .conflicts import Conflict, ReconcileResult, reconcile, reconcile_document
from .models import (
    BasedOn,
    BuildDocument,
    BuildMeta,
    ClassifiedDocument,
    Configuration,
    DocumentKind,
    ExtendedDocument,
    PartialDocument,
    option_name,
)
from .pipeline import (
    BuildSet,
    build_registry,
    load_build_set,
    load_builds,
    resolve_build_set,
    resolve_builds,
    resolve_documents,
)
from .registry import BuildRegistry, ResolutionState

__all__ = [
    "BasedOn",
    "BuildDocument",
    "BuildMeta",
    "BuildRegistry",
    "BuildSet",
    "ClassifiedDocument",
    "Configuration",
    "Conflict",
    "DocumentKind",
    "ExtendedDocument",
    "PartialDocument",
    "ReconcileResult",
    "ResolutionState",
    "build_registry",
    "load_build_set",
    "load_builds",
    "option_name",
    "reconcile",
    "reconcile_document",
    "resolve_build_set",
    "resolve_builds",
    "resolve_documents",
]
