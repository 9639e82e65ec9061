"""Final validation of the resolved build set.

After partial and extension resolution every remaining entry must be a full
build.  Each one is self-reconciled (an option both enabled and disabled in
the same document ends up disabled), re-validated against the full schema,
and finally every artifact name is checked for global uniqueness.
"""

from __future__ import annotations

from collections import defaultdict

import pydantic

from buildset.core.errors import BuildSetError, UniquenessError
from buildset.core.logging import get_logger
from buildset.resolution.classifier import schema_error
from buildset.resolution.conflicts import reconcile_document
from buildset.resolution.models import BuildDocument, DocumentKind
from buildset.resolution.registry import BuildRegistry

logger = get_logger(__name__)

ASSET_NAME_FIELDS = ("stable_name", "nightly_name")


def validate_builds(registry: BuildRegistry) -> dict[str, BuildDocument]:
    """Return the validated ``{name: BuildDocument}`` build set."""
    builds: dict[str, BuildDocument] = {}

    for classified in registry:
        document = classified.document
        if classified.kind is DocumentKind.EXTENDED:
            raise BuildSetError(
                f"Invalid build {classified.name}, {classified.kind.value} document left unresolved"
            )
        if classified.kind is DocumentKind.PARTIAL:
            # never included, so it has to stand on its own
            document = _as_full_build(classified.name, document.model_dump(exclude={"partial"}))

        document, conflicts = reconcile_document(
            document,
            document,
            name=classified.name,
            other_name=classified.name,
            self_check=True,
        )
        registry.record_conflicts(conflicts)
        builds[classified.name] = _as_full_build(classified.name, document.model_dump())

    for field in ASSET_NAME_FIELDS:
        check_unique_asset_names(builds, field)

    return builds


def _as_full_build(name: str, payload: dict) -> BuildDocument:
    try:
        return BuildDocument.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise schema_error(name, exc) from exc


def check_unique_asset_names(builds: dict[str, BuildDocument], field: str) -> None:
    """Raise :class:`UniquenessError` when two builds share ``meta.<field>``."""
    owners: dict[str, list[str]] = defaultdict(list)
    for name, build in builds.items():
        owners[getattr(build.meta, field)].append(name)

    for value, documents in owners.items():
        if len(documents) > 1:
            raise UniquenessError(value, documents, field=f"meta.{field}")
