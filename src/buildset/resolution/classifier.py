"""Document classification and structural validation.

Each raw document is tagged exactly once:

* a mapping with a ``partial`` key is validated as :class:`PartialDocument`,
* else a mapping with an ``extends`` key as :class:`ExtendedDocument`,
* anything else as :class:`BuildDocument`.

Downstream stages dispatch on the :class:`DocumentKind` tag instead of
re-inspecting the document's shape.  The first validation failure aborts
classification with a :class:`~buildset.core.errors.SchemaError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic

from buildset.core.errors import SchemaError
from buildset.core.logging import get_logger
from buildset.resolution.models import (
    BuildDocument,
    ClassifiedDocument,
    DocumentKind,
    ExtendedDocument,
    PartialDocument,
)

logger = get_logger(__name__)

_SCHEMAS: dict[DocumentKind, type[pydantic.BaseModel]] = {
    DocumentKind.PARTIAL: PartialDocument,
    DocumentKind.EXTENDED: ExtendedDocument,
    DocumentKind.FULL: BuildDocument,
}


def detect_kind(raw: Any) -> DocumentKind:
    """Sniff the kind of a raw document from its keys."""
    if isinstance(raw, Mapping):
        if "partial" in raw:
            return DocumentKind.PARTIAL
        if "extends" in raw:
            return DocumentKind.EXTENDED
    return DocumentKind.FULL


def schema_error(name: str, exc: pydantic.ValidationError) -> SchemaError:
    """Build a :class:`SchemaError` from the first issue pydantic reports."""
    first = exc.errors()[0]
    path = ".".join(str(part) for part in first["loc"]) or None
    return SchemaError(name, path, first["msg"], cause=exc)


def classify_document(name: str, raw: Any) -> ClassifiedDocument:
    """Validate *raw* against the schema for its kind and tag it."""
    kind = detect_kind(raw)
    payload = dict(raw) if isinstance(raw, Mapping) else raw
    try:
        document = _SCHEMAS[kind].model_validate(payload)
    except pydantic.ValidationError as exc:
        raise schema_error(name, exc) from exc
    logger.debug("document_classified", document=name, kind=kind.value)
    return ClassifiedDocument(name=name, kind=kind, document=document)  # type: ignore[arg-type]


def classify_documents(raw_documents: Mapping[str, Any]) -> list[ClassifiedDocument]:
    """Classify every raw document, preserving input order."""
    return [classify_document(name, raw) for name, raw in raw_documents.items()]
