"""Tests for buildset.resolution.classifier."""

from __future__ import annotations

import pytest

from buildset.core.errors import SchemaError
from buildset.resolution.classifier import classify_document, classify_documents, detect_kind
from buildset.resolution.models import BuildDocument, DocumentKind, ExtendedDocument, PartialDocument


class TestDetectKind:
    def test_partial_key_wins(self):
        assert detect_kind({"partial": True, "extends": "a"}) is DocumentKind.PARTIAL

    def test_extends(self):
        assert detect_kind({"extends": "a"}) is DocumentKind.EXTENDED

    def test_everything_else_is_full(self):
        assert detect_kind({"board_env": "x"}) is DocumentKind.FULL
        assert detect_kind(None) is DocumentKind.FULL
        assert detect_kind(["not", "a", "mapping"]) is DocumentKind.FULL


class TestClassifyDocument:
    def test_full(self, full_build):
        classified = classify_document("a.yaml", full_build("a"))
        assert classified.name == "a.yaml"
        assert classified.kind is DocumentKind.FULL
        assert isinstance(classified.document, BuildDocument)

    def test_extended(self, extended_build):
        classified = classify_document("b.yaml", extended_build("b", "a.yaml"))
        assert classified.kind is DocumentKind.EXTENDED
        assert isinstance(classified.document, ExtendedDocument)

    def test_partial(self, partial):
        classified = classify_document("p.yaml", partial(configuration={"enable": ["X"]}))
        assert classified.kind is DocumentKind.PARTIAL
        assert isinstance(classified.document, PartialDocument)

    def test_schema_error_names_document_and_field(self, full_build):
        raw = full_build("a")
        raw["meta"] = {"stable_name": "a"}

        with pytest.raises(SchemaError) as exc_info:
            classify_document("creality/a.yaml", raw)

        error = exc_info.value
        assert error.document == "creality/a.yaml"
        assert error.field == "meta.nightly_name"
        assert error.message.startswith("Invalid build creality/a.yaml -> meta.nightly_name -> ")

    def test_non_mapping_document(self):
        with pytest.raises(SchemaError) as exc_info:
            classify_document("empty.yaml", None)
        assert exc_info.value.document == "empty.yaml"


class TestClassifyDocuments:
    def test_preserves_order(self, full_build, partial):
        classified = classify_documents({"z.yaml": full_build("z"), "a.yaml": partial()})
        assert [c.name for c in classified] == ["z.yaml", "a.yaml"]

    def test_first_failure_aborts(self, full_build):
        with pytest.raises(SchemaError, match="bad.yaml"):
            classify_documents({"ok.yaml": full_build("ok"), "bad.yaml": {"board_env": ""}})
