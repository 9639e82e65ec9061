"""Tests for buildset.resolution.registry."""

from __future__ import annotations

import pytest

from buildset.resolution.classifier import classify_document
from buildset.resolution.models import DocumentKind
from buildset.resolution.registry import BuildRegistry, ResolutionState


@pytest.fixture
def registry(full_build, extended_build, partial) -> BuildRegistry:
    return BuildRegistry(
        [
            classify_document("base.yaml", full_build("base")),
            classify_document("child.yaml", extended_build("child", "base.yaml")),
            classify_document("common.yaml", partial()),
        ]
    )


class TestBuildRegistry:
    def test_initial_states(self, registry):
        assert registry.state("base.yaml") is ResolutionState.RESOLVED
        assert registry.state("child.yaml") is ResolutionState.UNRESOLVED
        assert registry.state("common.yaml") is ResolutionState.UNRESOLVED

    def test_order_and_kinds(self, registry):
        assert registry.names() == ["base.yaml", "child.yaml", "common.yaml"]
        assert [c.name for c in registry.of_kind(DocumentKind.PARTIAL)] == ["common.yaml"]
        assert len(registry) == 3

    def test_duplicate_add_rejected(self, registry, full_build):
        with pytest.raises(ValueError, match="already registered"):
            registry.add(classify_document("base.yaml", full_build("base")))

    def test_replace_keeps_position(self, registry, full_build):
        registry.replace(classify_document("base.yaml", full_build("base", board_env="other")))
        assert registry.names()[0] == "base.yaml"
        assert registry["base.yaml"].document.board_env == "other"

    def test_replace_unknown(self, registry, full_build):
        with pytest.raises(KeyError):
            registry.replace(classify_document("nope.yaml", full_build("nope")))

    def test_remove_remembers_kind(self, registry):
        registry.remove("common.yaml")
        assert "common.yaml" not in registry
        assert registry.kind_of("common.yaml") is DocumentKind.PARTIAL
        assert registry.kind_of("missing.yaml") is None

    def test_iteration_tolerates_removal(self, registry):
        for classified in registry:
            if classified.kind is DocumentKind.PARTIAL:
                registry.remove(classified.name)
        assert registry.names() == ["base.yaml", "child.yaml"]
