"""End-to-end tests for buildset.resolution.pipeline."""

from __future__ import annotations

from pathlib import Path

import pytest

from buildset import quote
from buildset.core.config import BuildSetSettings
from buildset.core.errors import (
    BuildReferenceError,
    CyclicReferenceError,
    DocumentLoadError,
    SchemaError,
    UniquenessError,
)
from buildset.resolution import (
    BuildDocument,
    load_build_set,
    load_builds,
    resolve_build_set,
    resolve_builds,
    resolve_documents,
)


# ── In-memory scenarios ──────────────────────────────────────────────────


class TestScenarios:
    def test_includer_enable_beats_partial_disable(self, full_build, partial):
        builds = resolve_documents(
            {
                "common": partial(configuration={"disable": ["FEATURE_A"]}),
                "alpha": full_build("alpha", include="common", configuration={"enable": ["FEATURE_A"]}),
            }
        )

        assert list(builds) == ["alpha"]
        assert builds["alpha"].configuration.enable == ["FEATURE_A"]
        assert "FEATURE_A" not in builds["alpha"].configuration.disable

    def test_board_env_inherited(self, full_build, extended_build):
        builds = resolve_documents(
            {
                "base": full_build("base", board_env="mega2560"),
                "child": extended_build("child", "base"),
            }
        )
        assert builds["child"].board_env == "mega2560"

    def test_child_parameter_overrides_parent(self, full_build, extended_build):
        builds = resolve_documents(
            {
                "base": full_build("base", configuration={"enable": [["OPT_X", 5]]}),
                "child": extended_build("child", "base", configuration={"enable": [["OPT_X", 9]]}),
            }
        )
        assert builds["child"].configuration.enable == [("OPT_X", 9)]
        assert builds["base"].configuration.enable == [("OPT_X", 5)]

    def test_parent_include_and_child_override(self, full_build, extended_build, partial):
        builds = resolve_documents(
            {
                "common/probe": partial(configuration={"enable": ["BLTOUCH", ["Z_MIN_PROBE_REPEATABILITY_TEST", True]]}),
                "base": full_build("base", include="common/probe"),
                "child": extended_build(
                    "child",
                    "base",
                    configuration={"disable": ["BLTOUCH"], "enable": [["CUSTOM_MACHINE_NAME", quote("Ender 3")]]},
                ),
            }
        )

        child = builds["child"].configuration
        assert child.enable == [("Z_MIN_PROBE_REPEATABILITY_TEST", True), ("CUSTOM_MACHINE_NAME", quote("Ender 3"))]
        assert child.disable == ["BLTOUCH"]
        assert builds["base"].configuration.enable[0] == "BLTOUCH"

    def test_conflicts_collected(self, full_build):
        build_set = resolve_build_set(
            {"a": full_build("a", configuration={"enable": ["X"], "disable": ["X"]})}
        )
        assert len(build_set) == 1
        assert [c.describe() for c in build_set.conflicts] == [
            'Build a enables AND disables configuration => "X". It will be disabled'
        ]


class TestFatalErrors:
    def test_duplicate_asset_name(self, full_build, extended_build):
        with pytest.raises(UniquenessError, match="base-"):
            resolve_documents(
                {
                    "base": full_build("base"),
                    "copy": {**extended_build("copy", "base"), "meta": full_build("base")["meta"]},
                }
            )

    def test_missing_parent(self, extended_build):
        with pytest.raises(BuildReferenceError):
            resolve_documents({"child": extended_build("child", "base")})

    def test_cycle(self, extended_build):
        with pytest.raises(CyclicReferenceError):
            resolve_documents({"a": extended_build("a", "b"), "b": extended_build("b", "a")})

    def test_schema(self, full_build):
        raw = full_build("a")
        raw["unknown"] = 1
        with pytest.raises(SchemaError, match="Invalid build a -> unknown"):
            resolve_documents({"a": raw})

    def test_partial_nothing_includes(self, full_build, partial):
        with pytest.raises(SchemaError, match="Invalid build lib/unused.yaml -> board_env"):
            resolve_documents(
                {
                    "a.yaml": full_build("a"),
                    "lib/unused.yaml": partial(configuration={"enable": ["X"]}),
                }
            )


# ── From disk ────────────────────────────────────────────────────────────


@pytest.fixture
def tree(write_tree, full_build, extended_build, partial) -> Path:
    return write_tree(
        {
            "common/sensors.yaml": partial(configuration={"enable": ["BLTOUCH"]}),
            "creality/ender3.yaml": full_build("ender3", include="common/sensors.yaml"),
            "creality/ender3_v2.json": extended_build(
                "ender3_v2", "creality/ender3.yaml", board_env="STM32F103RE_creality"
            ),
            "anet/a8.py": (
                "async def build():\n"
                "    return {\n"
                '        "extends": "creality/ender3.yaml",\n'
                '        "meta": {"stable_name": "a8-{{marlin_version}}", "nightly_name": "a8-nightly"},\n'
                '        "only": "nightly",\n'
                "    }\n"
            ),
        }
    )


class TestFromDisk:
    @pytest.mark.asyncio
    async def test_load_build_set(self, tree: Path):
        build_set = await load_build_set(tree)

        assert sorted(build_set.builds) == [
            "anet/a8.py",
            "creality/ender3.yaml",
            "creality/ender3_v2.json",
        ]
        v2 = build_set.builds["creality/ender3_v2.json"]
        assert v2.board_env == "STM32F103RE_creality"
        assert v2.configuration.enable == ["BLTOUCH"]
        assert build_set.builds["anet/a8.py"].only == "nightly"

    @pytest.mark.asyncio
    async def test_load_builds_uses_settings(self, tree: Path):
        settings = BuildSetSettings(_env_file=None, project_root=tree.parent)
        builds = await load_builds(settings=settings)
        assert "creality/ender3.yaml" in builds

    def test_resolve_builds_sync(self, tree: Path):
        builds = resolve_builds(tree)
        assert all(isinstance(b, BuildDocument) for b in builds.values())

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(DocumentLoadError):
            resolve_builds(tmp_path / "absent")
