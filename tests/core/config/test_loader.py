"""Tests for buildset.core.config.loader — project root and env file discovery."""

from __future__ import annotations

from pathlib import Path

from buildset.core.config.loader import ENV_FILE_NAMES, discover_env_files, find_project_root


# ── find_project_root ────────────────────────────────────────────────────


class TestFindProjectRoot:
    def test_finds_pyproject_toml(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").touch()
        sub = tmp_path / "a" / "b"
        sub.mkdir(parents=True)
        assert find_project_root(sub) == tmp_path.resolve()

    def test_finds_git_dir(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        assert find_project_root(tmp_path) == tmp_path.resolve()

    def test_finds_setup_py(self, tmp_path: Path):
        (tmp_path / "setup.py").touch()
        assert find_project_root(tmp_path) == tmp_path.resolve()

    def test_nearest_marker_wins(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").touch()
        inner = tmp_path / "firmware"
        inner.mkdir()
        (inner / ".git").mkdir()
        assert find_project_root(inner) == inner.resolve()


# ── discover_env_files ───────────────────────────────────────────────────


class TestDiscoverEnvFiles:
    def test_empty_directory(self, tmp_path: Path):
        assert discover_env_files(tmp_path) == []

    def test_load_order(self, tmp_path: Path):
        for name in reversed(ENV_FILE_NAMES):
            (tmp_path / name).write_text("BUILDSET_LOG_LEVEL=DEBUG")
        files = discover_env_files(tmp_path)
        assert [f.name for f in files] == [".env.base", ".env.local", ".env"]

    def test_skips_directories(self, tmp_path: Path):
        (tmp_path / ".env").mkdir()
        (tmp_path / ".env.local").write_text("X=1")
        assert discover_env_files(tmp_path) == [tmp_path.resolve() / ".env.local"]
