"""Tests for buildset.cli.config — config show."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from buildset.cli.config import app

runner = CliRunner()


class TestShowConfig:
    def test_json_format(self, monkeypatch):
        monkeypatch.setenv("BUILDSET_ASSET_SUFFIX", ".hex")
        result = runner.invoke(app, ["show", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["asset_suffix"] == ".hex"

    def test_env_format(self, monkeypatch):
        monkeypatch.setenv("BUILDSET_DEFAULT_CHANNEL", "nightly")
        result = runner.invoke(app, ["show", "--format", "env"])
        assert result.exit_code == 0
        assert "BUILDSET_DEFAULT_CHANNEL=nightly" in result.output

    def test_table_format(self):
        result = runner.invoke(app, ["show"])
        assert result.exit_code == 0
        assert "Document attribute" in result.output

    def test_invalid_settings_exit_1(self, monkeypatch):
        monkeypatch.setenv("BUILDSET_LOG_FORMAT", "xml")
        result = runner.invoke(app, ["show"])
        assert result.exit_code == 1
        assert "ConfigError" in result.output
