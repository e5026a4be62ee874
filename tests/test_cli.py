"""Tests for CLI structure and commands.

Tests the CLI with:
- plugin sub-app commands (verify, info, format)
- release sub-app commands (notes)
"""

# Import the CLI app
import sys
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent))
import dprint_json.cli.plugin as plugin_cli
import dprint_json.cli.release as release_cli
from cli import app
from dprint_json import __version__
from dprint_json.plugin import PluginError
from dprint_json.release import ChangeLogAuthError

runner = CliRunner()


def _flat(output: str) -> str:
    """Collapse whitespace so Rich line wrapping does not affect assertions."""
    return " ".join(output.split())


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    """Run from an empty directory so no config.yaml or plugin.wasm is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PLUGIN_WASM_PATH", raising=False)
    monkeypatch.delenv("FORMAT_PLUGIN_CONFIG", raising=False)
    return tmp_path


class FakeChangeLog:
    """Stands in for GitHubChangeLog in the release commands."""

    text = "### Fixes\n\n* fix: keep comments (abc1234)"
    error: Exception | None = None

    @classmethod
    def from_settings(cls) -> "FakeChangeLog":
        return cls()

    def generate_change_log(self, version_to: str) -> str:
        if self.error is not None:
            raise self.error
        return self.text

    def __enter__(self) -> "FakeChangeLog":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        pass


class TestCLIStructure:
    """Test CLI structure and command registration."""

    def test_main_app_has_subapps(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "plugin" in result.output
        assert "release" in result.output

    def test_plugin_help_shows_commands(self):
        result = runner.invoke(app, ["plugin", "--help"])
        assert result.exit_code == 0
        assert "verify" in result.output
        assert "info" in result.output
        assert "format" in result.output

    def test_release_help_shows_commands(self):
        result = runner.invoke(app, ["release", "--help"])
        assert result.exit_code == 0
        assert "notes" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestPluginVerify:
    """Test plugin verify command."""

    def test_verify_explicit_path(self, in_tmp, plugin_path):
        result = runner.invoke(app, ["plugin", "verify", "--path", str(plugin_path)])
        assert result.exit_code == 0, result.output
        assert "dprint-plugin-json" in result.output
        assert "Buffer and path loads are equivalent" in result.output

    def test_verify_default_path(self, in_tmp, plugin_bytes):
        """Test ./plugin.wasm is used when no path is given."""
        (in_tmp / "plugin.wasm").write_bytes(plugin_bytes)

        result = runner.invoke(app, ["plugin", "verify"])

        assert result.exit_code == 0, result.output
        assert "Buffer and path loads are equivalent" in result.output

    def test_verify_env_path(self, in_tmp, plugin_path, monkeypatch):
        monkeypatch.setenv("PLUGIN_WASM_PATH", str(plugin_path))
        result = runner.invoke(app, ["plugin", "verify"])
        assert result.exit_code == 0, result.output

    def test_verify_missing_path(self, in_tmp):
        result = runner.invoke(app, ["plugin", "verify", "--path", str(in_tmp / "missing.wasm")])
        assert result.exit_code == 1
        assert "Plugin module not found" in result.output

    def test_verify_missing_default(self, in_tmp):
        result = runner.invoke(app, ["plugin", "verify"])
        assert result.exit_code == 1
        assert "Plugin module not found" in result.output

    def test_verify_corrupt_module(self, in_tmp):
        path = in_tmp / "corrupt.wasm"
        path.write_bytes(b"not wasm")

        result = runner.invoke(app, ["plugin", "verify", "--path", str(path)])

        assert result.exit_code == 1
        assert "Plugin error" in result.output

    def test_verify_invalid_plugin_info(self, in_tmp, plugin_path, monkeypatch):
        """Test base PluginError (e.g. bad plugin info) exits cleanly instead of a traceback."""

        def fail(data, path, cases=None):
            raise PluginError("Plugin returned invalid plugin info: missing name")

        monkeypatch.setattr(plugin_cli, "verify_plugin", fail)

        result = runner.invoke(app, ["plugin", "verify", "--path", str(plugin_path)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "invalid plugin info" in _flat(result.output)


class TestPluginInfo:
    """Test plugin info command."""

    def test_info(self, in_tmp, plugin_path):
        result = runner.invoke(app, ["plugin", "info", "--path", str(plugin_path)])
        assert result.exit_code == 0, result.output
        assert "dprint-plugin-json" in result.output
        assert "Resolved Config" in result.output
        assert "lineWidth" in result.output

    def test_info_license(self, in_tmp, plugin_path):
        result = runner.invoke(app, ["plugin", "info", "--path", str(plugin_path), "--license"])
        assert result.exit_code == 0, result.output
        assert "MIT License" in result.output

    def test_info_diagnostics_exit_code(self, in_tmp, plugin_v3_bytes):
        """Test config diagnostics from config.yaml are shown and fail the command."""
        path = in_tmp / "plugin.wasm"
        path.write_bytes(plugin_v3_bytes)
        (in_tmp / "config.yaml").write_text(
            yaml.safe_dump({"format": {"plugin_config": {"unknownProperty": True}}}),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["plugin", "info"])

        assert result.exit_code == 1
        assert "unknownProperty" in result.output


class TestPluginFormat:
    """Test plugin format command."""

    def test_format_stdout(self, in_tmp, plugin_path):
        target = in_tmp / "file.json"
        target.write_text("{ test: 2, }", encoding="utf-8")

        result = runner.invoke(app, ["plugin", "format", str(target), "--path", str(plugin_path)])

        assert result.exit_code == 0, result.output
        assert result.output == '{ "test": 2 }\n'
        assert target.read_text(encoding="utf-8") == "{ test: 2, }"

    def test_format_write(self, in_tmp, plugin_path):
        target = in_tmp / "file.json"
        target.write_text("{ test: 2, }", encoding="utf-8")

        result = runner.invoke(app, ["plugin", "format", str(target), "--path", str(plugin_path), "--write"])

        assert result.exit_code == 0, result.output
        assert target.read_text(encoding="utf-8") == '{ "test": 2 }\n'

    def test_format_write_unchanged(self, in_tmp, plugin_path):
        target = in_tmp / "file.json"
        target.write_text('{ "test": 2 }\n', encoding="utf-8")

        result = runner.invoke(app, ["plugin", "format", str(target), "-p", str(plugin_path), "-w"])

        assert result.exit_code == 0, result.output
        assert "already formatted" in _flat(result.output)

    def test_format_long_path_not_wrapped(self, in_tmp, plugin_path):
        """Test status lines stay on one line for deeply nested files."""
        nested = in_tmp / ("deeply_nested_directory_" * 3) / ("another_long_directory_name_" * 3)
        nested.mkdir(parents=True)
        target = nested / "file.json"
        target.write_text('{ "test": 2 }\n', encoding="utf-8")

        result = runner.invoke(app, ["plugin", "format", str(target), "-p", str(plugin_path), "-w"])

        assert result.exit_code == 0, result.output
        assert f"{target} already formatted" in result.output

    def test_format_rejected(self, in_tmp, plugin_path):
        target = in_tmp / "broken.json"
        target.write_text("{ not json", encoding="utf-8")

        result = runner.invoke(app, ["plugin", "format", str(target), "--path", str(plugin_path)])

        assert result.exit_code == 1
        assert "Format failed" in result.output
        assert "Unexpected token" in result.output

    def test_format_missing_file(self, in_tmp, plugin_path):
        result = runner.invoke(app, ["plugin", "format", str(in_tmp / "nope.json"), "--path", str(plugin_path)])
        assert result.exit_code == 1
        assert "File not found" in result.output


class TestReleaseNotes:
    """Test release notes command."""

    @pytest.fixture(autouse=True)
    def fake_changelog(self, monkeypatch):
        FakeChangeLog.error = None
        monkeypatch.setattr(release_cli, "GitHubChangeLog", FakeChangeLog)

    def test_notes_stdout(self, in_tmp):
        result = runner.invoke(app, ["release", "notes", "0.9.0"])

        assert result.exit_code == 0, result.output
        assert "plugins.dprint.dev/json-0.9.0.wasm" in result.output
        assert "## Changes" in result.output
        assert "* fix: keep comments (abc1234)" in result.output
        assert "## Install" in result.output
        assert "## JS Formatting API" in result.output

    def test_notes_to_file(self, in_tmp):
        output = in_tmp / "notes.md"

        result = runner.invoke(app, ["release", "notes", "0.9.0", "--output", str(output)])

        assert result.exit_code == 0, result.output
        text = output.read_text(encoding="utf-8")
        assert text.startswith("## Changes\n\n### Fixes")
        assert "plugins.dprint.dev/json-0.9.0.wasm" in text

    def test_notes_changelog_error(self, in_tmp):
        FakeChangeLog.error = ChangeLogAuthError("GitHub refused the request (403).", status_code=403)

        result = runner.invoke(app, ["release", "notes", "0.9.0"])

        assert result.exit_code == 1
        assert "Changelog generation failed" in result.output
