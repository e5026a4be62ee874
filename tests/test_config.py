"""
Tests for configuration management module.

Tests cover:
- Default settings initialization
- Environment variable overrides
- Settings loading from YAML
- Token handling (env only)
- Settings reload functionality
"""

from pathlib import Path

import pytest
import yaml

from dprint_json.config import (
    FormatSettings,
    GitHubSettings,
    PluginSettings,
    ReleaseSettings,
    Settings,
    get_settings,
    reload_settings,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment variables that would override defaults."""
    for name in (
        "PLUGIN_WASM_PATH",
        "FORMAT_LINE_WIDTH",
        "FORMAT_USE_TABS",
        "GITHUB_TOKEN",
        "GITHUB_REPO",
        "GITHUB_BRANCH",
        "RELEASE_PLUGIN_NAME",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


def _write_yaml(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestSubSettings:
    """Test defaults and env overrides of each settings group."""

    def test_plugin_defaults(self, clean_env):
        assert PluginSettings().wasm_path == Path("./plugin.wasm")

    def test_plugin_env_override(self, clean_env, monkeypatch):
        monkeypatch.setenv("PLUGIN_WASM_PATH", "/opt/plugins/json.wasm")
        assert PluginSettings().wasm_path == Path("/opt/plugins/json.wasm")

    def test_format_defaults(self, clean_env):
        settings = FormatSettings()
        assert settings.line_width is None
        assert settings.use_tabs is None
        assert settings.plugin_config == {}

    def test_format_env_override(self, clean_env, monkeypatch):
        monkeypatch.setenv("FORMAT_LINE_WIDTH", "100")
        monkeypatch.setenv("FORMAT_USE_TABS", "true")
        settings = FormatSettings()
        assert settings.line_width == 100
        assert settings.use_tabs is True

    def test_github_defaults(self, clean_env):
        settings = GitHubSettings()
        assert settings.api_url == "https://api.github.com"
        assert settings.repo == "dprint/dprint-plugin-json"
        assert settings.branch == "main"
        assert settings.token == ""

    def test_github_token_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        assert GitHubSettings().token == "ghp_test"

    def test_release_defaults(self, clean_env):
        settings = ReleaseSettings()
        assert settings.plugin_url_base == "https://plugins.dprint.dev"
        assert settings.plugin_name == "json"
        assert settings.npm_package == "@dprint/json"


class TestSettingsLoad:
    """Test loading from config.yaml."""

    def test_missing_file_uses_defaults(self, clean_env, tmp_path):
        settings = Settings.load(tmp_path / "config.yaml")
        assert settings.plugin.wasm_path == Path("./plugin.wasm")
        assert settings.debug is False

    def test_empty_file(self, clean_env, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert Settings.load(path).github.repo == "dprint/dprint-plugin-json"

    def test_yaml_sections(self, clean_env, tmp_path):
        path = _write_yaml(
            tmp_path / "config.yaml",
            {
                "plugin": {"wasm_path": "target/plugin.wasm"},
                "format": {"line_width": 80, "plugin_config": {"trailingCommas": "never"}},
                "github": {"repo": "example/fork", "branch": "release"},
                "release": {"plugin_name": "json-fork"},
                "debug": True,
            },
        )

        settings = Settings.load(path)

        assert settings.plugin.wasm_path == Path("target/plugin.wasm")
        assert settings.format.line_width == 80
        assert settings.format.plugin_config == {"trailingCommas": "never"}
        assert settings.github.repo == "example/fork"
        assert settings.github.branch == "release"
        assert settings.release.plugin_name == "json-fork"
        assert settings.debug is True

    def test_token_in_yaml_is_ignored(self, clean_env, tmp_path, caplog):
        """Test tokens are never read from config files."""
        path = _write_yaml(tmp_path / "config.yaml", {"github": {"token": "from-yaml"}})

        with caplog.at_level("WARNING"):
            settings = Settings.load(path)

        assert settings.github.token == ""
        assert "env-var only" in caplog.text

    def test_token_from_env_survives_yaml(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")
        path = _write_yaml(tmp_path / "config.yaml", {"github": {"repo": "example/fork"}})

        assert Settings.load(path).github.token == "ghp_env"


class TestGlobalSettings:
    """Test the cached global instance."""

    def test_get_settings_cached(self, clean_env):
        assert get_settings() is get_settings()

    def test_reload_settings(self, clean_env, tmp_path):
        first = get_settings()
        path = _write_yaml(tmp_path / "config.yaml", {"github": {"branch": "next"}})

        reloaded = reload_settings(path)

        assert reloaded is not first
        assert get_settings() is reloaded
        assert reloaded.github.branch == "next"
