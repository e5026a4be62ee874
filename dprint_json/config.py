"""
Configuration management using pydantic-settings.
Loads from config.yaml, .env, and environment variables.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dprint_json.utils.logging import log_warning

# Load .env file at module import
load_dotenv()

logger = logging.getLogger(__name__)


class PluginSettings(BaseSettings):
    """Location of the compiled plugin module."""

    model_config = SettingsConfigDict(
        env_prefix="PLUGIN_",
        extra="ignore",
    )

    wasm_path: Path = Field(default=Path("./plugin.wasm"), description="Path to the compiled plugin (.wasm)")


class FormatSettings(BaseSettings):
    """Configuration handed to the plugin before formatting."""

    model_config = SettingsConfigDict(
        env_prefix="FORMAT_",
        extra="ignore",
    )

    line_width: int | None = Field(default=None, description="Global lineWidth (None = plugin default)")
    indent_width: int | None = Field(default=None, description="Global indentWidth (None = plugin default)")
    use_tabs: bool | None = Field(default=None, description="Global useTabs (None = plugin default)")
    new_line_kind: str | None = Field(default=None, description="Global newLineKind: auto, lf, crlf or system")
    plugin_config: dict[str, Any] = Field(
        default_factory=dict,
        description="Plugin specific configuration (the \"json\" section of a dprint config)",
    )


class GitHubSettings(BaseSettings):
    """GitHub API settings for the changelog aggregator."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        extra="ignore",
    )

    api_url: str = Field(default="https://api.github.com", description="GitHub REST API base URL")
    repo: str = Field(default="dprint/dprint-plugin-json", description="Repository as owner/name")
    branch: str = Field(default="main", description="Branch used when the target tag does not exist yet")
    token: str = Field(default="", description="API token (env var GITHUB_TOKEN only)")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")


class ReleaseSettings(BaseSettings):
    """Values interpolated into the release notes template."""

    model_config = SettingsConfigDict(
        env_prefix="RELEASE_",
        extra="ignore",
    )

    plugin_url_base: str = Field(default="https://plugins.dprint.dev", description="Plugin download host")
    plugin_name: str = Field(default="json", description="Plugin name used in the download URL")
    config_key: str = Field(default="json", description="Configuration key of the plugin")
    npm_package: str = Field(default="@dprint/json", description="npm package of the plugin")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    plugin: PluginSettings = Field(default_factory=PluginSettings)
    format: FormatSettings = Field(default_factory=FormatSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    release: ReleaseSettings = Field(default_factory=ReleaseSettings)

    debug: bool = Field(default=False)

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Settings":
        """Load settings from config.yaml and environment."""
        config_data: dict[str, Any] = {}

        if config_path is None:
            config_path = Path("config.yaml")

        if config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                yaml_content: Any = yaml.safe_load(f)
                yaml_config: dict[str, Any] = yaml_content or {}

            if "plugin" in yaml_config:
                config_data["plugin"] = PluginSettings(**yaml_config["plugin"])  # type: ignore
            if "format" in yaml_config:
                config_data["format"] = FormatSettings(**yaml_config["format"])  # type: ignore
            if "release" in yaml_config:
                config_data["release"] = ReleaseSettings(**yaml_config["release"])  # type: ignore
            if "github" in yaml_config:
                github_yaml = yaml_config["github"]
                # Tokens never live in config files
                if "token" in github_yaml:
                    log_warning(
                        "token found in config.yaml - this setting is env-var only. "
                        "Use the GITHUB_TOKEN environment variable instead. Ignoring YAML value.",
                        logger=logger,
                    )
                    del github_yaml["token"]
                config_data["github"] = GitHubSettings(**github_yaml)  # type: ignore
            if "debug" in yaml_config:
                config_data["debug"] = yaml_config["debug"]

        if "github" not in config_data:
            config_data["github"] = GitHubSettings()

        return cls(**config_data)  # type: ignore


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Path | None = None) -> Settings:
    """Reload settings from config."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
