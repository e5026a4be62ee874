"""
Pydantic models for the plugin host.

Field aliases follow the camelCase JSON the plugin reads and writes.
"""

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class BufferSource(BaseModel):
    """Plugin bytes already resident in memory."""

    kind: Literal["buffer"] = "buffer"
    data: bytes


class PathSource(BaseModel):
    """Plugin bytes that must be read from a file first."""

    kind: Literal["path"] = "path"
    path: Path


ModuleSource = Annotated[BufferSource | PathSource, Field(discriminator="kind")]


class FormatRequest(BaseModel):
    """Structured form of a format request."""

    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(alias="filePath")
    file_text: str = Field(alias="fileText")
    override_config: dict[str, Any] | None = Field(default=None, alias="overrideConfig")


class GlobalConfiguration(BaseModel):
    """Configuration shared by all dprint plugins."""

    model_config = ConfigDict(populate_by_name=True)

    line_width: int | None = Field(default=None, alias="lineWidth")
    indent_width: int | None = Field(default=None, alias="indentWidth")
    use_tabs: bool | None = Field(default=None, alias="useTabs")
    new_line_kind: Literal["auto", "lf", "crlf", "system"] | None = Field(default=None, alias="newLineKind")

    def to_plugin_dict(self) -> dict[str, Any]:
        """Serialize the way the plugin expects: camelCase, unset keys omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class PluginInfo(BaseModel):
    """Metadata reported by the plugin."""

    name: str
    version: str
    config_key: str = Field(alias="configKey")
    file_extensions: list[str] = Field(default_factory=list, alias="fileExtensions")
    file_names: list[str] = Field(default_factory=list, alias="fileNames")
    help_url: str = Field(default="", alias="helpUrl")
    config_schema_url: str = Field(default="", alias="configSchemaUrl")
    update_url: str | None = Field(default=None, alias="updateUrl")


class ConfigurationDiagnostic(BaseModel):
    """A problem the plugin found in its configuration."""

    property_name: str = Field(alias="propertyName")
    message: str

    def __str__(self) -> str:
        return f"{self.property_name}: {self.message}"
