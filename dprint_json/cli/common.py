"""
Common utilities shared across CLI commands.

This module provides:
- Plugin path resolution
- A configured formatter factory
- Shared console and UI instances
"""

import logging
from pathlib import Path

import typer

from dprint_json.config import get_settings
from dprint_json.plugin import Formatter, GlobalConfiguration, get_path, load_from_path
from dprint_json.utils.ui import Icons, console, ui

__all__ = [
    "console",
    "get_formatter",
    "Icons",
    "logger",
    "resolve_plugin_path",
    "ui",
]

logger = logging.getLogger(__name__)


def resolve_plugin_path(path: Path | None) -> Path:
    """Resolve the plugin path, using the configured one if not provided.

    Args:
        path: Explicit path, or None to use PLUGIN_WASM_PATH

    Returns:
        Path to an existing plugin file

    Raises:
        typer.Exit: If no plugin file exists
    """
    if path is not None:
        if not path.is_file():
            ui.error("Plugin module not found", details=str(path))
            raise typer.Exit(1)
        return path

    try:
        return get_path()
    except FileNotFoundError as e:
        ui.error("Plugin module not found", details=str(e))
        raise typer.Exit(1)


def get_formatter(path: Path) -> Formatter:
    """Get a formatter loaded from ``path`` with the configured format settings.

    Returns:
        Formatter with global and plugin config applied
    """
    settings = get_settings().format
    formatter = load_from_path(path)
    formatter.set_config(
        GlobalConfiguration(
            line_width=settings.line_width,
            indent_width=settings.indent_width,
            use_tabs=settings.use_tabs,
            new_line_kind=settings.new_line_kind,
        ),
        settings.plugin_config,
    )
    return formatter
