"""
CLI module.

Subcommands organized by concern:
- plugin: load and verify the compiled plugin
- release: release notes
"""

from dprint_json.cli.common import console, get_formatter, resolve_plugin_path, ui

__all__ = [
    "console",
    "get_formatter",
    "resolve_plugin_path",
    "ui",
]
