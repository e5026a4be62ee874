#!/usr/bin/env python3
"""
CLI for the dprint JSON plugin tooling.

This is the main entry point that assembles all subcommands from
the dprint_json/cli/ modules.
"""

import logging

import typer
from rich.traceback import install

# Install Rich traceback handler for better error display
install(show_locals=False, width=120, word_wrap=True)

from dprint_json import __version__
from dprint_json.cli.plugin import plugin_app
from dprint_json.cli.release import release_app
from dprint_json.config import get_settings
from dprint_json.logging import configure_logging

# Create main app
app = typer.Typer(
    name="dprint-json",
    help="🧩 Load, verify and release the dprint JSON plugin",
    rich_markup_mode="rich",
)

# Register sub-apps
app.add_typer(plugin_app, name="plugin")
app.add_typer(release_app, name="release")

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Configure logging before any subcommand runs."""
    settings = get_settings()
    level = "debug" if debug or settings.debug else "warning"
    configure_logging(level=level, rich_tracebacks=False)
    logger.debug("Logging configured at %s", level)


if __name__ == "__main__":
    app()
