"""
Release CLI commands.

- notes: Render release notes for a version from the GitHub changelog
"""

from pathlib import Path

import typer

from dprint_json.cli.common import ui
from dprint_json.config import get_settings
from dprint_json.release import ChangeLogError, GitHubChangeLog, generate_release_notes

release_app = typer.Typer(help="📝 Release commands")


@release_app.command("notes")
def release_notes(
    version: str = typer.Argument(..., help="Version being released (e.g. 0.9.0)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout"),
):
    """Generate release notes for a version."""
    settings = get_settings()

    try:
        with GitHubChangeLog.from_settings() as changelog:
            text = generate_release_notes(version, changelog, settings.release)
    except ChangeLogError as e:
        ui.error("Changelog generation failed", details=str(e))
        raise typer.Exit(1)

    if output:
        output.write_text(text, encoding="utf-8")
        ui.success(f"Release notes written to [path]{output}[/path]")
    else:
        typer.echo(text)
