"""
Plugin CLI commands.

- verify: Load the plugin from a buffer and from a path and check known output
- format: Format a single file
- info: Show plugin metadata and configuration diagnostics
"""

from pathlib import Path

import typer

from dprint_json.cli.common import Icons, console, get_formatter, resolve_plugin_path, ui
from dprint_json.plugin import PluginError, verify_plugin

plugin_app = typer.Typer(help="🧩 Compiled plugin commands")


@plugin_app.command("verify")
def plugin_verify(
    path: Path | None = typer.Option(None, "--path", "-p", help="Plugin .wasm file (default: PLUGIN_WASM_PATH)"),
):
    """Verify the plugin loads and formats identically from a buffer and a path."""
    plugin_path = resolve_plugin_path(path)
    ui.header("Plugin Verification", subtitle=str(plugin_path), icon=Icons.PLUGIN)

    try:
        with ui.spinner("Loading and formatting..."):
            report = verify_plugin(plugin_path.read_bytes(), plugin_path)
    except AssertionError as e:
        ui.error("Verification failed", details=str(e))
        raise typer.Exit(1)
    except PluginError as e:
        ui.error("Plugin error", details=str(e))
        raise typer.Exit(1)

    ui.success(f"{report.plugin_name} [version]{report.plugin_version}[/version] (schema {report.schema_version})")

    table = ui.create_table("Outputs", columns=["File", "Input", "Load / Shape", "Output"])
    for result in report.results:
        for label, output in result.outputs.items():
            table.add_row(result.case.file_path, repr(result.case.file_text), label, repr(output))
    console.print(table)

    ui.success("Buffer and path loads are equivalent")


@plugin_app.command("info")
def plugin_info(
    path: Path | None = typer.Option(None, "--path", "-p", help="Plugin .wasm file (default: PLUGIN_WASM_PATH)"),
    license_text: bool = typer.Option(False, "--license", help="Print the embedded license text"),
):
    """Show plugin info, resolved config and config diagnostics."""
    plugin_path = resolve_plugin_path(path)

    try:
        with ui.spinner("Loading plugin..."):
            formatter = get_formatter(plugin_path)
            info = formatter.get_plugin_info()
            diagnostics = formatter.get_config_diagnostics()
            resolved = formatter.get_resolved_config()
    except PluginError as e:
        ui.error("Plugin error", details=str(e))
        raise typer.Exit(1)

    ui.header(info.name, subtitle=f"v{info.version}", icon=Icons.PLUGIN)
    console.print(
        ui.key_value_table(
            {
                "Schema version": formatter.schema_version,
                "Config key": info.config_key,
                "Extensions": ", ".join(info.file_extensions) or None,
                "File names": ", ".join(info.file_names) or None,
                "Help": info.help_url or None,
                "Config schema": info.config_schema_url or None,
                "Update URL": info.update_url,
            }
        )
    )

    ui.section("Resolved Config", icon=Icons.GEAR)
    console.print(ui.key_value_table(resolved))

    if diagnostics:
        ui.section("Config Diagnostics", icon=Icons.WARNING)
        for diagnostic in diagnostics:
            ui.warning(str(diagnostic))

    if license_text:
        ui.section("License", icon=Icons.FILE)
        console.print(formatter.get_license_text(), markup=False, highlight=False)

    if diagnostics:
        raise typer.Exit(1)


@plugin_app.command("format")
def plugin_format(
    file: Path = typer.Argument(..., help="File to format"),
    path: Path | None = typer.Option(None, "--path", "-p", help="Plugin .wasm file (default: PLUGIN_WASM_PATH)"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the result back instead of printing it"),
):
    """Format a single file with the plugin."""
    if not file.is_file():
        ui.error("File not found", details=str(file))
        raise typer.Exit(1)

    plugin_path = resolve_plugin_path(path)
    file_text = file.read_text(encoding="utf-8")

    try:
        formatter = get_formatter(plugin_path)
        result = formatter.format_text(str(file), file_text)
    except PluginError as e:
        ui.error("Format failed", details=str(e))
        raise typer.Exit(1)

    if not write:
        typer.echo(result, nl=False)
    elif result == file_text:
        ui.success(f"[path]{file}[/path] already formatted")
    else:
        file.write_text(result, encoding="utf-8")
        ui.success(f"Formatted [path]{file}[/path]")
