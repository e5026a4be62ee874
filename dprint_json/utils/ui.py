"""
Rich UI utilities for console output.

Provides consistent feedback across the CLI with spinners, panels,
tables, and styled messages.

Usage:
    from dprint_json.utils.ui import console, ui

    # Status messages
    ui.success("Plugin verified!")
    ui.error("Load failed", details="Not a WebAssembly module")
    ui.warning("Config diagnostics reported")

    # Spinners for operations
    with ui.spinner("Compiling plugin...") as status:
        load()
        status.update("Formatting...")
        run()

    # Styled headers
    ui.header("dprint JSON", subtitle="v0.9.0")
    ui.section("Plugin Info")

    # Tables
    table = ui.create_table("Cases", columns=["File", "Result"])
    table.add_row("file.json", "ok")
    console.print(table)
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from rich.box import DOUBLE, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# =============================================================================
# Custom Theme
# =============================================================================

PLUGIN_THEME = Theme(
    {
        # Status colors
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "debug": "dim",
        "muted": "dim white",
        # UI elements
        "header": "bold magenta",
        "subheader": "bold blue",
        "accent": "bold cyan",
        "highlight": "bold yellow",
        "link": "underline blue",
        # Data types
        "path": "cyan",
        "version": "bold green",
        "size": "blue",
    }
)

# =============================================================================
# Global Console
# =============================================================================

console = Console(theme=PLUGIN_THEME, highlight=True, emoji=True)

# =============================================================================
# Icons & Symbols
# =============================================================================


class Icons:
    """Unicode icons for consistent visual feedback."""

    # Status
    SUCCESS = "✓"
    ERROR = "✗"
    WARNING = "⚠"

    # System
    PLUGIN = "🧩"
    FILE = "📄"
    GEAR = "⚙️"


# =============================================================================
# UI Helper Class
# =============================================================================


class UIHelper:
    """Central UI helper for consistent visual output."""

    def __init__(self, console: Console):
        self.console = console

    # -------------------------------------------------------------------------
    # Status Messages
    # -------------------------------------------------------------------------

    def success(self, message: str, details: str | None = None, prefix: str = Icons.SUCCESS) -> None:
        """Print a success message."""
        text = Text()
        text.append(f"{prefix} ", style="success")
        text.append_text(Text.from_markup(message))
        if details:
            text.append(f"\n   {details}", style="muted")
        self.console.print(text)

    def error(self, message: str, details: str | None = None, prefix: str = Icons.ERROR) -> None:
        """Print an error message."""
        text = Text()
        text.append(f"{prefix} ", style="error")
        text.append_text(Text.from_markup(f"[error]{message}[/error]"))
        if details:
            text.append(f"\n   {details}", style="muted")
        self.console.print(text)

    def warning(self, message: str, details: str | None = None, prefix: str = Icons.WARNING) -> None:
        """Print a warning message."""
        text = Text()
        text.append(f"{prefix} ", style="warning")
        text.append_text(Text.from_markup(message))
        if details:
            text.append(f"\n   {details}", style="muted")
        self.console.print(text)

    # -------------------------------------------------------------------------
    # Headers & Sections
    # -------------------------------------------------------------------------

    def header(
        self,
        title: str,
        subtitle: str | None = None,
        icon: str | None = None,
        style: str = "header",
    ) -> None:
        """Print a styled header banner."""
        icon_str = f"{icon} " if icon else ""
        header_text = f"{icon_str}{title}"

        content = Text()
        content.append(header_text, style=style)
        if subtitle:
            content.append(f"\n{subtitle}", style="muted")

        panel = Panel(
            content,
            box=DOUBLE,
            border_style=style,
            padding=(1, 2),
        )
        self.console.print()
        self.console.print(panel)
        self.console.print()

    def section(self, title: str, icon: str | None = None, style: str = "subheader") -> None:
        """Print a section header with rule."""
        icon_str = f"{icon} " if icon else ""
        self.console.print()
        self.console.print(Rule(f"{icon_str}{title}", style=style, align="left"))
        self.console.print()

    # -------------------------------------------------------------------------
    # Progress & Spinners
    # -------------------------------------------------------------------------

    @contextmanager
    def spinner(
        self,
        message: str,
        spinner_name: str = "dots",
        style: str = "info",
    ) -> Generator[Status]:
        """Context manager for spinner with status updates."""
        with self.console.status(f"[{style}]{message}[/{style}]", spinner=spinner_name) as status:
            yield status

    # -------------------------------------------------------------------------
    # Tables
    # -------------------------------------------------------------------------

    def create_table(
        self,
        title: str | None = None,
        columns: list[str] | None = None,
        show_header: bool = True,
        show_lines: bool = False,
        box_style: Any = ROUNDED,
        header_style: str = "bold cyan",
        border_style: str = "dim",
        expand: bool = False,
    ) -> Table:
        """Create a styled table."""
        table = Table(
            title=title,
            show_header=show_header,
            show_lines=show_lines,
            box=box_style,
            header_style=header_style,
            border_style=border_style,
            expand=expand,
            row_styles=["", "dim"],
        )

        if columns:
            for col in columns:
                table.add_column(col)

        return table

    def key_value_table(
        self,
        data: dict[str, Any],
        title: str | None = None,
        key_style: str = "bold cyan",
        value_style: str = "white",
    ) -> Table:
        """Create a two-column key-value table."""
        table = Table(
            title=title,
            show_header=False,
            box=SIMPLE,
            padding=(0, 1),
            expand=False,
        )
        table.add_column("Key", style=key_style, no_wrap=True)
        table.add_column("Value", style=value_style)

        for key, value in data.items():
            table.add_row(key, str(value) if value is not None else "[dim]N/A[/dim]")

        return table


# =============================================================================
# Singleton UI Instance
# =============================================================================

ui = UIHelper(console)

__all__ = [
    "console",
    "ui",
    "Icons",
    "UIHelper",
    "PLUGIN_THEME",
    "Table",
    "Panel",
    "Text",
]
