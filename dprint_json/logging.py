"""
Rich-enhanced logging configuration for the dprint_json package.

Provides centralized logging setup with rich console output
and configurable handlers for console and file output.

.. warning::
    By default, ``configure_logging()`` installs a **global traceback handler**
    via Rich that affects all uncaught exceptions in the process. Set
    ``rich_tracebacks=False`` when embedding the package as a library.

Usage:
    from dprint_json.logging import configure_logging, get_logger

    configure_logging(level="info", console=True, use_rich=True)

    logger = get_logger("plugin.loader")
    logger.info("[green]✓[/green] Plugin loaded")
"""

import logging
import sys
from pathlib import Path
from typing import Literal

from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from dprint_json.utils.ui import console as rich_console

# All package logs use this prefix
MODULE_LOGGER_NAME = "dprint_json"

LogLevel = Literal["debug", "info", "warning", "error", "critical"]

_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_log_level(level: LogLevel | int) -> int:
    """Convert level string to logging constant."""
    if isinstance(level, int):
        return level

    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    return level_map.get(level.lower(), logging.INFO)


def configure_logging(
    level: LogLevel | int = "info",
    console: bool = True,
    file_path: str | Path | None = None,
    file_log_level: LogLevel | int | None = None,
    use_rich: bool = True,
    rich_tracebacks: bool = True,
    show_path: bool = False,
    show_time: bool = True,
) -> logging.Logger:
    """
    Configure logging for the package logger.

    Args:
        level: Log level for console output
        console: Whether to enable console logging
        file_path: Optional file path for file logging
        file_log_level: Log level for file output (defaults to level)
        use_rich: Use rich handler for console
        rich_tracebacks: Install rich tracebacks (process-wide ``sys.excepthook``)
        show_path: Show file path in console logs
        show_time: Show timestamp in console logs

    Returns:
        Configured package logger
    """
    log_level = _get_log_level(level)
    file_log_level = _get_log_level(file_log_level) if file_log_level else log_level

    if use_rich and rich_tracebacks:
        install_rich_traceback(
            console=rich_console,
            show_locals=False,
            width=rich_console.width,
            extra_lines=3,
            theme="monokai",
            word_wrap=True,
        )

    logger = logging.getLogger(MODULE_LOGGER_NAME)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    if console:
        console_handler: logging.Handler
        if use_rich:
            console_handler = RichHandler(
                level=log_level,
                console=rich_console,
                show_time=show_time,
                show_path=show_path,
                rich_tracebacks=rich_tracebacks,
                markup=True,
                log_time_format="[%X]",
                keywords=["plugin", "wasm", "schema", "changelog", "GitHub"],
            )
        else:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))

        logger.addHandler(console_handler)

    # File handler - always use standard formatting for parseable logs
    if file_path:
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setLevel(file_log_level)
        file_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a package logger.

    Args:
        name: Optional sub-logger name (e.g., "plugin.host")

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"{MODULE_LOGGER_NAME}.{name}")
    return logging.getLogger(MODULE_LOGGER_NAME)


def set_level(level: LogLevel | int) -> None:
    """Change the log level for the package logger and its handlers."""
    log_level = _get_log_level(level)
    logger = logging.getLogger(MODULE_LOGGER_NAME)
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)


class LogContext:
    """
    Context manager for temporarily changing log level.

    Example:
        with LogContext("debug"):
            formatter.format_text("file.json", text)
    """

    def __init__(self, level: LogLevel | int):
        self._target_level = _get_log_level(level)
        self._original_level: int | None = None

    def __enter__(self) -> "LogContext":
        logger = logging.getLogger(MODULE_LOGGER_NAME)
        self._original_level = logger.level
        logger.setLevel(self._target_level)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._original_level is not None:
            logging.getLogger(MODULE_LOGGER_NAME).setLevel(self._original_level)


__all__ = [
    "configure_logging",
    "get_logger",
    "LogContext",
    "MODULE_LOGGER_NAME",
    "set_level",
]
