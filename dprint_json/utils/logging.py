"""
Shared logging utilities with Rich markup support.

Provides common logging helper functions used across modules
with consistent Rich-enhanced formatting.
"""

import logging
from typing import Any


def _resolve(logger_name: str | None, logger: logging.Logger | None) -> logging.Logger:
    if logger is not None:
        return logger
    return logging.getLogger(logger_name) if logger_name else logging.getLogger()


def log_success(
    message: str,
    *args: Any,
    logger_name: str | None = None,
    logger: logging.Logger | None = None,
    **kwargs: Any,
) -> None:
    """
    Log a success message with green checkmark.

    Args:
        message: Message to log
        *args: Positional arguments for logger
        logger_name: Name of logger to use (if logger not provided)
        logger: Logger instance to use (overrides logger_name)
        **kwargs: Keyword arguments for logger
    """
    _resolve(logger_name, logger).info("[green]✓[/green] " + message, *args, **kwargs)


def log_error(
    message: str,
    *args: Any,
    logger_name: str | None = None,
    logger: logging.Logger | None = None,
    **kwargs: Any,
) -> None:
    """Log an error message with red X."""
    _resolve(logger_name, logger).error("[red]✗[/red] " + message, *args, **kwargs)


def log_warning(
    message: str,
    *args: Any,
    logger_name: str | None = None,
    logger: logging.Logger | None = None,
    **kwargs: Any,
) -> None:
    """Log a warning message with yellow warning sign."""
    _resolve(logger_name, logger).warning("[yellow]⚠[/yellow] " + message, *args, **kwargs)


def log_debug(
    message: str,
    *args: Any,
    logger_name: str | None = None,
    logger: logging.Logger | None = None,
    **kwargs: Any,
) -> None:
    """Log a debug message with dimmed text."""
    _resolve(logger_name, logger).debug("[dim]" + message + "[/dim]", *args, **kwargs)
