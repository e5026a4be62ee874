"""
Loading a plugin from either of its byte sources.

Both acquisition paths converge on raw module bytes before the formatter
factory runs, so a path load is exactly a buffer load of the file contents.
"""

import logging
from pathlib import Path
from typing import Any

from dprint_json.utils.logging import log_debug

from .host import Formatter, create_from_buffer
from .models import BufferSource, FormatRequest, ModuleSource, PathSource

logger = logging.getLogger(__name__)


def resolve_source(source: ModuleSource) -> bytes:
    """
    Resolve a module source to the module bytes.

    Raises:
        FileNotFoundError: If a path source does not point to a readable file
    """
    if isinstance(source, BufferSource):
        return source.data
    if isinstance(source, PathSource):
        if not source.path.is_file():
            raise FileNotFoundError(f"Plugin module not found: {source.path}")
        try:
            return source.path.read_bytes()
        except PermissionError as e:
            raise FileNotFoundError(f"Plugin module is not readable: {source.path}") from e
    raise TypeError(f"Unknown module source: {type(source).__name__}")


def load(source: ModuleSource) -> Formatter:
    """Load a formatter from a buffer or path source."""
    data = resolve_source(source)
    log_debug("Loading plugin from %s source (%d bytes)", source.kind, len(data), logger=logger)
    return create_from_buffer(data)


def load_from_buffer(data: bytes) -> Formatter:
    """
    Load a formatter from module bytes already in memory.

    Raises:
        ModuleLoadError: If the bytes are not a valid plugin module
    """
    return load(BufferSource(data=data))


def load_from_path(path: str | Path) -> Formatter:
    """
    Load a formatter from a module file.

    Equivalent to ``load_from_buffer(Path(path).read_bytes())``.

    Raises:
        FileNotFoundError: If the file does not exist
        ModuleLoadError: If the file is not a valid plugin module
    """
    return load(PathSource(path=Path(path)))


def format(
    instance: Formatter,
    request: FormatRequest | dict[str, Any] | str | Path,
    file_text: str | None = None,
) -> str:
    """Format with either request shape: ``(path, text)`` or ``{filePath, fileText}``."""
    return instance.format_text(request, file_text)
