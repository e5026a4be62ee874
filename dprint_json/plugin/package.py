"""
Byte source for the compiled plugin shipped alongside this package.

``get_path`` and ``get_buffer`` always refer to the same file.
"""

from pathlib import Path

from dprint_json.config import get_settings


def get_path() -> Path:
    """
    Get the location of the compiled plugin.

    Raises:
        FileNotFoundError: If the configured file does not exist
    """
    path = get_settings().plugin.wasm_path
    if not path.is_file():
        raise FileNotFoundError(
            f"Plugin module not found: {path}\n"
            "Set PLUGIN_WASM_PATH or plugin.wasm_path in config.yaml to the compiled .wasm file."
        )
    return path


def get_buffer() -> bytes:
    """Read the compiled plugin into memory."""
    return get_path().read_bytes()
