"""Pytest configuration and shared fixtures."""

import logging
from pathlib import Path

import pytest
from wasmtime import wat2wasm

import dprint_json.config as config_module
import dprint_json.utils.ui as ui_module

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def compile_fixture(name: str) -> bytes:
    """Compile a WAT fixture from tests/fixtures into module bytes."""
    return bytes(wat2wasm((FIXTURES_DIR / name).read_text(encoding="utf-8")))


@pytest.fixture
def test_data_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


# ============================================================================
# Plugin modules
# ============================================================================


@pytest.fixture(scope="session")
def plugin_v3_bytes() -> bytes:
    """Schema 3 plugin module (chunked transfer buffer)."""
    return compile_fixture("json_plugin_v3.wat")


@pytest.fixture(scope="session")
def plugin_v4_bytes() -> bytes:
    """Schema 4 plugin module (direct shared bytes, config ids)."""
    return compile_fixture("json_plugin_v4.wat")


@pytest.fixture(params=["v3", "v4"])
def plugin_bytes(request: pytest.FixtureRequest, plugin_v3_bytes: bytes, plugin_v4_bytes: bytes) -> bytes:
    """Both plugin schema generations, one per test run."""
    return plugin_v3_bytes if request.param == "v3" else plugin_v4_bytes


@pytest.fixture
def plugin_path(tmp_path: Path, plugin_bytes: bytes) -> Path:
    """The same module as ``plugin_bytes``, written to disk."""
    path = tmp_path / "plugin.wasm"
    path.write_bytes(plugin_bytes)
    return path


# ============================================================================
# Global state cleanup
# ============================================================================


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep Rich from wrapping CLI output at 80 columns around long tmp paths."""
    monkeypatch.setattr(ui_module.console, "_width", 500)


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop the cached global settings after each test."""
    yield
    config_module._settings = None


@pytest.fixture(autouse=True)
def cleanup_package_logger():
    """Remove handlers the CLI or logging tests attached to the package logger."""
    yield
    logger = logging.getLogger("dprint_json")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
