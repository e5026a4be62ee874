"""
dprint Wasm plugin host and load-and-verify harness.
"""

from .harness import (
    CANONICAL_CASE,
    CaseResult,
    VerificationCase,
    VerificationReport,
    verify_formatter,
    verify_idempotent,
    verify_plugin,
)
from .host import Formatter, FormatError, ModuleLoadError, PluginError, create_from_buffer
from .loader import format, load, load_from_buffer, load_from_path, resolve_source
from .models import (
    BufferSource,
    ConfigurationDiagnostic,
    FormatRequest,
    GlobalConfiguration,
    ModuleSource,
    PathSource,
    PluginInfo,
)
from .package import get_buffer, get_path

__all__ = [
    # Host
    "Formatter",
    "create_from_buffer",
    # Exceptions
    "PluginError",
    "ModuleLoadError",
    "FormatError",
    # Loading
    "load",
    "load_from_buffer",
    "load_from_path",
    "resolve_source",
    "format",
    "get_buffer",
    "get_path",
    # Models
    "BufferSource",
    "PathSource",
    "ModuleSource",
    "FormatRequest",
    "GlobalConfiguration",
    "PluginInfo",
    "ConfigurationDiagnostic",
    # Harness
    "CANONICAL_CASE",
    "VerificationCase",
    "CaseResult",
    "VerificationReport",
    "verify_formatter",
    "verify_idempotent",
    "verify_plugin",
]
