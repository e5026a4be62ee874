"""
wasmtime host for dprint Wasm plugins.

A plugin is a WebAssembly module that exchanges UTF-8 strings with the host
through a region of its own memory ("shared bytes"). Two ABI generations are
supported:

- schema 3: strings are moved in chunks through a fixed-size memory buffer
  (``get_wasm_memory_buffer`` / ``add_to_shared_bytes_from_buffer`` /
  ``set_buffer_with_shared_bytes``) and config is set with
  ``set_global_config`` + ``set_plugin_config``.
- schema 4: the host writes straight into the shared bytes
  (``clear_shared_bytes`` returns the pointer) and config is registered
  under a numeric id.

Host functions the plugin imports from the ``dprint`` namespace are stubbed
to return zero. Formatting embedded languages through the host is not
supported, so ``host_format`` always answers "no change".
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from wasmtime import Engine, Func, FuncType, ImportType, Instance, Memory, Module, Store, Trap, WasmtimeError

from .models import ConfigurationDiagnostic, FormatRequest, GlobalConfiguration, PluginInfo

logger = logging.getLogger(__name__)

WASM_MAGIC = b"\0asm"
HOST_NAMESPACE = "dprint"
SUPPORTED_SCHEMA_VERSIONS = (3, 4)

# format() response codes
NO_CHANGE = 0
CHANGE = 1
ERROR = 2

_V3_EXPORTS = (
    "get_wasm_memory_buffer",
    "get_wasm_memory_buffer_size",
    "clear_shared_bytes",
    "add_to_shared_bytes_from_buffer",
    "set_buffer_with_shared_bytes",
    "set_global_config",
    "set_plugin_config",
)
_V4_EXPORTS = (
    "get_shared_bytes_ptr",
    "clear_shared_bytes",
    "register_config",
    "release_config",
)
_COMMON_EXPORTS = (
    "get_plugin_info",
    "get_license_text",
    "get_resolved_config",
    "get_config_diagnostics",
    "set_file_path",
    "format",
    "get_formatted_text",
    "get_error_text",
)


class PluginError(Exception):
    """Base exception for plugin host errors."""

    def __init__(self, message: str, file_path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.file_path = file_path

    def __str__(self) -> str:
        return self.message


class ModuleLoadError(PluginError):
    """Module bytes are absent, truncated or not a usable plugin."""

    pass


class FormatError(PluginError):
    """The plugin rejected a format request."""

    pass


def _host_stub(namespace: str, name: str, func_type: FuncType) -> Callable[..., Any]:
    """Build a host import that does nothing and answers zero."""
    result_count = len(func_type.results)

    def stub(*args: Any) -> Any:
        logger.debug("Plugin called host import %s.%s%s", namespace, name, args)
        if result_count == 0:
            return None
        if result_count == 1:
            return 0
        return [0] * result_count

    return stub


def _resolve_import(store: Store, import_type: ImportType) -> Func:
    """Satisfy a single module import or fail the load."""
    namespace = import_type.module
    name = import_type.name or ""
    func_type = import_type.type
    if namespace != HOST_NAMESPACE or not isinstance(func_type, FuncType):
        raise ModuleLoadError(f"Unsupported plugin import: {namespace}.{name}")
    return Func(store, func_type, _host_stub(namespace, name, func_type))


def _coerce_request(
    request: FormatRequest | dict[str, Any] | str | Path,
    file_text: str | None,
    override_config: dict[str, Any] | None,
) -> FormatRequest:
    """Normalize the positional and structured request shapes into one model."""
    if isinstance(request, (str, Path)):
        if file_text is None:
            raise TypeError("file_text is required when the request is a file path")
        return FormatRequest(file_path=str(request), file_text=file_text, override_config=override_config)

    if file_text is not None:
        raise TypeError("file_text must not be passed alongside a structured request")

    if isinstance(request, dict):
        try:
            request = FormatRequest.model_validate(request)
        except ValidationError as e:
            raise TypeError(f"Invalid format request: {e}") from e
    if override_config is not None:
        request = request.model_copy(update={"override_config": override_config})
    return request


class Formatter:
    """
    A live plugin instance.

    Created by :func:`create_from_buffer`. Each instance owns its own wasmtime
    store and must not be shared between threads.
    """

    def __init__(self, store: Store, instance: Instance) -> None:
        self._store = store
        self._exports = instance.exports(store)
        self._config_set = False
        self._config_id = 0

        memory = self._find_export("memory")
        if not isinstance(memory, Memory):
            raise ModuleLoadError("Plugin module does not export its memory")
        self._memory = memory

        self.schema_version = self._detect_schema_version()
        required = _V4_EXPORTS if self.schema_version == 4 else _V3_EXPORTS
        missing = [name for name in (*required, *_COMMON_EXPORTS) if self._find_export(name) is None]
        if missing:
            raise ModuleLoadError(f"Plugin module is missing required exports: {', '.join(missing)}")

        if self.schema_version == 3:
            self._buffer_size = self._call("get_wasm_memory_buffer_size", error=ModuleLoadError)
            if self._buffer_size <= 0:
                raise ModuleLoadError("Plugin reported an empty memory buffer")

        logger.debug("Plugin instance ready (schema version %d)", self.schema_version)

    # =====================
    # Exports & calls
    # =====================

    def _find_export(self, name: str) -> Any | None:
        try:
            return self._exports[name]
        except KeyError:
            return None

    def _call(self, name: str, *args: int, error: type[PluginError] = PluginError) -> Any:
        """Call an exported function, turning wasm traps into ``error``."""
        func = self._find_export(name)
        if not isinstance(func, Func):
            raise error(f"Plugin does not export function: {name}")
        try:
            return func(self._store, *args)
        except (Trap, WasmtimeError) as e:
            logger.debug("Plugin trapped in %s: %s", name, e)
            raise error(f"Plugin trapped in {name}: {e}") from e

    def _detect_schema_version(self) -> int:
        if self._find_export("dprint_plugin_version_4") is not None:
            version = self._call("dprint_plugin_version_4", error=ModuleLoadError)
        elif self._find_export("get_plugin_schema_version") is not None:
            version = self._call("get_plugin_schema_version", error=ModuleLoadError)
        else:
            raise ModuleLoadError("Module is not a dprint plugin (no schema version export)")

        if version not in SUPPORTED_SCHEMA_VERSIONS:
            raise ModuleLoadError(
                f"Unsupported plugin schema version {version}. "
                f"Supported: {', '.join(str(v) for v in SUPPORTED_SCHEMA_VERSIONS)}"
            )
        return int(version)

    # =====================
    # Shared bytes transfer
    # =====================

    def _send(self, text: str, error: type[PluginError] = PluginError) -> None:
        data = text.encode("utf-8")
        if self.schema_version == 4:
            pointer = self._call("clear_shared_bytes", len(data), error=error)
            if data:
                self._memory.write(self._store, data, pointer)
            return

        self._call("clear_shared_bytes", len(data), error=error)
        index = 0
        while index < len(data):
            chunk = data[index : index + self._buffer_size]
            pointer = self._call("get_wasm_memory_buffer", error=error)
            self._memory.write(self._store, chunk, pointer)
            self._call("add_to_shared_bytes_from_buffer", len(chunk), error=error)
            index += len(chunk)

    def _receive(self, length: int, error: type[PluginError] = PluginError) -> str:
        if self.schema_version == 4:
            pointer = self._call("get_shared_bytes_ptr", error=error)
            return bytes(self._memory.read(self._store, pointer, pointer + length)).decode("utf-8")

        received = bytearray()
        while len(received) < length:
            count = min(length - len(received), self._buffer_size)
            self._call("set_buffer_with_shared_bytes", len(received), count, error=error)
            pointer = self._call("get_wasm_memory_buffer", error=error)
            received += self._memory.read(self._store, pointer, pointer + count)
        return bytes(received).decode("utf-8")

    def _receive_from(self, name: str, *args: int, error: type[PluginError] = PluginError) -> str:
        length = self._call(name, *args, error=error)
        return self._receive(length, error=error)

    def _config_args(self) -> tuple[int, ...]:
        return (self._config_id,) if self.schema_version == 4 else ()

    # =====================
    # Configuration
    # =====================

    def set_config(
        self,
        global_config: GlobalConfiguration | dict[str, Any] | None = None,
        plugin_config: dict[str, Any] | None = None,
    ) -> None:
        """
        Apply configuration, replacing whatever was set before.

        Args:
            global_config: Configuration shared by all plugins
            plugin_config: Plugin specific configuration
        """
        if isinstance(global_config, GlobalConfiguration):
            global_values = global_config.to_plugin_dict()
        else:
            global_values = dict(global_config or {})
        plugin_values = dict(plugin_config or {})

        if self.schema_version == 4:
            if self._config_set:
                self._call("release_config", self._config_id)
            self._config_id += 1
            self._send(json.dumps({"global": global_values, "plugin": plugin_values}))
            self._call("register_config", self._config_id)
        else:
            if self._find_export("reset_config") is not None:
                self._call("reset_config")
            self._send(json.dumps(global_values))
            self._call("set_global_config")
            self._send(json.dumps(plugin_values))
            self._call("set_plugin_config")

        self._config_set = True
        logger.debug("Plugin config set: global=%s plugin=%s", global_values, plugin_values)

    def _ensure_config(self) -> None:
        if not self._config_set:
            self.set_config()

    def get_config_diagnostics(self) -> list[ConfigurationDiagnostic]:
        """Get the problems the plugin found in the current configuration."""
        self._ensure_config()
        raw = json.loads(self._receive_from("get_config_diagnostics", *self._config_args()))
        return [ConfigurationDiagnostic.model_validate(item) for item in raw]

    def get_resolved_config(self) -> dict[str, Any]:
        """Get the configuration after the plugin filled in its defaults."""
        self._ensure_config()
        return json.loads(self._receive_from("get_resolved_config", *self._config_args()))

    # =====================
    # Metadata
    # =====================

    def get_plugin_info(self) -> PluginInfo:
        """Get the plugin name, version and file matching info."""
        raw = self._receive_from("get_plugin_info")
        try:
            return PluginInfo.model_validate_json(raw)
        except ValidationError as e:
            raise PluginError(f"Plugin returned invalid plugin info: {e}") from e

    def get_license_text(self) -> str:
        """Get the license text embedded in the plugin."""
        return self._receive_from("get_license_text")

    # =====================
    # Formatting
    # =====================

    def format_text(
        self,
        request: FormatRequest | dict[str, Any] | str | Path,
        file_text: str | None = None,
        override_config: dict[str, Any] | None = None,
    ) -> str:
        """
        Format a file's text.

        Accepts either ``format_text("file.json", text)`` or a structured
        request (``FormatRequest`` or ``{"filePath": ..., "fileText": ...}``).

        Returns:
            The formatted text (the input itself when nothing changed)

        Raises:
            FormatError: If the plugin rejects the request
            TypeError: If the request shape is malformed (e.g. no fileText)
        """
        req = _coerce_request(request, file_text, override_config)
        self._ensure_config()

        if req.override_config:
            if self._find_export("set_override_config") is None:
                raise FormatError("Plugin does not support override configuration", file_path=req.file_path)
            self._send(json.dumps(req.override_config), error=FormatError)
            self._call("set_override_config", error=FormatError)

        self._send(req.file_path, error=FormatError)
        self._call("set_file_path", error=FormatError)
        self._send(req.file_text, error=FormatError)

        code = self._call("format", *self._config_args(), error=FormatError)
        if code == NO_CHANGE:
            logger.debug("No change for %s", req.file_path)
            return req.file_text
        if code == CHANGE:
            logger.debug("Formatted %s", req.file_path)
            return self._receive_from("get_formatted_text", error=FormatError)
        if code == ERROR:
            message = self._receive_from("get_error_text", error=FormatError)
            raise FormatError(message, file_path=req.file_path)
        raise FormatError(f"Unexpected response code from plugin: {code}", file_path=req.file_path)


def create_from_buffer(data: bytes | bytearray | memoryview) -> Formatter:
    """
    Compile and instantiate a plugin from its module bytes.

    Raises:
        ModuleLoadError: If the bytes are not a usable plugin
    """
    data = bytes(data)
    if not data:
        raise ModuleLoadError("Plugin module is empty")
    if not data.startswith(WASM_MAGIC):
        raise ModuleLoadError("Not a WebAssembly module (missing \\0asm header)")

    engine = Engine()
    try:
        module = Module(engine, data)
    except WasmtimeError as e:
        raise ModuleLoadError(f"Failed to compile plugin module: {e}") from e

    store = Store(engine)
    imports = [_resolve_import(store, import_type) for import_type in module.imports]
    try:
        instance = Instance(store, module, imports)
    except (Trap, WasmtimeError) as e:
        raise ModuleLoadError(f"Failed to instantiate plugin module: {e}") from e

    logger.debug("Compiled plugin module (%d bytes)", len(data))
    return Formatter(store, instance)
