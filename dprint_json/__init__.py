"""
Tooling around the dprint JSON Wasm plugin.

- plugin: load a compiled plugin from a buffer or a path and verify it
- release: build release notes from the changelog aggregator
"""

__version__ = "0.9.0"
