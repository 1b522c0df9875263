"""Integration tests.

Purpose
- Generate bindings, write them to disk, import them, and call operations
  through a correlator and a running event pump.

Guidelines
- Use `MemoryEngine` by default; tests needing the native library are
  skipped unless `TDBIND_TDJSON_PATH` is set.
"""
