"""Unit tests.

Purpose
- Verify a single module in isolation.

Guidelines
- Use `MemoryEngine` or a faked native library instead of `libtdjson`.
- Generated sources are compiled and executed in process, never imported
  from disk.
"""
