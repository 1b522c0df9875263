"""Adapters (infrastructure) for tdbind.

Provide concrete implementations of the runtime's ports, currently the engine
boundary: an in-memory scripted engine and the `libtdjson` binding.

Dependency rule: may import `tdbind.interfaces` and `tdbind.config`; the
runtime must not import this package.
"""
