"""Ports (framework-free ABCs) for tdbind.

Contracts the runtime depends on, implemented by `tdbind.adapters`.
Do not import from adapters, bootstrap, or entrypoints here.
"""
