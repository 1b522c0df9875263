"""Entry points for tdbind.

Outer adapters that drive the library: currently the ``tdbind`` command line.
Entry points import `tdbind.codegen`, `tdbind.config` and `tdbind.logging`;
nothing inside tdbind imports them.
"""
