"""Bootstrap (composition root) for tdbind.

Assembles the runtime: builds a concrete engine adapter from configuration,
wraps it in a `Correlator`, and installs that correlator as the process
default used by generated operations.

Import rules:
- Applications import *this* package to wire the runtime.
- This package may import: `tdbind.adapters`, `tdbind.runtime`,
  `tdbind.interfaces`, and `tdbind.config`.
- Inner layers must not import `tdbind.bootstrap`.
"""

from .bootstrap import RuntimeContainer, bootstrap, build_correlator, build_engine

__all__ = ["RuntimeContainer", "bootstrap", "build_correlator", "build_engine"]
