"""Engine adapters.

`MemoryEngine` is an ephemeral, scripted engine suitable for tests and demos.
`TdJsonEngine` drives the native `libtdjson` library through `ctypes`.
"""

from .memory import MemoryEngine, Responder
from .tdjson import TdJsonEngine

__all__ = ["MemoryEngine", "Responder", "TdJsonEngine"]
