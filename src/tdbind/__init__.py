"""tdbind

Generates typed Python bindings for the TDLib JSON interface and provides the
runtime that correlates their asynchronous requests with the responses coming
back over the engine's single poll-based channel.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
