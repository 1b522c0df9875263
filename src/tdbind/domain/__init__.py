"""Domain layer for tdbind.

Holds the immutable schema model consumed by the code generator and the
generation-time error hierarchy. Nothing in here knows about code emission,
the correlation runtime, or the native engine.
"""
