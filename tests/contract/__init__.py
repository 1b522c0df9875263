"""Contract tests.

Purpose
- Define the engine port's behavior once and run it against every adapter
  so they stay interchangeable.

Guidelines
- Parametrize adapters via fixtures.
- Assert only the public contract, not internals.
"""
