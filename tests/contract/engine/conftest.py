"""Fixtures for engine contract tests."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from tdbind.adapters.engine import MemoryEngine, TdJsonEngine
from tdbind.interfaces.engine import TdEngine


def answer_get_option(client_id: int, request: dict) -> list[dict]:
    """Reply the way TDLib answers ``getOption`` before authorization."""
    return [
        {
            "@type": "optionValueString",
            "value": "1.8.0",
            "@extra": request.get("@extra"),
            "@client_id": client_id,
        }
    ]


@pytest.fixture(params=["memory", "tdjson"])
def engine(request: pytest.FixtureRequest) -> Iterator[TdEngine]:
    """Return a fresh engine for the requested backend.

    Supported params:
      - `"memory"` → MemoryEngine scripted to answer ``getOption``
      - `"tdjson"` → TdJsonEngine; skipped unless `TDBIND_TDJSON_PATH` names
        a real library
    """
    match request.param:
        case "memory":
            yield MemoryEngine(answer_get_option)
        case "tdjson":
            path = os.environ.get("TDBIND_TDJSON_PATH")
            if not path:
                pytest.skip("TDBIND_TDJSON_PATH is not set")
            yield TdJsonEngine(path)
        case _:
            raise ValueError(f"unknown engine type: {request.param}")
