"""Global pytest fixtures for tdbind."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tdbind.adapters.engine import MemoryEngine
from tdbind.runtime import Correlator, EventPump, set_default_correlator


@pytest.fixture
def engine() -> MemoryEngine:
    """A fresh engine that never answers on its own."""
    return MemoryEngine()


@pytest.fixture
def correlator(engine: MemoryEngine) -> Correlator:
    """A correlator around the `engine` fixture."""
    return Correlator(engine)


@pytest.fixture
def pump(correlator: Correlator) -> Iterator[EventPump]:
    """A running event pump driving `correlator`; stopped after the test."""
    event_pump = EventPump(correlator, poll_timeout=0.01)
    event_pump.start()
    try:
        yield event_pump
    finally:
        event_pump.stop(timeout=5)


@pytest.fixture
def default_correlator(correlator: Correlator) -> Iterator[Correlator]:
    """Install `correlator` as the process default for one test."""
    previous = set_default_correlator(correlator)
    try:
        yield correlator
    finally:
        set_default_correlator(previous)
