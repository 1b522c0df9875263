"""Wire the runtime with `bootstrap` and drive it through generated bindings."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from tdbind.adapters.engine import MemoryEngine
from tdbind.bootstrap import bootstrap
from tdbind.codegen import generate
from tdbind.runtime import EventPump, set_default_correlator
from tests.helpers.engine import replying
from tests.helpers.modules import import_bindings
from tests.helpers.schema import fn, p, ty

# pylint: disable=redefined-outer-name

SCHEMA = (
    ty("optionValueString", p("value", "string")),
    fn("getOption", "optionValueString", p("name", "string")),
)


@pytest.fixture
def api(tmp_path, monkeypatch):
    monkeypatch.syspath_prepend(str(tmp_path))
    return import_bindings(generate(SCHEMA), tmp_path)


@pytest.fixture
def restore_default() -> Iterator[None]:
    previous = set_default_correlator(None)
    try:
        yield
    finally:
        set_default_correlator(previous)


def run_pump(correlator) -> EventPump:
    pump = EventPump(correlator, poll_timeout=0.05)
    pump.start()
    return pump


@pytest.mark.asyncio
async def test_bootstrapped_default_serves_generated_operations(api, restore_default, monkeypatch):
    monkeypatch.delenv("TDBIND_REQUEST_TIMEOUT", raising=False)
    engine = MemoryEngine(
        replying({"getOption": {"@type": "optionValueString", "value": "1.8.0"}})
    )
    container = bootstrap(engine)
    client_id = container.correlator.create_client()
    pump = run_pump(container.correlator)
    try:
        option = await api.operations.get_option("version", client_id)
    finally:
        pump.stop(timeout=5)

    assert option.value == "1.8.0"
    assert engine.sent[0][0] == client_id


@pytest.mark.asyncio
@pytest.mark.skipif(
    not os.environ.get("TDBIND_TDJSON_PATH"), reason="TDBIND_TDJSON_PATH is not set"
)
async def test_native_library_answers_get_option(api, restore_default, monkeypatch):
    monkeypatch.setenv("TDBIND_REQUEST_TIMEOUT", "10")
    container = bootstrap()
    client_id = container.correlator.create_client()
    pump = run_pump(container.correlator)
    try:
        option = await api.operations.get_option("version", client_id)
    finally:
        pump.stop(timeout=5)

    assert option.value
