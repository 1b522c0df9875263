"""Unit tests for the operation error taxonomy."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from tdbind.runtime.errors import (
    DESERIALIZATION_ERROR_CODE,
    ApiError,
    ApiErrorPayload,
    DeserializationError,
    TdError,
)


def _validation_error() -> ValidationError:
    try:
        TypeAdapter(int).validate_json('"x"')
    except ValidationError as e:
        return e
    raise AssertionError("expected a validation error")  # pragma: no cover


def test_api_error_message_and_code():
    """API errors carry the engine's code and message."""
    err = ApiError(429, "Too Many Requests")
    assert str(err) == "TDLib error 429: Too Many Requests"
    assert err.code == 429
    assert err.message == "Too Many Requests"


def test_api_error_from_payload():
    """Decoded error objects convert directly."""
    err = ApiError.from_payload(ApiErrorPayload(code=404, message="Not Found"))
    assert (err.code, err.message) == (404, "Not Found")


def test_deserialization_error_keeps_raw_payload():
    """The raw text and the underlying cause are kept verbatim."""
    cause = _validation_error()
    err = DeserializationError("Chat", '{"bad": 1}', cause)
    assert err.expected_type == "Chat"
    assert err.payload == '{"bad": 1}'
    assert err.error is cause
    assert err.code == DESERIALIZATION_ERROR_CODE == -1
    assert str(err).startswith("Failed to deserialize Chat: ")


@pytest.mark.parametrize(
    "err", [ApiError(1, "x"), DeserializationError("X", "", _validation_error())]
)
def test_single_failure_channel(err):
    """Every operation failure is a `TdError`."""
    assert isinstance(err, TdError)
