"""Decoding policy applied by generated operations to raw response text.

Success-decode-first: for operations with a result, the response is validated
against the expected type before anything else, so a valid payload that
happens to also look like an error object is still returned as a result. Only
when that fails is the error shape tried, and only when both fail is a
`DeserializationError` raised.

Unit-returning operations have nothing to decode into; they only check
whether the response is an error object.
"""

from __future__ import annotations

import functools
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .errors import ApiError, ApiErrorPayload, DeserializationError

_API_ERROR = TypeAdapter(ApiErrorPayload)


@functools.cache
def _adapter(annotation: Any) -> TypeAdapter[Any]:
    return TypeAdapter(annotation)


def decode_unit_response(response: str) -> None:
    """Check a response to a unit-returning operation.

    Raises:
        ApiError: If the response is an error object.
    """
    try:
        payload = _API_ERROR.validate_json(response)
    except ValidationError:
        return
    raise ApiError.from_payload(payload)


def decode_response(response: str, annotation: Any, expected_type: str) -> Any:
    """Decode a response into `annotation`.

    Args:
        response: Raw response text.
        annotation: The expected result type (a structure, scalar or list).
        expected_type: Name reported if decoding fails.

    Returns:
        The decoded result.

    Raises:
        ApiError: If the response is not a valid result but is an error object.
        DeserializationError: If it is neither.
    """
    try:
        return _adapter(annotation).validate_json(response)
    except ValidationError as error:
        decode_error = error

    try:
        payload = _API_ERROR.validate_json(response)
    except ValidationError:
        raise DeserializationError(expected_type, response, decode_error) from decode_error
    raise ApiError.from_payload(payload)
