"""Error taxonomy shared by every generated operation.

Operations fail through a single channel, `TdError`, with two kinds:

- `ApiError`: the engine answered with an error object (`code`, `message`).
- `DeserializationError`: the response matched neither the expected type nor
  the error shape. Carries the expected type name, the raw response text and
  the underlying validation error.

`TdError.code` lets callers branch on one integer without matching on the
kind: deserialization failures report `DESERIALIZATION_ERROR_CODE`.
"""

from __future__ import annotations

from pydantic import BaseModel, ValidationError

DESERIALIZATION_ERROR_CODE = -1


class ApiErrorPayload(BaseModel):
    """Shape of an error object sent by the engine."""

    code: int
    message: str


class TdError(Exception):
    """Base class for failures of generated operations."""

    @property
    def code(self) -> int:
        """The API error code, or -1 when the response could not be decoded."""
        return DESERIALIZATION_ERROR_CODE


class ApiError(TdError):
    """Raised when the engine reports an error (e.g. 404, 429)."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"TDLib error {code}: {message}")
        self._code = code
        self.message = message

    @property
    def code(self) -> int:
        return self._code

    @classmethod
    def from_payload(cls, payload: ApiErrorPayload) -> ApiError:
        """Build the error from a decoded error object."""
        return cls(payload.code, payload.message)


class DeserializationError(TdError):
    """Raised when a response cannot be decoded into the expected type."""

    def __init__(self, expected_type: str, payload: str, error: ValidationError) -> None:
        super().__init__(f"Failed to deserialize {expected_type}: {error}")
        self.expected_type = expected_type
        self.payload = payload
        self.error = error
