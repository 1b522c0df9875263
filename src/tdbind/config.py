"""Configuration utilities for tdbind.

This module centralizes the generator options and the environment lookups used
when wiring the runtime to the native engine.
"""

import ctypes.util
import os
from dataclasses import dataclass
from enum import Enum

TDJSON_PATH_ENV = "TDBIND_TDJSON_PATH"  # pragma: no mutate
REQUEST_TIMEOUT_ENV = "TDBIND_REQUEST_TIMEOUT"  # pragma: no mutate
TDJSON_LIBRARY_NAME = "tdjson"  # pragma: no mutate


class TextRepresentation(Enum):
    """How free-form text fields are represented in generated code."""

    STANDARD = "standard"
    SHARED = "shared"


@dataclass(frozen=True)
class GeneratorConfig:
    """Options for one generation run.

    Attributes:
        include_restricted_api: Emit definitions and fields that are gated
            behind the restricted capability.
        text_representation: Representation used by every text field in
            every emitted artifact. `SHARED` uses interned strings.
    """

    include_restricted_api: bool = False
    text_representation: TextRepresentation = TextRepresentation.STANDARD

    @property
    def use_shared_text(self) -> bool:
        """True when text fields use the interning representation."""
        return self.text_representation is TextRepresentation.SHARED


class TdJsonLibraryNotFoundError(Exception):
    """Raised when the native tdjson library cannot be located."""

    def __init__(self) -> None:
        super().__init__(
            f"Cannot locate the tdjson library. Set {TDJSON_PATH_ENV} to its path."
        )


class InvalidRequestTimeoutError(ValueError):
    """Raised when the configured request timeout is not a positive number."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"{REQUEST_TIMEOUT_ENV} must be a positive number of seconds, got {value!r}."
        )
        self.value = value


def get_tdjson_path() -> str:
    """Get the path of the native tdjson library.

    Returns:
        The value of `TDBIND_TDJSON_PATH` when set, otherwise whatever the
        platform loader finds for `tdjson`.

    Raises:
        TdJsonLibraryNotFoundError: If neither source yields a path.
    """
    if path := os.environ.get(TDJSON_PATH_ENV):
        return path
    if path := ctypes.util.find_library(TDJSON_LIBRARY_NAME):
        return path
    raise TdJsonLibraryNotFoundError


def get_request_timeout() -> float | None:
    """Get the default per-request timeout in seconds.

    Returns:
        The value of `TDBIND_REQUEST_TIMEOUT` as a float, or None (wait
        indefinitely) when it is unset or empty.

    Raises:
        InvalidRequestTimeoutError: If the value is not a positive number.
    """
    if not (raw := os.environ.get(REQUEST_TIMEOUT_ENV, "").strip()):
        return None
    try:
        timeout = float(raw)
    except ValueError as e:
        raise InvalidRequestTimeoutError(raw) from e
    if timeout <= 0:
        raise InvalidRequestTimeoutError(raw)
    return timeout
