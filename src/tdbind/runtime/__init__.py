"""Runtime support for generated bindings.

Generated operations import everything they need from here: the correlation
dispatch entry point, the decoding policy, the error taxonomy, and the
text-transport helper.
"""

from .correlator import (
    CLIENT_ID_KEY,
    EXTRA_KEY,
    CorrelationError,
    CorrelationIdReuseError,
    Correlator,
    Event,
    NoDefaultCorrelatorError,
    RequestTimeoutError,
    decode_event,
    dispatch,
    get_default_correlator,
    set_default_correlator,
)
from .decoding import decode_response, decode_unit_response
from .errors import (
    DESERIALIZATION_ERROR_CODE,
    ApiError,
    ApiErrorPayload,
    DeserializationError,
    TdError,
)
from .fields import to_text
from .pump import EventPump

__all__ = [
    "CLIENT_ID_KEY",
    "DESERIALIZATION_ERROR_CODE",
    "EXTRA_KEY",
    "ApiError",
    "ApiErrorPayload",
    "CorrelationError",
    "CorrelationIdReuseError",
    "Correlator",
    "DeserializationError",
    "Event",
    "EventPump",
    "NoDefaultCorrelatorError",
    "RequestTimeoutError",
    "TdError",
    "decode_event",
    "decode_response",
    "decode_unit_response",
    "dispatch",
    "get_default_correlator",
    "set_default_correlator",
    "to_text",
]
