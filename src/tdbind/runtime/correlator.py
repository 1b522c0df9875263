"""Correlate asynchronous requests with responses over one poll-based channel.

Many callers `dispatch` concurrently; exactly one driver calls `pump`, the only
consumer of the engine's `poll`. Each request is stamped with a fresh
correlation id under the ``"@extra"`` key. Responses carrying ``"@extra"``
complete the matching waiter; messages carrying ``"@client_id"`` instead are
events and are handed back to the driver.

Waiter lifecycle
----------------
- Registered in the table *before* the request is transmitted, so a response
  can never arrive ahead of its waiter.
- Removed exactly once: by the matching response, by a timeout, or by
  cancellation of the awaiting caller. A response that arrives after its
  waiter was removed is dropped as an orphan.

Thread-safety
-------------
The counter and table are guarded by one lock. Critical sections contain only
counter and table operations; encoding, transmission, decoding and waiter
completion happen outside it. Waiters are `concurrent.futures.Future`s, so
the driver may run on any thread and callers may live on any event loop.
"""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
import threading
from collections.abc import Callable, Iterator, MutableMapping
from concurrent.futures import Future, InvalidStateError
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from tdbind.interfaces.engine import TdEngine

logger = logging.getLogger(__name__)

EXTRA_KEY = "@extra"
CLIENT_ID_KEY = "@client_id"
DEFAULT_POLL_TIMEOUT = 2.0

_REQUEST = TypeAdapter(dict[str, Any])


# --- Exceptions ---


class CorrelationError(Exception):
    """Base class for correlation runtime failures."""


class CorrelationIdReuseError(CorrelationError):
    """A fresh correlation id collided with a pending one.

    This is an internal invariant violation; the correlator cannot route
    responses reliably once it happens.
    """

    def __init__(self, extra: int) -> None:
        super().__init__(f"Correlation id {extra} is already pending.")
        self.extra = extra


class RequestTimeoutError(CorrelationError, TimeoutError):
    """No response arrived for a request within its timeout."""

    def __init__(self, extra: int, timeout: float) -> None:
        super().__init__(f"No response to request {extra} within {timeout} seconds.")
        self.extra = extra
        self.timeout = timeout


class NoDefaultCorrelatorError(CorrelationError):
    """Raised when an operation needs the default correlator but none is installed."""

    def __init__(self) -> None:
        super().__init__(
            "No default correlator is installed. Call tdbind.bootstrap.bootstrap() "
            "or pass correlator=... explicitly."
        )


# --- Events ---


class Event(BaseModel):
    """An unsolicited message from the engine, tagged by client id.

    Every key beyond ``"@type"`` and ``"@client_id"`` is kept as an extra
    attribute.
    """

    model_config = ConfigDict(extra="allow", validate_by_name=True, validate_by_alias=True)

    type: str = Field(alias="@type")
    client_id: int = Field(alias=CLIENT_ID_KEY)


def decode_event(text: str) -> Event:
    """Decode raw event text into an `Event`."""
    return Event.model_validate_json(text)


# --- Correlator ---


class Correlator:
    """Owns one correlation table and counter around one engine.

    Args:
        engine: The engine boundary to send through and poll from.
        event_decoder: Turns raw event text into an event object. Any
            exception it raises is logged and the event is dropped.
        request_timeout: Default per-request timeout in seconds; None waits
            indefinitely.
        ids: Source of correlation ids; defaults to a counter starting at 0.
    """

    def __init__(
        self,
        engine: TdEngine,
        *,
        event_decoder: Callable[[str], Any] = decode_event,
        request_timeout: float | None = None,
        ids: Iterator[int] | None = None,
    ) -> None:
        self._engine = engine
        self._event_decoder = event_decoder
        self._request_timeout = request_timeout
        self._lock = threading.Lock()
        self._ids = ids if ids is not None else itertools.count()
        self._pending: dict[int, Future[str]] = {}

    @property
    def engine(self) -> TdEngine:
        """The engine this correlator drives."""
        return self._engine

    @property
    def request_timeout(self) -> float | None:
        """Default per-request timeout in seconds, or None."""
        return self._request_timeout

    @property
    def pending_count(self) -> int:
        """Number of requests still waiting for a response."""
        with self._lock:
            return len(self._pending)

    def create_client(self) -> int:
        """Create an engine client and return its id."""
        return self._engine.create_client()

    def submit(
        self, client_id: int, request: MutableMapping[str, Any]
    ) -> tuple[int, Future[str]]:
        """Register a waiter for `request` and transmit it.

        The correlation id is written into `request` under ``"@extra"``.

        Returns:
            tuple[int, Future[str]]: The correlation id and its waiter.

        Raises:
            CorrelationIdReuseError: If the new id is already pending.
            Exception: Whatever encoding or the engine raised; the waiter is
                deregistered first.
        """
        waiter: Future[str] = Future()
        with self._lock:
            extra = next(self._ids)
            if extra in self._pending:
                raise CorrelationIdReuseError(extra)
            self._pending[extra] = waiter

        try:
            request[EXTRA_KEY] = extra
            text = _REQUEST.dump_json(request, by_alias=True).decode()
            self._engine.submit(client_id, text)
        except Exception:
            self._forget(extra)
            raise

        logger.debug(
            "Sent request %s (%s) for client %s", extra, request.get("@type"), client_id
        )
        return extra, waiter

    async def dispatch(
        self,
        client_id: int,
        request: MutableMapping[str, Any],
        *,
        timeout: float | None = None,
    ) -> str:
        """Send `request` and wait for its raw response text.

        Args:
            client_id: The client to send on behalf of.
            request: The request map; ``"@extra"`` is added to it.
            timeout: Seconds to wait; defaults to the correlator's
                `request_timeout`.

        Returns:
            str: The raw response text.

        Raises:
            RequestTimeoutError: If no response arrives in time.
            asyncio.CancelledError: If the caller is cancelled. In both cases
                the waiter is deregistered and a late response is dropped.
        """
        extra, waiter = self.submit(client_id, request)
        timeout = self._request_timeout if timeout is None else timeout
        try:
            return await asyncio.wait_for(asyncio.wrap_future(waiter), timeout)
        except TimeoutError as e:
            logger.warning("Request %s timed out after %s seconds", extra, timeout)
            raise RequestTimeoutError(extra, timeout) from e
        finally:
            self._forget(extra)

    def pump(self, timeout: float = DEFAULT_POLL_TIMEOUT) -> tuple[Any, int] | None:
        """Poll the engine once and route what arrives.

        Responses complete their waiter. Events are decoded and returned.
        Anything that cannot be routed is logged and dropped.

        Args:
            timeout: Seconds to block on the engine's poll.

        Returns:
            tuple[Any, int] | None: ``(event, client_id)`` for a decoded event,
            otherwise None; callers simply pump again.
        """
        text = self._engine.poll(timeout)
        if text is None:
            return None

        try:
            message = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Received a malformed message: %s\nReason: %s", text, e)
            return None
        if not isinstance(message, dict):
            logger.warning("Received a non-object message: %s", text)
            return None

        if EXTRA_KEY in message:
            self._complete(message[EXTRA_KEY], text)
            return None

        if CLIENT_ID_KEY in message:
            return self._route_event(message[CLIENT_ID_KEY], text)

        logger.warning("Received an unroutable message: %s", text)
        return None

    def _complete(self, extra: Any, text: str) -> None:
        with self._lock:
            waiter = self._pending.pop(extra, None) if _is_id(extra) else None
        if waiter is None:
            logger.debug("Dropping response for unknown request %r", extra)
            return
        try:
            waiter.set_result(text)
        except InvalidStateError:
            logger.debug("Dropping response for abandoned request %s", extra)

    def _route_event(self, client_id: Any, text: str) -> tuple[Any, int] | None:
        if not _is_id(client_id):
            logger.warning("Received an event with an invalid client id: %s", text)
            return None
        try:
            event = self._event_decoder(text)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("Received an unknown event: %s\nReason: %r", text, e)
            return None
        return event, client_id

    def fail_pending(self, error: BaseException) -> int:
        """Fail every pending waiter with `error`.

        Used when the driver can no longer poll, so no response will ever
        arrive. Returns the number of waiters failed.
        """
        with self._lock:
            waiters, self._pending = self._pending, {}
        for waiter in waiters.values():
            try:
                waiter.set_exception(error)
            except InvalidStateError:
                pass
        return len(waiters)

    def _forget(self, extra: int) -> None:
        with self._lock:
            self._pending.pop(extra, None)


def _is_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# --- Default correlator handle ---

_default_lock = threading.Lock()
_default_correlator: Correlator | None = None


def set_default_correlator(correlator: Correlator | None) -> Correlator | None:
    """Install `correlator` as the process default and return the previous one."""
    global _default_correlator  # pylint: disable=global-statement
    with _default_lock:
        previous, _default_correlator = _default_correlator, correlator
    return previous


def get_default_correlator() -> Correlator:
    """Return the process default correlator.

    Raises:
        NoDefaultCorrelatorError: If none is installed.
    """
    with _default_lock:
        correlator = _default_correlator
    if correlator is None:
        raise NoDefaultCorrelatorError
    return correlator


async def dispatch(
    client_id: int,
    request: MutableMapping[str, Any],
    *,
    correlator: Correlator | None = None,
    timeout: float | None = None,
) -> str:
    """Send `request` through `correlator` (or the default) and await the response.

    This is the entry point generated operations call.
    """
    correlator = correlator or get_default_correlator()
    return await correlator.dispatch(client_id, request, timeout=timeout)
