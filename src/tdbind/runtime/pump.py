"""Background driver calling `Correlator.pump` in a loop."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from .correlator import DEFAULT_POLL_TIMEOUT, Correlator

logger = logging.getLogger(__name__)


class EventPump(threading.Thread):
    """Daemon thread acting as the single driver of a correlator.

    Completes pending requests as their responses arrive and hands every
    decoded event to `on_event(event, client_id)`. If `on_event` raises, the
    exception is logged, kept in `error`, and the pump stops. If polling
    itself raises, the same happens and every pending request is failed with
    that exception.

    Args:
        correlator: The correlator to drive.
        on_event: Callback receiving each event and its client id.
        poll_timeout: Seconds each poll may block; bounds how long `stop()`
            waits for the loop to notice.
    """

    def __init__(
        self,
        correlator: Correlator,
        on_event: Callable[[Any, int], None] | None = None,
        poll_timeout: float = DEFAULT_POLL_TIMEOUT,
    ) -> None:
        super().__init__(name="tdbind-pump", daemon=True)
        self._correlator = correlator
        self._on_event = on_event
        self._poll_timeout = poll_timeout
        self._stopping = threading.Event()
        self.error: BaseException | None = None

    def run(self) -> None:
        logger.debug("Event pump started")
        while not self._stopping.is_set():
            try:
                routed = self._correlator.pump(self._poll_timeout)
            except Exception as e:  # pylint: disable=broad-except
                logger.exception("Polling the engine failed")
                self.error = e
                failed = self._correlator.fail_pending(e)
                logger.error("Failed %s pending request(s)", failed)
                break
            if routed is None:
                continue
            if self._on_event is None:
                continue
            event, client_id = routed
            try:
                self._on_event(event, client_id)
            except Exception as e:  # pylint: disable=broad-except
                logger.exception("Event handler failed for client %s", client_id)
                self.error = e
                break
        logger.debug("Event pump stopped")

    def stop(self, timeout: float | None = None) -> None:
        """Ask the loop to finish and wait for the thread to exit."""
        self._stopping.set()
        if self.is_alive():
            self.join(timeout)
