"""In-memory engine adapter.

Messages are queued in process and lost when the instance is discarded. A
`responder` callback scripts replies: it receives each submitted request (as a
decoded mapping) and returns the messages to enqueue in reply.
"""

from __future__ import annotations

import json
import queue
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from tdbind.interfaces.engine import TdEngine

Responder = Callable[[int, dict[str, Any]], Iterable[Mapping[str, Any] | str]]


class MemoryEngine(TdEngine):
    """Thread-safe scripted engine.

    Args:
        responder: Called with ``(client_id, request)`` for each submission;
            each message it yields is queued for `poll`. Mappings are encoded
            as JSON, strings are queued verbatim.

    Attributes:
        responder: The current responder; may be replaced between requests.
        sent: Every ``(client_id, text)`` pair submitted, in order.
    """

    def __init__(self, responder: Responder | None = None) -> None:
        self.responder = responder
        self._lock = threading.Lock()
        self._next_client_id = 1
        self._inbox: queue.Queue[str] = queue.Queue()
        self.sent: list[tuple[int, str]] = []

    def create_client(self) -> int:
        with self._lock:
            client_id = self._next_client_id
            self._next_client_id += 1
        return client_id

    def submit(self, client_id: int, text: str) -> None:
        with self._lock:
            self.sent.append((client_id, text))
        if self.responder is None:
            return
        for message in self.responder(client_id, json.loads(text)):
            self.push(message)

    def push(self, message: Mapping[str, Any] | str) -> None:
        """Queue `message` as if the engine had emitted it."""
        self._inbox.put(message if isinstance(message, str) else json.dumps(message))

    def poll(self, timeout: float) -> str | None:
        try:
            return self._inbox.get(timeout=timeout)
        except queue.Empty:
            return None

    @property
    def requests(self) -> list[dict[str, Any]]:
        """Decoded copies of every submitted request, in order."""
        with self._lock:
            return [json.loads(text) for _, text in self.sent]
