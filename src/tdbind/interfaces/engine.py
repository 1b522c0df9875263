"""Interface for the native engine boundary.

The engine executes requests and emits responses and events. The runtime
consumes it only through these three primitives; everything else about the
engine is out of scope.
"""

import abc

# pylint: disable=too-few-public-methods


class TdEngine(abc.ABC):
    """Contract for a poll-based duplex channel to the engine.

    `submit` may be called from any thread. `poll` is called by exactly one
    driver at a time.
    """

    @abc.abstractmethod
    def create_client(self) -> int:
        """Create a client and return its identifier.

        A client starts receiving events only after its first request.
        """

    @abc.abstractmethod
    def submit(self, client_id: int, text: str) -> None:
        """Send one serialized request on behalf of `client_id`."""

    @abc.abstractmethod
    def poll(self, timeout: float) -> str | None:
        """Wait up to `timeout` seconds for one incoming message.

        Returns:
            The message text, or None if nothing arrived in time.
        """
