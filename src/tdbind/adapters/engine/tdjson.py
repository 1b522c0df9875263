"""`libtdjson` engine adapter.

Binds the four entry points of TDLib's JSON interface through `ctypes`:
``td_create_client_id``, ``td_send``, ``td_receive`` and ``td_execute``.
``td_receive`` is process-global and must be called from one thread at a
time, which the correlator's single-driver rule guarantees.
"""

from __future__ import annotations

import ctypes
import logging
from pathlib import Path

from tdbind.interfaces.engine import TdEngine

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


class TdJsonEngine(TdEngine):
    """Engine backed by the native `libtdjson` shared library.

    Args:
        library_path: Path (or name) of the shared library to load.

    Raises:
        OSError: If the library cannot be loaded.
    """

    def __init__(self, library_path: str | Path) -> None:
        self._library_path = str(library_path)
        self._lib = ctypes.CDLL(self._library_path)

        self._create_client_id = self._lib.td_create_client_id
        self._create_client_id.restype = ctypes.c_int
        self._create_client_id.argtypes = []

        self._send = self._lib.td_send
        self._send.restype = None
        self._send.argtypes = [ctypes.c_int, ctypes.c_char_p]

        self._receive = self._lib.td_receive
        self._receive.restype = ctypes.c_char_p
        self._receive.argtypes = [ctypes.c_double]

        self._execute = self._lib.td_execute
        self._execute.restype = ctypes.c_char_p
        self._execute.argtypes = [ctypes.c_char_p]

        logger.debug("Loaded tdjson from %s", self._library_path)

    @property
    def library_path(self) -> str:
        """Where the native library was loaded from."""
        return self._library_path

    def create_client(self) -> int:
        return int(self._create_client_id())

    def submit(self, client_id: int, text: str) -> None:
        self._send(client_id, text.encode(ENCODING))

    def poll(self, timeout: float) -> str | None:
        result = self._receive(timeout)
        return None if result is None else result.decode(ENCODING)

    def execute(self, text: str) -> str | None:
        """Run a synchronous request, e.g. ``setLogVerbosityLevel``.

        Only requests TDLib documents as executable synchronously are valid
        here; no client id or correlation is involved.
        """
        result = self._execute(text.encode(ENCODING))
        return None if result is None else result.decode(ENCODING)
