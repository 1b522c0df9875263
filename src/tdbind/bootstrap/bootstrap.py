"""Bootstrap the correlator around an engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tdbind import config
from tdbind.adapters.engine import TdJsonEngine
from tdbind.interfaces.engine import TdEngine
from tdbind.runtime import Correlator, set_default_correlator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeContainer:
    """A class to hold the wired runtime."""

    correlator: Correlator
    engine: TdEngine


def build_engine(library_path: str | None = None) -> TdEngine:
    """Build the native engine, locating `libtdjson` from config if needed."""
    return TdJsonEngine(library_path or config.get_tdjson_path())


def build_correlator(
    engine: TdEngine, request_timeout: float | None = None
) -> Correlator:
    """Build a correlator with injected dependencies."""
    return Correlator(engine, request_timeout=request_timeout)


def bootstrap(
    engine: TdEngine | None = None, *, install_default: bool = True
) -> RuntimeContainer:
    """Wire the runtime and optionally install it as the process default.

    Args:
        engine: Engine to use; the native engine is built when omitted.
        install_default: Install the correlator as the default used by
            generated operations called without `correlator=`.

    Raises:
        TdJsonLibraryNotFoundError: If no engine is given and the native
            library cannot be located.
        InvalidRequestTimeoutError: If `TDBIND_REQUEST_TIMEOUT` is invalid.
    """
    engine = engine if engine is not None else build_engine()
    correlator = build_correlator(engine, config.get_request_timeout())
    if install_default:
        set_default_correlator(correlator)
        logger.debug("Installed default correlator for %s", type(engine).__name__)

    return RuntimeContainer(correlator=correlator, engine=engine)
