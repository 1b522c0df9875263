"""Logging setup for the tdbind command line.

Console output goes through Rich on stderr. An optional in-memory "flight
recorder" keeps recent records, including DEBUG ones hidden from the console,
and writes them to a file when something goes wrong. Records from libraries
outside tdbind are tagged with a short bracketed prefix on the console.

`configure_logging` wires both onto the root logger; the library modules only
ever call ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Mapping, Sequence
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import Literal, TypeAlias

import pydantic
from rich.console import Console
from rich.logging import RichHandler

from tdbind import __version__, config

PROJECT_PREFIX = "tdbind"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

CONSOLE_FORMAT = "%(prefix)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)


class ThirdPartyPrefixFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Tag records from outside tdbind with their top-level package.

    A record from ``"asyncio.base_events"`` gets ``record.prefix`` set to
    ``"[asyncio]"``; tdbind records get an empty prefix. Nothing is dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        top = record.name.partition(".")[0]
        record.prefix = "" if top == PROJECT_PREFIX else f"[{top}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the Rich console handler.

    Args:
        level: Minimum level shown; forced to DEBUG in debug mode.
        debug_mode: Show timestamps, logger names and source paths instead of
            the third-party prefix.
        color: Emit ANSI colors. Follows click-extra's ``--color/--no-color``.

    Returns:
        RichHandler: A handler writing to stderr.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter(DEBUG_CONSOLE_FORMAT))
        return handler

    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder.

    Up to `capacity` records are held in memory and written to `path` once a
    record at `flush_level` or above arrives, or on close when
    `flush_on_close` is set. The file is truncated on every run.

    Returns:
        MemoryHandler: The buffering handler, targeting a FileHandler.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(capacity, flush_level, target, flushOnClose=flush_on_close)


def configure_logging(  # pylint: disable=too-many-arguments
    level: int,
    *,
    debug_mode: bool = False,
    color: bool = True,
    log_path: Path | None = None,
    flight_capacity: int = 2000,
    force_flush: bool = False,
    logger_levels: Mapping[str, int] | None = None,
) -> list[logging.Handler]:
    """Install the console handler and, with `log_path`, the flight recorder.

    The root logger passes everything through; each handler applies its own
    level. `logger_levels` then caps individual loggers (``asyncio``,
    ``tdbind.runtime``...) for both handlers alike.

    Returns:
        list[logging.Handler]: The installed handlers, console first.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(level, debug_mode=debug_mode, color=color)
    ]
    if log_path is not None:
        handlers.append(
            config_flight_recorder(
                log_path, capacity=flight_capacity, flush_on_close=force_flush
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, logger_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(logger_level)
    return handlers


def _tdjson_location() -> str:
    try:
        return config.get_tdjson_path()
    except config.TdJsonLibraryNotFoundError:
        return "<not found>"


def log_startup(
    logger: logging.Logger,
    *,
    level: int,
    handlers: Sequence[logging.Handler],
    logger_levels: Mapping[str, int],
) -> None:
    """Log a one-line summary at INFO and environment details at DEBUG.

    The DEBUG lines cover the interpreter, platform, process, working
    directory, pydantic version, where `libtdjson` would be loaded from, the
    active handlers, flight recorder settings and per-logger overrides.
    Flight recorder settings are read back from the handlers themselves.

    Args:
        logger: Logger the messages go to.
        level: Console level in effect.
        handlers: Handlers attached to the root logger.
        logger_levels: Per-logger level overrides.
    """
    recorder = next((h for h in handlers if isinstance(h, MemoryHandler)), None)
    logger.info(
        "tdbind %s (console=%s, flight-recorder=%s)",
        __version__,
        logging.getLevelName(level),
        "OFF" if recorder is None else "ON",
    )

    logger.debug("Python: %s", platform.python_version())
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Executable: %s", sys.executable)
    logger.debug("pydantic: %s", pydantic.VERSION)
    logger.debug("tdjson: %s", _tdjson_location())
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if recorder is not None:
        target = recorder.target
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            getattr(target, "baseFilename", "<none>"),
            recorder.capacity,
            recorder.flushOnClose,
        )
    overrides = {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
    logger.debug("Per-logger overrides: %s", overrides or "<none>")
