"""tdbind CLI entry point.

Defines the top-level ``tdbind`` command (via Click-Extra), configures
logging for every subcommand, and registers the subcommands.

Currently available commands
- ``tdbind generate`` compiles a JSON schema document into a bindings package.

Examples
    $ tdbind --version
    $ tdbind -v generate td_api.json ./tdapi
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from tdbind import __version__
from tdbind.logging import configure_logging, log_startup

from .generate import generate
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """tdbind command-line interface.

    tdbind compiles a TDLib-style API schema into typed Python bindings:
    pydantic data structures plus async operations that correlate each request
    with its response over the engine's single poll-based channel.
    """

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  TDLib : " + hyperlink("https://core.telegram.org/tdlib"),
    ]
)

DEFAULT_LOG_PATH = (
    Path(user_log_dir("tdbind", appauthor=False, ensure_exists=True)) / "latest.log"
)


def effective_level(verbose_count: int, quiet_count: int) -> int:
    """WARNING, moved one level per -v/-q and clamped to DEBUG..CRITICAL."""
    level = logging.WARNING - 10 * verbose_count + 10 * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Raise console verbosity one level above WARNING per repetition.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Lower console verbosity one level below WARNING per repetition.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Debug console output: DEBUG level, timestamps, logger names and paths.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_PATH,
    envvar="TDBIND_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="TDBIND_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    envvar="TDBIND_FLIGHT_RECORDER",
    show_envvar=True,
    help=(
        "Keep the last N log records at DEBUG granularity, regardless of -v/-q, "
        "and write them to --log-path when a WARNING or ERROR occurs."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    default=False,
    show_default=True,
    envvar="TDBIND_FORCE_FLUSH_FLIGHT_RECORDER",
    show_envvar=True,
    help="Also write the flight recorder buffer to --log-path on a clean exit.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    default=("asyncio=WARNING",),
    envvar="TDBIND_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
    help=(
        "Set the minimum level of a logger (NAME=LEVEL). Applies to both the "
        "console and the flight recorder. Repeatable, e.g. -L tdbind.codegen=DEBUG."
    ),
)
@clickx.pass_context
def tdbind(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """tdbind command-line interface."""
    level = effective_level(verbose_count, quiet_count)
    handlers = configure_logging(
        level,
        debug_mode=debug,
        color=ctx.color is not False,
        log_path=log_path if flight_recorder else None,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    log_startup(
        logger,
        level=logging.DEBUG if debug else level,
        handlers=handlers,
        logger_levels=logger_levels,
    )
    ctx.call_on_close(logging.shutdown)


tdbind.add_command(generate)
