"""Fixtures and helpers for end-to-end CLI tests.

Provides a test-only `log-demo` command that emits log messages at every
level, fixtures to register it on the `tdbind` group, a CliRunner, an
isolated filesystem, and a schema document on disk.
"""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from tdbind.codegen.loader import SchemaDocument
from tdbind.entrypoints.cli.main import tdbind
from tests.helpers.schema import SAMPLE_SCHEMA

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit messages on `tdbind.demo` and on a third-party logger."""
    logger = logging.getLogger("tdbind.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and the sections Click-Extra keeps."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register `log-demo` on `tdbind` for the duration of a test."""
    tdbind.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(tdbind, "log-demo")
        for name in ("tdbind.demo", "some.thirdparty"):
            logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def runner():
    """A CliRunner whose flight recorder writes inside the working directory."""
    return CliRunner(env={"TDBIND_LOG_PATH": "tdbind.log"})


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def schema_file(fs) -> Path:
    """The sample schema written as a document in the working directory."""
    path = Path("td_api.json")
    path.write_text(
        SchemaDocument(definitions=SAMPLE_SCHEMA).model_dump_json(indent=2),
        encoding="utf-8",
    )
    return path
