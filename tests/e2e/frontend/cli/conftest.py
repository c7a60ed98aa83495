"""Fixtures and helpers for end-to-end tests of the ``pathkit`` command.

Provides a test-only `log-demo` command that emits one message per level on a
``pathkit.demo`` logger and a third-party logger, fixtures to register it and
to run the CLI inside an isolated working directory.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from pathkit.domain.absolute_path import AbsolutePath
from pathkit.entrypoints.cli.main import pathkit

# pylint: disable=redefined-outer-name,unused-argument


@click.command()
def log_demo():
    """Emit one message per level on 'pathkit.demo' and 'some.thirdparty'.

    The final DEBUG message comes after the first WARNING, so it only reaches
    the flight-recorder file when the buffer is force-flushed on exit.
    """
    logger = logging.getLogger("pathkit.demo")
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


@pytest.fixture
def registered_log_demo():
    """Register 'log-demo' on the `pathkit` group for the duration of a test."""
    pathkit.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        pathkit.commands.pop("log-demo", None)
        # cloup also tracks subcommands per help section
        for section in getattr(pathkit, "_section_set", ()):
            section.commands.pop("log-demo", None)


@pytest.fixture
def runner():
    """Return a CliRunner that keeps stdout and stderr apart."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside ``runner.isolated_filesystem()``."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def workspace(fs) -> AbsolutePath:
    """The isolated working directory as an `AbsolutePath`."""
    return AbsolutePath.resolve(".")


@pytest.fixture
def invoke(runner, fs):
    """Invoke ``pathkit`` with the flight recorder off and return the result."""

    def _invoke(*args: str, **kwargs):
        return runner.invoke(pathkit, ["--no-flight-recorder", *args], **kwargs)

    return _invoke
