"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits log messages, the
directory of sample spec files, and fixtures for a CliRunner and an isolated
filesystem.
"""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from janusspec.entrypoints.cli.main import janusspec

# pylint: disable=redefined-outer-name

SPECS_DIR = Path(__file__).parent / "specs"


@click.command()
def log_demo():
    """Emit representative log messages for CLI/flight-recorder tests."""
    logger = logging.getLogger("janusspec.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and its internal sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command for the duration of a test."""
    janusspec.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(janusspec, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated filesystem."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def spec_file():
    """Resolve a sample spec file by stem."""

    def _resolve(stem: str) -> str:
        return str(SPECS_DIR / f"{stem}.py")

    return _resolve
