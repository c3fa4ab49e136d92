"""Fixtures for end-to-end CLI logging tests.

A test-only ``log-demo`` command is grafted onto the ``stagehand`` group. It
emits one record per level on a project logger and a few on a third-party
logger, so the tests can check console verbosity, ``-L`` overrides and the
flight recorder without talking to MySQL.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from stagehand.entrypoints.cli.main import stagehand

# pylint: disable=redefined-outer-name

DEMO_LOGGER = "stagehand.demo"
THIRD_PARTY_LOGGER = "docker.api"


@click.command()
def log_demo():
    """Emit one record per level, then a DEBUG record after the WARNING."""
    log = logging.getLogger(DEMO_LOGGER)
    log.debug("Probing launch candidate run")
    log.info("Waiting for MySQL at db to be ready...")
    log.warning("db did not become ready after 60 attempts, continuing anyway")
    log.error("No server executable found.")
    log.critical("Handoff failed.")
    lib = logging.getLogger(THIRD_PARTY_LOGGER)
    lib.debug("third-party debug record")
    lib.info("third-party info record")
    lib.warning("third-party warning record")
    log.debug("Trailing debug record")


@pytest.fixture
def registered_log_demo():
    """Attach ``log-demo`` to the top-level group for one test."""
    stagehand.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        stagehand.commands.pop("log-demo", None)
        # Click-Extra keeps its own per-section registries
        for section in getattr(stagehand, "_sections", []):
            getattr(section, "commands", {}).pop("log-demo", None)
        default = getattr(stagehand, "_default_section", None)
        if default is not None:
            default.commands.pop("log-demo", None)


@pytest.fixture
def runner():
    """CliRunner for invoking the CLI."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield
