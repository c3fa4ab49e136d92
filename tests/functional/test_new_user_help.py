"""Functional tests for STAGEHAND's CLI help and version output.

This suite verifies:
- The long-form `HELP` prose from `stagehand.entrypoints.cli.main` is rendered on
  `--help` (compared after stripping ANSI and normalizing whitespace).
- The help frame appears (Usage/Options/Commands) along with the environment
  variable epilog and every command group.
- Each command group documents its own subcommands.

Notes:
- Help text can be reflowed by Click; `_normalize()` collapses whitespace so the
  comparison is robust to wrapping.
"""

from __future__ import annotations

import re
from textwrap import dedent
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

import stagehand as stagehand_pkg
from stagehand.entrypoints.cli import main

if TYPE_CHECKING:
    from click.testing import Result

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")  # strip SGR styling only


def _normalize(s: str) -> str:
    """Return `s` with leading/trailing space trimmed and internal whitespace collapsed."""
    return re.sub(r"\s+", " ", s.strip())


def _assert_help_displayed(result: Result):
    """Assert that help output contains the project HELP text and expected sections."""
    # pylint: disable=magic-value-comparison
    text = ANSI_RE.sub("", result.output)
    expected_message = _normalize(dedent(main.HELP))
    assert expected_message
    assert expected_message in _normalize(text), "HELP text not rendered."
    assert "Usage:" in text
    assert "Options:" in text
    assert "Commands:" in text
    for group in ("cache", "db", "server", "management"):
        assert re.search(rf"^\s+{group}\s", text, re.MULTILINE), f"{group} not listed"
    assert "Environment:" in text
    assert "MYSQL_HOST" in text


# ============================================================================
#                           Tests
# ============================================================================


class TestNewStagehandUser:
    """An operator new to STAGEHAND tries to get help."""

    @staticmethod
    @pytest.mark.parametrize("args", ([], ["-h"], ["--help"]))
    def test_stagehand_help_output(args: list[str]):
        """Verify that help is shown with no args/-h/--help.

        Given STAGEHAND is available on the PATH
        When `stagehand` is invoked with no args, `-h`, or `--help`
        Then the long HELP prose, the command groups and the environment appear
        """
        result = CliRunner().invoke(main.stagehand, args)
        _assert_help_displayed(result)

    @staticmethod
    def test_stagehand_version_output():
        """User runs --version and sees the version string."""
        result = CliRunner().invoke(main.stagehand, ["--version"])
        assert result.exit_code == 0
        assert stagehand_pkg.__version__ in result.output

    @staticmethod
    @pytest.mark.parametrize(
        ("group", "subcommands"),
        [
            ("cache", ("assemble", "check")),
            ("db", ("wait", "init")),
            ("server", ("start",)),
            ("management", ("start",)),
        ],
    )
    def test_group_help_lists_subcommands(
        invoke, group: str, subcommands: tuple[str, ...]
    ):
        """Each group's help lists its subcommands."""
        result = invoke([group, "--help"])
        assert result.exit_code == 0
        text = ANSI_RE.sub("", result.output)
        for name in subcommands:
            assert name in text

    @staticmethod
    def test_db_init_help_shows_defaults(invoke):
        """The retry budget defaults are visible to the operator."""
        result = invoke(["db", "init", "--help"])
        text = ANSI_RE.sub("", result.output)
        assert result.exit_code == 0
        assert "--attempts" in text
        assert "30" in text
        assert "--init-dir" in text
