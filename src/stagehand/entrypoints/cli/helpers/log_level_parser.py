"""Parser for ``-L NAME=LEVEL`` logger-level options.

Values arrive either as repeated CLI flags (a tuple) or as one environment
variable string; both may hold several comma- or space-separated pairs.
"""

import logging
import re

import click

# Library loggers quieted unless overridden
DEFAULT_LIB_LEVELS = {"sqlalchemy": logging.WARNING, "pymysql": logging.WARNING}

_SEPARATORS = re.compile(r"[,\s]+")


def _split_pairs(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Flatten ``value`` into individual ``NAME=LEVEL`` strings."""
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in _SEPARATORS.split(chunk) if item]


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback turning ``NAME=LEVEL`` pairs into a name -> level mapping.

    Starts from `DEFAULT_LIB_LEVELS`; later pairs override earlier ones.
    Level names are case-insensitive.

    Raises:
        click.BadParameter: On a malformed pair or an unknown level name.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for pair in _split_pairs(value):
        name, sep, level_name = pair.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {pair!r}")
        level = logging.getLevelNamesMapping().get(level_name.strip().upper())
        if level is None:
            raise click.BadParameter(f"Invalid log level: {level_name}")
        levels[name.strip()] = level
    return levels
