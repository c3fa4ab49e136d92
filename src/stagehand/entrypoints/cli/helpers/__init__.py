"""CLI helpers for STAGEHAND.

Tagged status-line emitters, the matching error type, and the ``NAME=LEVEL``
option parser.
"""

from .errors import TaggedClickException
from .log_level_parser import parse_log_level
from .messages import info, ok, success, warn

__all__ = [
    "TaggedClickException",
    "info",
    "ok",
    "parse_log_level",
    "success",
    "warn",
]
