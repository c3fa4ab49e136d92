"""Tagged status lines for the STAGEHAND CLI.

Every user-visible status line starts with a bracketed severity tag:
``[INFO]``, ``[OK]``, ``[WARN]``, ``[ERROR]`` or ``[SUCCESS]``. Deployment
tooling greps for these, so the tags are stable. Lines go to **stderr** so
stdout stays free for data. ``[ERROR]`` lines come from `TaggedClickException`.
"""

import click

INFO = "INFO"
OK = "OK"
WARN = "WARN"
ERROR = "ERROR"
SUCCESS = "SUCCESS"

TAG_COLORS = {
    INFO: "blue",
    OK: "green",
    WARN: "yellow",
    ERROR: "red",
    SUCCESS: "green",
}


def format_line(tag: str, msg: str) -> str:
    """Return ``msg`` prefixed with a colored ``[tag]``.

    Args:
        tag: One of the severity tags defined in this module.
        msg: The message to display.

    Returns:
        str: The styled line (colors are stripped by Click when not a TTY).
    """
    return f"{click.style(f'[{tag}]', fg=TAG_COLORS[tag], bold=True)} {msg}"


def _emit(tag: str, msg: str) -> None:
    click.echo(format_line(tag, msg), err=True)


def info(msg: str) -> None:
    """Emit an ``[INFO]`` line."""
    _emit(INFO, msg)


def ok(msg: str) -> None:
    """Emit an ``[OK]`` line, for checks that passed."""
    _emit(OK, msg)


def warn(msg: str) -> None:
    """Emit a ``[WARN]`` line.

    Example:
        ``[WARN] Could not connect to database, starting server anyway...``
    """
    _emit(WARN, msg)


def success(msg: str) -> None:
    """Emit a ``[SUCCESS]`` line, for completed actions."""
    _emit(SUCCESS, msg)
