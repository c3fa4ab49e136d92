"""Logging setup for the STAGEHAND command line.

Two handlers hang off the root logger:

- a Rich console handler on stderr whose level follows ``-v``/``-q``, and
- an optional "flight recorder": an in-memory buffer of DEBUG records that is
  written to a file only when something goes wrong (WARNING or above), so a
  failed container start leaves a full trace behind without noisy consoles.

Records from other libraries (SQLAlchemy, PyMySQL, ...) are tagged with a
short ``[library]`` prefix on the console.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from importlib.metadata import version as dist_version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "stagehand"
FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d] %(levelname)s %(name)s:%(lineno)d: %(message)s"
)

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from outside the project with ``[top-level-package]``.

    Project records get an empty prefix. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            # "sqlalchemy.engine.Engine" -> "[sqlalchemy]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the Rich console handler.

    Args:
        level: Minimum level shown on the console. Forced to DEBUG in debug mode.
        debug_mode: Show timestamps, logger names and source paths.
        color: Emit ANSI colors; mirrors Click-Extra's ``--color/--no-color``.

    Returns:
        RichHandler: Handler writing to stderr.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder.

    Keeps up to ``capacity`` records in memory and dumps them to ``path`` when
    a record at ``flush_level`` or above arrives, or when the handler closes
    and ``flush_on_close`` is set.

    Args:
        path: File the buffer is written to.
        capacity: Number of records buffered.
        flush_level: Level that triggers a dump.
        flush_on_close: Dump on close (normal exit or process handoff).

    Returns:
        MemoryHandler: Buffering handler targeting a FileHandler.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    flight_capacity: int | None,
    force_flush_fr: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line summary at INFO and environment diagnostics at DEBUG.

    Args:
        logger: Logger to write to.
        app_version: STAGEHAND version.
        level: Effective console level.
        handlers: Handlers attached to the root logger.
        log_path: Flight recorder file, if any.
        flight_recorder: Whether the flight recorder is on.
        flight_capacity: Flight recorder capacity, if on.
        force_flush_fr: Whether the recorder dumps on close.
        logger_levels: Per-logger level overrides.
    """
    logger.info(
        "STAGEHAND %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("PyMySQL: %s", dist_version("PyMySQL"))
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            str(log_path) if log_path else "<none>",
            flight_capacity,
            force_flush_fr,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
