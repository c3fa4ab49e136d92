"""STAGEHAND CLI entry point.

Defines the top-level ``stagehand`` command (via Click-Extra), configures
logging, builds the application container from the environment, and
registers the command groups:

- ``stagehand cache``: assemble / check the split game cache.
- ``stagehand db``: wait for MySQL, bootstrap the database.
- ``stagehand server``: wait for MySQL, then hand off to the game server.
- ``stagehand management``: hand off to the management server.

Examples
    $ stagehand cache assemble --cache-dir /app/cache
    $ stagehand -v db init
    $ stagehand server start
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from stagehand import __version__
from stagehand.bootstrap import bootstrap
from stagehand.config import InvalidSettingError, Settings
from stagehand.logging import config_console_handler, config_flight_recorder, log_startup

from .cache import cache as cache_group
from .db import db as db_group
from .helpers import TaggedClickException, parse_log_level
from .server import management as management_group
from .server import server as server_group

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """STAGEHAND command-line interface.

    Startup orchestrator for the Rustscape server stack: reassembles the split
    game cache, waits for MySQL, bootstraps the database and its init scripts,
    and hands the process over to the game server.
    """

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('Environment:', fg='blue', bold=True, underline=True)}",
        "  MYSQL_HOST, MYSQL_USER, MYSQL_PASSWORD, MYSQL_DATABASE,",
        "  JAVA_OPTS, MANAGEMENT_PORT, STAGEHAND_APP_DIR,",
        "  STAGEHAND_INITDB_DIR, STAGEHAND_CACHE_DIR",
    ]
)


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
    help="Raise console verbosity by one level per repetition (default WARNING).",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Lower console verbosity by one level per repetition (default WARNING).",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (timestamps, logger names and source paths).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Flight recorder file.",
    default=Path(user_log_dir("stagehand", appauthor=False)) / "latest.log",
    envvar="STAGEHAND_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="STAGEHAND_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records at DEBUG granularity and write them to "
        "--log-path when a WARNING/ERROR occurs (or on exit with --force-flush)."
    ),
    default=True,
    envvar="STAGEHAND_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Always write the flight recorder buffer to --log-path on exit or handoff.",
    default=False,
    envvar="STAGEHAND_FORCE_FLUSH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Repeatable "
        "(e.g. -L sqlalchemy=INFO -L pymysql=DEBUG) or via STAGEHAND_LOGGER_LEVELS."
    ),
    default=("sqlalchemy=WARNING", "pymysql=WARNING"),
    envvar="STAGEHAND_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def stagehand(  # pylint: disable=too-many-arguments, too-many-positional-arguments
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
    """STAGEHAND command-line interface."""

    # 0) effective console level
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    # 1) handlers
    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 2) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 3) per-logger overrides
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)

    # 4) application container; tests inject their own through ``obj``
    if ctx.obj is None:
        try:
            settings = Settings.from_env()
        except InvalidSettingError as e:
            raise TaggedClickException(str(e)) from e
        logger.debug("Settings: %r", settings)
        ctx.obj = bootstrap(settings)


stagehand.add_command(cache_group)
stagehand.add_command(db_group)
stagehand.add_command(server_group)
stagehand.add_command(management_group)
