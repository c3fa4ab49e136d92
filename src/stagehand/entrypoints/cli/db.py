"""STAGEHAND DB CLI.

``stagehand db wait`` blocks until MySQL accepts a connection with the
configured credentials; ``stagehand db init`` waits, makes sure the
application database exists, and runs the ``*.sql`` init units.

Connection settings come from ``MYSQL_HOST``, ``MYSQL_USER``,
``MYSQL_PASSWORD`` and ``MYSQL_DATABASE`` (see `stagehand.config`).

Failure modes
- MySQL not ready within the retry budget → exit 1, unless ``--soft``.
- Database cannot be checked/created → exit 1.
- An init unit fails → exit 1; later units are not run.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx

from stagehand import config
from stagehand.bootstrap import build_health_probe
from stagehand.domain.errors import ReadinessTimeoutError, ResourceError, UnitError
from stagehand.service_layer.bootstrapper import ensure_resource, run_init_units
from stagehand.service_layer.readiness import wait_until_ready

from .helpers import TaggedClickException, info, ok, success, warn

if TYPE_CHECKING:
    from stagehand.bootstrap import AppContainer
    from stagehand.domain.value_objects import HealthProbe

NOT_READY_MSG = "MySQL did not become ready in time"
SOFT_NOT_READY_MSG = "Could not connect to database, continuing anyway..."


def wait_for_database(app: AppContainer, probe: HealthProbe) -> bool:
    """Run a readiness wait and report it on the console.

    Returns:
        bool: True if MySQL became ready; False on a tolerated exhaustion.

    Raises:
        TaggedClickException: On exhaustion when the probe is fatal.
    """
    info(f"Waiting for MySQL at {probe.target} to be ready...")
    checker = app.readiness_probe_factory(probe)
    try:
        ready = wait_until_ready(probe, checker)
    except ReadinessTimeoutError as e:
        raise TaggedClickException(NOT_READY_MSG, [str(e)]) from e
    finally:
        checker.close()

    if ready:
        ok("MySQL is ready!")
    return ready


def _attempts_option(default: int):
    return click.option(
        "--attempts",
        type=click.IntRange(min=1),
        default=default,
        show_default=True,
        help="Number of readiness probes before giving up.",
    )


interval_option = click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=config.RETRY_INTERVAL,
    show_default=True,
    help="Seconds to wait after each failed probe.",
)

timeout_option = click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=config.PROBE_TIMEOUT,
    show_default=True,
    help="Seconds allowed for a single probe.",
)


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Database readiness and bootstrap commands."""


@db.command()
@_attempts_option(config.DB_INIT_MAX_ATTEMPTS)
@interval_option
@timeout_option
@click.option(
    "--soft",
    is_flag=True,
    help="Warn and exit 0 instead of failing when MySQL never becomes ready.",
)
@click.pass_obj
def wait(
    app: AppContainer, attempts: int, interval: float, timeout: float, soft: bool
) -> None:
    """Wait for MySQL to accept connections."""
    probe = build_health_probe(
        app.settings,
        max_attempts=attempts,
        interval=interval,
        timeout=timeout,
        fail_on_exhaustion=not soft,
    )
    if not wait_for_database(app, probe):
        warn(SOFT_NOT_READY_MSG)


@db.command()
@click.option(
    "--init-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of *.sql init units (defaults to STAGEHAND_INITDB_DIR).",
)
@_attempts_option(config.DB_INIT_MAX_ATTEMPTS)
@interval_option
@click.pass_obj
def init(
    app: AppContainer, init_dir: Path | None, attempts: int, interval: float
) -> None:
    """Wait for MySQL, ensure the database exists, and run init units."""
    settings = app.settings
    name = settings.mysql_database
    info("=== Rustscape Database Initialization ===")

    probe = build_health_probe(settings, max_attempts=attempts, interval=interval)
    wait_for_database(app, probe)

    admin = app.database_admin_factory()
    try:
        info(f"Checking database {name}...")
        if ensure_resource(admin, name):
            success(f"Database {name} created successfully")
        else:
            info(f"Database {name} already exists")

        count = run_init_units(admin, name, init_dir or settings.initdb_dir)
    except ResourceError as e:
        raise TaggedClickException(str(e)) from e
    except UnitError as e:
        raise TaggedClickException(f"SQL script failed: {e.unit_name}", [str(e.cause)]) from e
    finally:
        admin.close()

    info(f"Ran {count} SQL script(s)")
    success("Database initialization complete")
