"""STAGEHAND server CLI.

``stagehand server start`` waits for MySQL (advisory: a database that never
answers only produces a warning), then replaces itself with the game server:
``./run`` if present, otherwise ``java $JAVA_OPTS -jar Server/server.jar``.

``stagehand management start`` replaces itself with the management server
jar, or with an idle process when the stack ships none.

On a successful handoff these commands never return.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx

from stagehand import config
from stagehand.bootstrap import (
    build_health_probe,
    management_candidates,
    server_candidates,
)
from stagehand.domain.errors import LaunchError, NoExecutableFoundError
from stagehand.service_layer.launcher import (
    idle,
    launch,
    missing_executable,
    run_candidate,
    select_candidate,
)

from .db import SOFT_NOT_READY_MSG, interval_option, wait_for_database
from .helpers import TaggedClickException, info, warn

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stagehand.bootstrap import AppContainer
    from stagehand.domain.value_objects import LaunchCandidate

NO_EXECUTABLE_MSG = "No server executable found!"


def _app_dir_option(func):
    return click.option(
        "--app-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Server directory (defaults to STAGEHAND_APP_DIR, then /app/2009scape).",
    )(func)


def _tagged(e: LaunchError) -> TaggedClickException:
    if isinstance(e, NoExecutableFoundError):
        return TaggedClickException(
            NO_EXECUTABLE_MSG, [f"Contents of {e.directory}:", *e.listing]
        )
    return TaggedClickException(str(e))


def _handoff(
    app: AppContainer,
    candidates: Sequence[LaunchCandidate],
    workdir: Path,
    java_opts: str,
) -> None:
    try:
        launch(
            candidates, workdir=workdir, replacer=app.replacer, java_opts=java_opts
        )
    except LaunchError as e:
        raise _tagged(e) from e


@click.group(cls=clickx.ExtraGroup)
def server() -> None:
    """Game server commands."""


@server.command()
@_app_dir_option
@click.option(
    "--attempts",
    type=click.IntRange(min=1),
    default=config.SERVER_START_MAX_ATTEMPTS,
    show_default=True,
    help="Number of database readiness probes before starting anyway.",
)
@interval_option
@click.pass_obj
def start(
    app: AppContainer, app_dir: Path | None, attempts: int, interval: float
) -> None:
    """Wait for the database, then hand off to the game server."""
    settings = app.settings
    info("=== Starting Rustscape Game Server ===")

    probe = build_health_probe(
        settings,
        max_attempts=attempts,
        interval=interval,
        fail_on_exhaustion=False,
    )
    if not wait_for_database(app, probe):
        warn(SOFT_NOT_READY_MSG)

    workdir = app_dir or settings.app_dir
    info(f"Starting 2009scape server from {workdir}...")
    _handoff(app, server_candidates(), workdir, settings.java_opts)


@click.group(cls=clickx.ExtraGroup)
def management() -> None:
    """Management server commands."""


@management.command(name="start")
@_app_dir_option
@click.option(
    "--port",
    type=click.IntRange(min=1, max=65535),
    default=None,
    help="Management port (defaults to MANAGEMENT_PORT, then 5555).",
)
@click.option(
    "--keep-alive/--no-keep-alive",
    default=True,
    show_default=True,
    help="Idle instead of failing when no management server is installed.",
)
@click.pass_obj
def start_management(
    app: AppContainer, app_dir: Path | None, port: int | None, keep_alive: bool
) -> None:
    """Hand off to the management server."""
    settings = app.settings
    workdir = Path(app_dir or settings.app_dir).resolve()
    port = port or settings.management_port
    info("=== Starting Rustscape Management Server ===")

    candidate = select_candidate(management_candidates(port), workdir)
    try:
        if candidate is None and keep_alive:
            info("No separate management server found")
            info("Management API should be available on the main server")
            idle(workdir=workdir, replacer=app.replacer)

        info(f"Starting management server on port {port}...")
        if candidate is None:
            raise missing_executable(workdir)
        # JAVA_OPTS is not applied to the management server
        run_candidate(candidate, workdir=workdir, replacer=app.replacer)
    except LaunchError as e:
        raise _tagged(e) from e
