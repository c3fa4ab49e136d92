"""Wire settings to adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import URL

from stagehand import config
from stagehand.adapters.db import SqlAlchemyDatabaseAdmin, SqlAlchemyReadinessProbe
from stagehand.adapters.process import ExecProcessReplacer
from stagehand.domain.value_objects import (
    Credential,
    HealthProbe,
    InvocationStrategy,
    LaunchCandidate,
)
from stagehand.interfaces.database import DatabaseAdmin
from stagehand.interfaces.process import ProcessReplacer
from stagehand.interfaces.readiness import ReadinessProbe


@dataclass(frozen=True)
class AppContainer:
    """Collaborators handed to CLI commands."""

    settings: config.Settings
    readiness_probe_factory: Callable[[HealthProbe], ReadinessProbe]
    database_admin_factory: Callable[[], DatabaseAdmin]
    replacer: ProcessReplacer


def server_candidates() -> list[LaunchCandidate]:
    """Game server entry points, in priority order."""
    return [
        LaunchCandidate(Path("run"), InvocationStrategy.EXECUTABLE),
        LaunchCandidate(Path("Server/server.jar"), InvocationStrategy.JAVA_JAR),
    ]


def management_candidates(port: int) -> list[LaunchCandidate]:
    """Management server entry points, in priority order."""
    args = ("--port", str(port))
    return [
        LaunchCandidate(Path("Server/management.jar"), InvocationStrategy.JAVA_JAR, args),
        LaunchCandidate(Path("management.jar"), InvocationStrategy.JAVA_JAR, args),
    ]


def build_health_probe(
    settings: config.Settings,
    *,
    max_attempts: int,
    interval: float = config.RETRY_INTERVAL,
    timeout: float = config.PROBE_TIMEOUT,
    fail_on_exhaustion: bool = True,
) -> HealthProbe:
    """Describe a readiness wait against the configured MySQL server."""
    return HealthProbe(
        target=settings.mysql_host,
        credential=Credential(settings.mysql_user, settings.mysql_password),
        timeout=timeout,
        interval=interval,
        max_attempts=max_attempts,
        fail_on_exhaustion=fail_on_exhaustion,
    )


def build_readiness_probe(probe: HealthProbe) -> ReadinessProbe:
    """Build a MySQL connectivity+auth check from ``probe``."""
    host, port = config.split_host(probe.target)
    url = URL.create(
        config.MYSQL_DRIVER,
        username=probe.credential.username,
        password=probe.credential.password,
        host=host,
        port=port,
    )
    return SqlAlchemyReadinessProbe(url, timeout=probe.timeout)


def bootstrap(settings: config.Settings) -> AppContainer:
    """Build the production collaborators for ``settings``."""

    def make_admin() -> DatabaseAdmin:
        return SqlAlchemyDatabaseAdmin(
            settings.server_url(), connect_timeout=config.PROBE_TIMEOUT
        )

    return AppContainer(
        settings=settings,
        readiness_probe_factory=build_readiness_probe,
        database_admin_factory=make_admin,
        replacer=ExecProcessReplacer(),
    )
