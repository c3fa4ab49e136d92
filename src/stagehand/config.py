"""Configuration for STAGEHAND.

All environment lookups happen here, once, when the CLI starts. Components
receive a `Settings` instance (or values taken from it) and never read the
environment themselves.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy.engine import URL

MYSQL_DRIVER = "mysql+pymysql"

DEFAULT_MYSQL_HOST = "localhost"
DEFAULT_MYSQL_USER = "jordan"
DEFAULT_MYSQL_PASSWORD = "123456"
DEFAULT_MYSQL_DATABASE = "global"
DEFAULT_MANAGEMENT_PORT = 5555
DEFAULT_APP_DIR = Path("/app/2009scape")
DEFAULT_INITDB_DIR = Path("/docker-entrypoint-initdb.d")
DEFAULT_CACHE_DIR = Path("cache")

CACHE_DATA_FILE = "main_file_cache.dat2"
CACHE_FRAGMENT_PATTERN = "main_file_cache.dat2.part_*"
CACHE_INDEX_PATTERN = "main_file_cache.idx*"
CACHE_PRIMARY_INDEX = "main_file_cache.idx0"
CACHE_MIN_VALID_SIZE = 80_000_000

INIT_UNIT_SUFFIX = ".sql"

DB_INIT_MAX_ATTEMPTS = 30
SERVER_START_MAX_ATTEMPTS = 60
RETRY_INTERVAL = 2.0
PROBE_TIMEOUT = 5.0


class InvalidSettingError(ValueError):
    """Raised when an environment variable holds an unusable value."""


def _get(environ: Mapping[str, str], key: str, default: str) -> str:
    """Shell ``${VAR:-default}`` semantics: unset and empty both use the default."""
    return environ.get(key) or default


def _get_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidSettingError(f"{key} must be an integer, got {raw!r}") from e


def split_host(host: str) -> tuple[str, int | None]:
    """Split ``host[:port]`` into its parts.

    Args:
        host: A hostname, optionally followed by ``:port``.

    Returns:
        The hostname and the port (None when absent).

    Raises:
        InvalidSettingError: If the port is not numeric.
    """
    name, sep, port = host.rpartition(":")
    if not sep:
        return host, None
    if not port.isdigit():
        raise InvalidSettingError(f"Invalid port in MYSQL_HOST: {host!r}")
    return name, int(port)


@dataclass(frozen=True)
class Settings:
    """Startup configuration, populated once from the environment.

    Attributes:
        mysql_host: ``MYSQL_HOST`` (``host`` or ``host:port``).
        mysql_user: ``MYSQL_USER``.
        mysql_password: ``MYSQL_PASSWORD``; never shown in ``repr``.
        mysql_database: ``MYSQL_DATABASE``.
        java_opts: ``JAVA_OPTS``, passed through to ``java`` verbatim.
        management_port: ``MANAGEMENT_PORT``.
        app_dir: ``STAGEHAND_APP_DIR``, where the server is launched from.
        initdb_dir: ``STAGEHAND_INITDB_DIR``, where init units live.
        cache_dir: ``STAGEHAND_CACHE_DIR``, where the cache is assembled.
    """

    mysql_host: str = DEFAULT_MYSQL_HOST
    mysql_user: str = DEFAULT_MYSQL_USER
    mysql_password: str = field(default=DEFAULT_MYSQL_PASSWORD, repr=False)
    mysql_database: str = DEFAULT_MYSQL_DATABASE
    java_opts: str = ""
    management_port: int = DEFAULT_MANAGEMENT_PORT
    app_dir: Path = DEFAULT_APP_DIR
    initdb_dir: Path = DEFAULT_INITDB_DIR
    cache_dir: Path = DEFAULT_CACHE_DIR

    def __post_init__(self) -> None:
        split_host(self.mysql_host)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Raises:
            InvalidSettingError: If a numeric variable or the MYSQL_HOST port
                is malformed.
        """
        env = os.environ if environ is None else environ
        return cls(
            mysql_host=_get(env, "MYSQL_HOST", DEFAULT_MYSQL_HOST),
            mysql_user=_get(env, "MYSQL_USER", DEFAULT_MYSQL_USER),
            mysql_password=_get(env, "MYSQL_PASSWORD", DEFAULT_MYSQL_PASSWORD),
            mysql_database=_get(env, "MYSQL_DATABASE", DEFAULT_MYSQL_DATABASE),
            java_opts=env.get("JAVA_OPTS", ""),
            management_port=_get_int(env, "MANAGEMENT_PORT", DEFAULT_MANAGEMENT_PORT),
            app_dir=Path(_get(env, "STAGEHAND_APP_DIR", str(DEFAULT_APP_DIR))),
            initdb_dir=Path(_get(env, "STAGEHAND_INITDB_DIR", str(DEFAULT_INITDB_DIR))),
            cache_dir=Path(_get(env, "STAGEHAND_CACHE_DIR", str(DEFAULT_CACHE_DIR))),
        )

    def server_url(self) -> URL:
        """SQLAlchemy URL for the MySQL server, without selecting a database."""
        host, port = split_host(self.mysql_host)
        return URL.create(
            MYSQL_DRIVER,
            username=self.mysql_user,
            password=self.mysql_password,
            host=host,
            port=port,
        )

    def database_url(self) -> URL:
        """SQLAlchemy URL for the application database."""
        return self.server_url().set(database=self.mysql_database)
