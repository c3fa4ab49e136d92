"""Database engine factory and helpers.

This module centralizes creation of SQLAlchemy Engines for STAGEHAND:

- **MySQL**: connect/read timeouts are passed to PyMySQL so a readiness probe
  against a dead host fails fast instead of hanging.
- **SQLite**: used by tests; enables foreign keys on connect.

Engines use `NullPool`: STAGEHAND opens a handful of short-lived connections
at startup and must not keep any of them open after handing the process over.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import NullPool

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}
MYSQL_BACKEND = "mysql"


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    u = make_url(str(url)) if isinstance(url, str) else url
    return u.get_backend_name() in SQLITE_NAMES


def is_mysql(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to MySQL."""
    u = make_url(str(url)) if isinstance(url, str) else url
    return u.get_backend_name() == MYSQL_BACKEND


def make_engine(
    url: str | URL, *, echo: bool = False, connect_timeout: float | None = None
) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.
        connect_timeout: For MySQL, seconds allowed to connect and to read a
            reply. Ignored for other backends.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """
    connect_args: dict[str, Any] = {}
    if connect_timeout is not None and is_mysql(url):
        connect_args["connect_timeout"] = connect_timeout
        connect_args["read_timeout"] = connect_timeout

    engine = create_engine(
        url, echo=echo, poolclass=NullPool, connect_args=connect_args
    )

    if is_sqlite(url):

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.close()

    return engine
