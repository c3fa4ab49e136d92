"""SQLAlchemy-backed database administration.

Implements `DatabaseAdmin` against a MySQL server URL (no database selected):

- existence is checked through ``information_schema.SCHEMATA`` with a bound
  parameter,
- creation uses ``CREATE DATABASE IF NOT EXISTS`` with the dialect's own
  identifier quoting, so concurrent replicas cannot race,
- init scripts run statement by statement on one connection, inside one
  transaction, against the selected database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from stagehand.domain.errors import ResourceError
from stagehand.interfaces.database import CHARACTER_SET, COLLATION, DatabaseAdmin

from .engine import make_engine
from .sql_script import split_statements

if TYPE_CHECKING:
    from sqlalchemy.engine import URL, Engine

logger = logging.getLogger(__name__)

SCHEMA_EXISTS_SQL = text(
    "SELECT SCHEMA_NAME FROM information_schema.SCHEMATA WHERE SCHEMA_NAME = :name"
)


class SqlAlchemyDatabaseAdmin(DatabaseAdmin):
    """DatabaseAdmin for a MySQL server reached through SQLAlchemy."""

    def __init__(self, server_url: URL, *, connect_timeout: float | None = None):
        self._server_url = server_url
        self._connect_timeout = connect_timeout
        self._engine: Engine = make_engine(server_url, connect_timeout=connect_timeout)

    def create_database_sql(self, name: str) -> str:
        """Render the create-if-not-exists statement for ``name``."""
        quoted = self._engine.dialect.identifier_preparer.quote_identifier(name)
        return (
            f"CREATE DATABASE IF NOT EXISTS {quoted} "
            f"CHARACTER SET {CHARACTER_SET} COLLATE {COLLATION}"
        )

    def database_exists(self, name: str) -> bool:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(SCHEMA_EXISTS_SQL, {"name": name}).first()
        except SQLAlchemyError as e:
            raise ResourceError(name, e) from e
        return row is not None

    def create_database(self, name: str) -> None:
        stmt = self.create_database_sql(name)
        try:
            with self._engine.begin() as conn:
                conn.exec_driver_sql(stmt)
        except SQLAlchemyError as e:
            raise ResourceError(name, e) from e

    def execute_script(self, name: str, script: str) -> None:
        statements = split_statements(script)
        engine = make_engine(
            self._server_url.set(database=name),
            connect_timeout=self._connect_timeout,
        )
        try:
            with engine.begin() as conn:
                for stmt in statements:
                    conn.exec_driver_sql(stmt)
        finally:
            engine.dispose()
        logger.debug("Executed %d statement(s) against %s", len(statements), name)

    def close(self) -> None:
        self._engine.dispose()
