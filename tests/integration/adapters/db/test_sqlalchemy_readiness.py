"""Integration tests for `SqlAlchemyReadinessProbe`."""

from sqlalchemy.engine import URL

from stagehand.adapters.db.readiness import SqlAlchemyReadinessProbe
from stagehand.config import MYSQL_DRIVER


def test_reachable_database_is_ready(sqlite_server_url):
    """A database that accepts connections reports ready."""
    probe = SqlAlchemyReadinessProbe(sqlite_server_url, timeout=1.0)
    try:
        assert probe.check() is True
    finally:
        probe.close()


def test_unreachable_server_is_not_ready():
    """Connection refused is "not ready", not an exception."""
    url = URL.create(MYSQL_DRIVER, username="u", password="p", host="127.0.0.1", port=1)
    probe = SqlAlchemyReadinessProbe(url, timeout=1.0)
    try:
        assert probe.check() is False
    finally:
        probe.close()


def test_unopenable_database_is_not_ready(tmp_path):
    """A SQLite path that cannot be opened is "not ready"."""
    url = URL.create("sqlite+pysqlite", database=str(tmp_path / "missing-dir" / "x.db"))
    probe = SqlAlchemyReadinessProbe(url, timeout=1.0)
    try:
        assert probe.check() is False
    finally:
        probe.close()
