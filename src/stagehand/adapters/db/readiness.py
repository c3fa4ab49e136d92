"""SQLAlchemy-backed readiness probe.

Opens one connection and runs ``SELECT 1``. That covers both reachability and
authentication, which is what ``mysqladmin ping`` was used for.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from stagehand.interfaces.readiness import ReadinessProbe

from .engine import make_engine

if TYPE_CHECKING:
    from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)


class SqlAlchemyReadinessProbe(ReadinessProbe):
    """Readiness probe that connects through SQLAlchemy."""

    def __init__(self, url: URL, timeout: float) -> None:
        self._url = url
        self._engine = make_engine(url, connect_timeout=timeout)

    def check(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.debug(
                "Probe of %s failed: %s",
                self._url.render_as_string(hide_password=True),
                e.__class__.__name__,
            )
            return False
        return True

    def close(self) -> None:
        self._engine.dispose()
