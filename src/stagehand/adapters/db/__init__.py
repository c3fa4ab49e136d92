"""SQLAlchemy-backed database adapters."""

from .admin import SqlAlchemyDatabaseAdmin
from .engine import make_engine
from .readiness import SqlAlchemyReadinessProbe

__all__ = ["SqlAlchemyDatabaseAdmin", "SqlAlchemyReadinessProbe", "make_engine"]
