"""Database administration interface.

Defines the DatabaseAdmin contract used by the bootstrapper: an existence
check and an idempotent create for the named database, plus execution of an
init script against it.
"""

from __future__ import annotations

import abc

CHARACTER_SET = "utf8mb4"
COLLATION = "utf8mb4_unicode_ci"


class DatabaseAdmin(abc.ABC):
    """Contract for administering the application database.

    Implementations translate driver errors into
    `stagehand.domain.errors.ResourceError` (for ``database_exists`` and
    ``create_database``); ``execute_script`` may raise any exception, which the
    bootstrapper wraps into a `UnitError`.
    """

    @abc.abstractmethod
    def database_exists(self, name: str) -> bool:
        """Return True if the database ``name`` exists."""

    @abc.abstractmethod
    def create_database(self, name: str) -> None:
        """Create ``name`` with create-if-not-exists semantics.

        Uses the ``utf8mb4`` character set and ``utf8mb4_unicode_ci``
        collation. Must be safe when several replicas call it concurrently.
        """

    @abc.abstractmethod
    def execute_script(self, name: str, script: str) -> None:
        """Execute every statement of ``script`` against the database ``name``."""

    def close(self) -> None:
        """Release any resources held by the admin."""
