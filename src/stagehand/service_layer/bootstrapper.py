"""Database bootstrap.

`ensure_resource` makes sure the application database exists;
`run_init_units` then applies the ``*.sql`` init units found in a directory,
in lexicographic order, stopping at the first failure.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from stagehand import config
from stagehand.domain.errors import ResourceError, UnitError
from stagehand.domain.value_objects import InitUnit

if TYPE_CHECKING:
    from stagehand.interfaces.database import DatabaseAdmin

logger = logging.getLogger(__name__)


def ensure_resource(admin: DatabaseAdmin, name: str) -> bool:
    """Make sure the database ``name`` exists.

    Args:
        admin: Database administration port.
        name: Database to ensure.

    Returns:
        bool: True if the database was created, False if it already existed.

    Raises:
        ResourceError: If the name is empty or the server rejects the request.
    """
    if not name:
        raise ResourceError(name, "database name is empty")

    if admin.database_exists(name):
        logger.info("Database %s already exists", name)
        return False

    logger.info("Creating database %s...", name)
    admin.create_database(name)
    logger.info("Database %s created", name)
    return True


def list_init_units(
    directory: Path, suffix: str = config.INIT_UNIT_SUFFIX
) -> list[InitUnit]:
    """Return the init units in ``directory``, sorted by name.

    A missing directory yields an empty list.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        InitUnit(name=p.name, path=p)
        for p in directory.iterdir()
        if p.is_file() and p.name.endswith(suffix)
    )


def run_init_units(
    admin: DatabaseAdmin,
    database: str,
    directory: Path,
    suffix: str = config.INIT_UNIT_SUFFIX,
) -> int:
    """Execute the init units of ``directory`` against ``database`` in order.

    Args:
        admin: Database administration port.
        database: Database the units run against.
        directory: Directory holding the units.
        suffix: File suffix identifying a unit.

    Returns:
        int: Number of units executed.

    Raises:
        UnitError: On the first unit that cannot be read or executed. Units
            after it are not run.
    """
    units = list_init_units(directory, suffix)
    if not units:
        logger.info("No init units in %s", directory)
        return 0

    for unit in units:
        logger.info("Running init unit: %s", unit.name)
        try:
            script = unit.path.read_text(encoding="utf-8")
            admin.execute_script(database, script)
        except Exception as e:  # pylint: disable=broad-except
            raise UnitError(unit.name, e) from e
        logger.info("Completed: %s", unit.name)

    return len(units)
