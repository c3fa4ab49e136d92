"""Domain-layer error definitions.

Every failure a component can report is normalized into one of these types at
the component boundary; raw driver or OS errors never escape.
"""

from __future__ import annotations

from pathlib import Path

# ============================================================================
#                           General errors
# ============================================================================


class StagehandError(Exception):
    """Base class for all STAGEHAND errors."""


# ============================================================================
#                           Cache assembly errors
# ============================================================================


class AssemblyError(StagehandError):
    """Base class for cache assembly failures."""


class NoFragmentsError(AssemblyError):
    """Raised when no fragment matches the fragment pattern."""

    def __init__(self, directory: Path, pattern: str) -> None:
        super().__init__(f"No cache parts found in {directory} ({pattern}).")
        self.directory = directory
        self.pattern = pattern


class AssemblyIncompleteError(AssemblyError):
    """Raised when the assembled artifact is not larger than the size threshold."""

    def __init__(self, path: Path, size: int, min_size: int) -> None:
        super().__init__(
            f"Assembled {path.name} is {size} bytes; "
            f"expected more than {min_size} bytes."
        )
        self.path = path
        self.size = size
        self.min_size = min_size


# ============================================================================
#                           Readiness errors
# ============================================================================


class ReadinessTimeoutError(StagehandError, TimeoutError):
    """Raised when a dependency does not become ready within its retry budget."""

    def __init__(self, target: str, attempts: int) -> None:
        super().__init__(f"{target} did not become ready after {attempts} attempts.")
        self.target = target
        self.attempts = attempts


# ============================================================================
#                           Bootstrap errors
# ============================================================================


class BootstrapError(StagehandError):
    """Base class for database bootstrap failures."""


class ResourceError(BootstrapError):
    """Raised when the database cannot be checked or created."""

    def __init__(self, name: str, cause: BaseException | str) -> None:
        super().__init__(f"Could not ensure database {name!r}: {cause}")
        self.name = name
        self.cause = cause


class UnitError(BootstrapError):
    """Raised when an init unit fails; later units are not executed."""

    def __init__(self, unit_name: str, cause: BaseException | str) -> None:
        super().__init__(f"Init unit {unit_name!r} failed: {cause}")
        self.unit_name = unit_name
        self.cause = cause


# ============================================================================
#                           Launch errors
# ============================================================================


class LaunchError(StagehandError):
    """Raised when the process handoff cannot be performed."""


class NoExecutableFoundError(LaunchError):
    """Raised when none of the launch candidates exists."""

    def __init__(self, directory: Path, listing: list[str] | None = None) -> None:
        super().__init__(f"No server executable found in {directory}.")
        self.directory = directory
        self.listing = listing or []
