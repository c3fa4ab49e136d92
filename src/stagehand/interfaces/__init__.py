"""Interfaces (application boundary) for STAGEHAND.

Defines framework-free contracts for the outside world: readiness checks,
database administration and process replacement. The service layer depends on
these ABCs; adapters implement them.

Dependency rule: may import `stagehand.domain`; must not import adapters,
the service layer or entrypoints.
"""

from .database import DatabaseAdmin
from .process import ProcessReplacer
from .readiness import ReadinessProbe

__all__ = ["DatabaseAdmin", "ProcessReplacer", "ReadinessProbe"]
