"""Bootstrap (composition root) for STAGEHAND.

Assembles the application at runtime: turns `Settings` into concrete adapters
(readiness probes, database admin, process replacer) and the static launch
candidate lists.

Import rules:
- Entry points import *this* package, not `stagehand.adapters`.
- This package may import: `stagehand.adapters`, `stagehand.interfaces`,
  `stagehand.domain`, and `stagehand.config`.
- Inner layers must not import `stagehand.bootstrap`.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    build_health_probe,
    management_candidates,
    server_candidates,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "build_health_probe",
    "management_candidates",
    "server_candidates",
]
