"""Entrypoints (inbound adapters) for STAGEHAND.

Expose the orchestrator as the ``stagehand`` command line. Parse options,
build collaborators through `stagehand.bootstrap`, call the service layer and
present results.

Dependency rule: may import `stagehand.service_layer` and
`stagehand.bootstrap`; avoid importing `stagehand.adapters` directly.
"""
