"""Adapters (infrastructure) for STAGEHAND.

Concrete implementations of the interfaces: SQLAlchemy engines, the MySQL
readiness probe and database admin, and the ``exec`` based process replacer.

Dependency rule: may import `stagehand.domain` and `stagehand.interfaces`;
neither of those may import this package.
"""
