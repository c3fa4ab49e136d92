"""STAGEHAND

Startup orchestrator for the Rustscape server stack. It reassembles the split
game cache, waits for MySQL to become reachable, bootstraps the database and
its init scripts, and finally hands the process over to the game server.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
