"""Command-line interface for STAGEHAND."""
