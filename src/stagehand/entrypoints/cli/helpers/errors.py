"""CLI error type that reports through the tagged ``[ERROR]`` line."""

from __future__ import annotations

from typing import IO, Any

import click

from .messages import ERROR, format_line


class TaggedClickException(click.ClickException):
    """A `click.ClickException` shown as ``[ERROR] <message>`` (exit code 1).

    Optional ``details`` lines are printed underneath, indented.
    """

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []

    def show(self, file: IO[Any] | None = None) -> None:
        click.echo(format_line(ERROR, self.format_message()), file=file, err=True)
        for line in self.details:
            click.echo(f"  {line}", file=file, err=True)
