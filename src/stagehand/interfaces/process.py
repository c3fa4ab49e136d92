"""Interface for terminal process handoff."""

from __future__ import annotations

import abc
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

# pylint: disable=too-few-public-methods


class ProcessReplacer(abc.ABC):
    """Contract for replacing the current process with another program.

    This is a terminal transfer of control, not a supervised child: on success
    ``replace`` never returns.
    """

    @abc.abstractmethod
    def replace(self, argv: Sequence[str], cwd: Path) -> NoReturn:
        """Change to ``cwd`` and replace the current process with ``argv``."""
