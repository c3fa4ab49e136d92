"""Process replacement adapter built on ``os.execvp``."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from stagehand.interfaces.process import ProcessReplacer

# pylint: disable=too-few-public-methods


class ExecProcessReplacer(ProcessReplacer):
    """Replace the current process image, like the shell's ``exec``.

    Buffered log records and console output are flushed first: ``exec`` does
    not run ``atexit`` hooks, so anything still buffered would be lost.
    """

    def replace(self, argv: Sequence[str], cwd: Path) -> NoReturn:
        logging.shutdown()
        sys.stdout.flush()
        sys.stderr.flush()
        os.chdir(cwd)
        os.execvp(argv[0], list(argv))
