"""Process handoff.

`launch` probes launch candidates in priority order and replaces the current
process with the first one that exists. Success never returns: STAGEHAND is
gone once the server runs.
"""

from __future__ import annotations

import logging
import os
import shlex
import stat
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from stagehand.domain.errors import LaunchError, NoExecutableFoundError
from stagehand.domain.value_objects import InvocationStrategy, LaunchCandidate

if TYPE_CHECKING:
    from stagehand.interfaces.process import ProcessReplacer

logger = logging.getLogger(__name__)

JAVA = "java"
EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
IDLE_COMMAND = ("tail", "-f", "/dev/null")


def select_candidate(
    candidates: Sequence[LaunchCandidate], workdir: Path
) -> LaunchCandidate | None:
    """Return the first candidate whose file exists; later ones are not probed."""
    for candidate in candidates:
        path = workdir / candidate.path
        logger.debug("Probing launch candidate %s", path)
        if path.is_file():
            return candidate
    return None


def build_command(
    candidate: LaunchCandidate, workdir: Path, java_opts: str = ""
) -> list[str]:
    """Turn ``candidate`` into an argv list according to its strategy.

    ``java_opts`` is split shell-style and placed before ``-jar``.
    """
    path = workdir / candidate.path
    if candidate.strategy is InvocationStrategy.JAVA_JAR:
        return [JAVA, *shlex.split(java_opts), "-jar", str(path), *candidate.args]
    return [str(path), *candidate.args]


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    if mode & EXEC_BITS != EXEC_BITS:
        path.chmod(mode | EXEC_BITS)


def list_directory(directory: Path) -> list[str]:
    """Describe the contents of ``directory`` for operator diagnostics."""
    try:
        entries = sorted(os.scandir(directory), key=lambda e: e.name)
    except OSError as e:
        return [f"<cannot list {directory}: {e.strerror}>"]
    lines = []
    for entry in entries:
        if entry.is_dir():
            lines.append(f"{entry.name}/")
        else:
            try:
                size = entry.stat().st_size
            except OSError:
                size = 0
            lines.append(f"{entry.name} ({size} bytes)")
    return lines


def missing_executable(workdir: Path) -> NoExecutableFoundError:
    """Log the contents of ``workdir`` and return the error describing them."""
    listing = list_directory(workdir)
    logger.error("No server executable found. Contents of %s:", workdir)
    for line in listing:
        logger.error("  %s", line)
    return NoExecutableFoundError(workdir, listing)


def run_candidate(
    candidate: LaunchCandidate,
    *,
    workdir: Path,
    replacer: ProcessReplacer,
    java_opts: str = "",
) -> NoReturn:
    """Replace the current process with an already selected candidate.

    ``workdir`` is resolved first: the replacer changes into it before exec,
    so a relative path would otherwise be applied twice.

    Raises:
        LaunchError: If the process could not be replaced.
    """
    workdir = Path(workdir).resolve()
    argv = build_command(candidate, workdir, java_opts)
    try:
        if candidate.strategy is InvocationStrategy.EXECUTABLE:
            _make_executable(workdir / candidate.path)
        logger.info("Handing off to %s", shlex.join(argv))
        replacer.replace(argv, workdir)
    except OSError as e:
        raise LaunchError(f"Could not start {argv[0]}: {e}") from e

    raise RuntimeError("process replacement returned")


def launch(
    candidates: Sequence[LaunchCandidate],
    *,
    workdir: Path,
    replacer: ProcessReplacer,
    java_opts: str = "",
) -> NoReturn:
    """Replace the current process with the first existing candidate.

    Args:
        candidates: Entry points in priority order.
        workdir: Directory candidates are resolved against and run from.
        replacer: Port performing the actual process replacement.
        java_opts: Options inserted before ``-jar`` for ``JAVA_JAR`` candidates.

    Raises:
        NoExecutableFoundError: If no candidate exists. The directory listing
            is logged and attached to the error.
        LaunchError: If the process could not be replaced.
    """
    workdir = Path(workdir).resolve()
    candidate = select_candidate(candidates, workdir)
    if candidate is None:
        raise missing_executable(workdir)
    run_candidate(candidate, workdir=workdir, replacer=replacer, java_opts=java_opts)


def idle(*, workdir: Path, replacer: ProcessReplacer) -> NoReturn:
    """Replace the current process with one that does nothing, forever.

    Keeps a supervised service slot alive when there is nothing to run in it.
    """
    try:
        replacer.replace(list(IDLE_COMMAND), Path(workdir).resolve())
    except OSError as e:
        raise LaunchError(f"Could not start {IDLE_COMMAND[0]}: {e}") from e
    raise RuntimeError("process replacement returned")
