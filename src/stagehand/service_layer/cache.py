"""Cache assembly.

The game cache data file is stored as numbered fragments
(``main_file_cache.dat2.part_000``, ``part_001``, ...). `ensure_assembled`
concatenates them back into ``main_file_cache.dat2``; `check_cache` reports
whether a cache directory is usable without touching it.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from stagehand import config
from stagehand.domain.errors import AssemblyIncompleteError, NoFragmentsError
from stagehand.domain.value_objects import AssembledInfo, CacheStatus

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
DEFAULT_FILE_MODE = 0o666


def _count(directory: Path, pattern: str) -> int:
    return sum(1 for p in directory.glob(pattern) if p.is_file())


def list_fragments(directory: Path, pattern: str) -> list[Path]:
    """Return fragment files matching ``pattern`` in lexicographic name order."""
    return sorted((p for p in directory.glob(pattern) if p.is_file()), key=lambda p: p.name)


def _default_file_mode() -> int:
    """Mode a plain ``open(..., "w")`` would give a new file under the umask."""
    umask = os.umask(0)
    os.umask(umask)
    return DEFAULT_FILE_MODE & ~umask


def _concatenate(fragments: list[Path], target: Path) -> None:
    """Write ``fragments`` back to back into ``target``.

    Data goes to a temporary file in the target directory first and is moved
    into place atomically, so ``target`` never holds a half-written artifact.
    The temporary file is created owner-only; it is widened to the umask
    default before the move so other users can read the artifact.
    """
    with tempfile.NamedTemporaryFile(
        dir=target.parent, prefix=f".{target.name}.", delete=False
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            for fragment in fragments:
                with fragment.open("rb") as src:
                    shutil.copyfileobj(src, tmp, CHUNK_SIZE)
            os.chmod(tmp.fileno(), _default_file_mode())
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    os.replace(tmp_path, target)


def ensure_assembled(
    target_path: Path,
    fragment_glob: str = config.CACHE_FRAGMENT_PATTERN,
    min_valid_size: int = config.CACHE_MIN_VALID_SIZE,
) -> AssembledInfo:
    """Make sure ``target_path`` holds the assembled artifact.

    A target larger than ``min_valid_size`` is taken as already assembled and
    returned without reading any fragment. A smaller one is deleted and
    rebuilt from the fragments matching ``fragment_glob`` (relative to the
    target's directory). Fragments are left in place.

    Args:
        target_path: Artifact to produce.
        fragment_glob: Glob selecting the fragments.
        min_valid_size: The artifact must be strictly larger than this.

    Returns:
        AssembledInfo: Details of the artifact.

    Raises:
        NoFragmentsError: If no fragment matches; no file is created.
        AssemblyIncompleteError: If the assembled artifact is too small.
    """
    target_path = Path(target_path)
    directory = target_path.parent

    if target_path.is_file():
        size = target_path.stat().st_size
        if size > min_valid_size:
            logger.info("%s already assembled (%d bytes)", target_path.name, size)
            return AssembledInfo(
                path=target_path,
                size_bytes=size,
                fragment_count=0,
                index_count=_count(directory, config.CACHE_INDEX_PATTERN),
                reused=True,
            )
        logger.warning(
            "%s is only %d bytes, reassembling", target_path.name, size
        )
        target_path.unlink()

    fragments = list_fragments(directory, fragment_glob)
    if not fragments:
        raise NoFragmentsError(directory, fragment_glob)

    logger.info("Assembling %s from %d parts", target_path.name, len(fragments))
    _concatenate(fragments, target_path)

    size = target_path.stat().st_size
    if size <= min_valid_size:
        raise AssemblyIncompleteError(target_path, size, min_valid_size)

    return AssembledInfo(
        path=target_path,
        size_bytes=size,
        fragment_count=len(fragments),
        index_count=_count(directory, config.CACHE_INDEX_PATTERN),
    )


def check_cache(cache_dir: Path) -> CacheStatus:
    """Inspect ``cache_dir`` without assembling anything."""
    cache_dir = Path(cache_dir)
    data_file = cache_dir / config.CACHE_DATA_FILE
    data_size = data_file.stat().st_size if data_file.is_file() else None
    return CacheStatus(
        data_file=data_file,
        data_size=data_size,
        index_count=_count(cache_dir, config.CACHE_INDEX_PATTERN) if cache_dir.is_dir() else 0,
        has_primary_index=(cache_dir / config.CACHE_PRIMARY_INDEX).is_file(),
    )
