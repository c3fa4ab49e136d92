"""STAGEHAND cache CLI.

``stagehand cache assemble`` rebuilds ``main_file_cache.dat2`` from its
``.part_NNN`` fragments (a no-op when a full-size file is already there);
``stagehand cache check`` reports whether the cache directory is usable.

Exit codes: 0 when the cache is ready, 1 when fragments are missing, the
assembled file is too small, or (for ``check``) required files are absent.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx

from stagehand import config
from stagehand.domain.errors import AssemblyIncompleteError, NoFragmentsError
from stagehand.service_layer.cache import check_cache, ensure_assembled

from .helpers import TaggedClickException, info, ok, success, warn

if TYPE_CHECKING:
    from stagehand.bootstrap import AppContainer

NO_PARTS_HINT = "Make sure you have the split cache files in this directory."
CACHE_READY_MSG = "Cache is ready to use!"


def _cache_dir_option(func):
    return click.option(
        "--cache-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Cache directory (defaults to STAGEHAND_CACHE_DIR, then ./cache).",
    )(func)


@click.group(cls=clickx.ExtraGroup)
def cache() -> None:
    """Game cache commands."""


@cache.command()
@_cache_dir_option
@click.option(
    "--min-size",
    type=click.IntRange(min=0),
    default=config.CACHE_MIN_VALID_SIZE,
    show_default=True,
    help="The assembled file must be larger than this many bytes.",
)
@click.option(
    "--pattern",
    default=config.CACHE_FRAGMENT_PATTERN,
    show_default=True,
    help="Glob selecting the fragments, relative to the cache directory.",
)
@click.pass_obj
def assemble(
    app: AppContainer, cache_dir: Path | None, min_size: int, pattern: str
) -> None:
    """Assemble main_file_cache.dat2 from its split parts."""
    directory = cache_dir or app.settings.cache_dir
    target = directory / config.CACHE_DATA_FILE

    if target.is_file():
        info(f"{target.name} already exists")

    try:
        result = ensure_assembled(target, pattern, min_size)
    except NoFragmentsError as e:
        raise TaggedClickException(
            f"No cache parts found ({pattern})", [NO_PARTS_HINT]
        ) from e
    except AssemblyIncompleteError as e:
        raise TaggedClickException(f"Failed to assemble cache file: {e}") from e

    if result.reused:
        ok(f"File size looks correct ({result.size_bytes} bytes)")
        return

    info(f"Found {result.fragment_count} cache parts")
    success(f"Assembled {target.name} ({result.size_bytes} bytes)")
    if result.index_count:
        ok(f"Found {result.index_count} index files")
    else:
        warn("No index files found (main_file_cache.idx*)")
    info(CACHE_READY_MSG)


@cache.command()
@_cache_dir_option
@click.pass_obj
def check(app: AppContainer, cache_dir: Path | None) -> None:
    """Verify the cache files exist (never assembles)."""
    directory = cache_dir or app.settings.cache_dir
    status = check_cache(directory)

    if not status.ready:
        missing = [
            name
            for name, present in (
                (config.CACHE_DATA_FILE, status.data_size is not None),
                (config.CACHE_PRIMARY_INDEX, status.has_primary_index),
            )
            if not present
        ]
        raise TaggedClickException(
            "Cache files not found!",
            [f"Missing in {directory}: {', '.join(missing)}"],
        )

    success("Cache files found!")
    info(f"Cache directory: {directory}")
    info(f"{status.data_file.name}: {status.data_size} bytes")
    info(f"Index files: {status.index_count}")
