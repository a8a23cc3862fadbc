"""
Source resolution for pygrep.

Turns the path strings given on the command line into the ordered list of
regular files to scan. A path that cannot be scanned becomes an error entry
in place; it never stops the remaining paths from being resolved.

Order of the result: input order, then for each expanded directory the order
``os.scandir`` returns entries in, depth-first.

Example:
    >>> from pygrep.search.resolver import resolve_sources
    >>> for entry in resolve_sources(["src", "README.md"], recursive=True):
    ...     print(entry.path if entry.ok else entry.error)
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from ..core.types import ResolvedPath
from ..utils.error_handling import (
    ErrorCollector,
    NotRegularFileError,
    handle_file_error,
)


def _directory_key(st: os.stat_result) -> tuple[int, int]:
    return (st.st_dev, st.st_ino)


def _walk_directory(
    directory: str,
    requested: str,
    follow_symlinks: bool,
    ancestors: frozenset[tuple[int, int]],
    error_collector: ErrorCollector | None,
    logger: Any | None,
) -> Iterator[ResolvedPath]:
    """
    Depth-first expansion of one directory into file entries.

    ``directory`` is a string so that ``entry.path`` keeps the form the
    caller typed (``./src`` stays ``./src/...``). ``ancestors`` holds the
    ``(st_dev, st_ino)`` of every directory on the current branch; a
    symlink leading back to one of them is not descended into again.
    """
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        yield ResolvedPath(
            requested,
            error=handle_file_error(directory, "list directory", e, error_collector, logger),
        )
        return

    for entry in entries:
        try:
            is_file = entry.is_file()
            is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
            key = _directory_key(entry.stat()) if is_dir else None
        except OSError as e:
            yield ResolvedPath(
                requested,
                error=handle_file_error(entry.path, "access", e, error_collector, logger),
            )
            continue

        if is_file:
            yield ResolvedPath(requested, path=Path(entry.path), label=entry.path)
        elif is_dir:
            if key in ancestors:
                if logger:
                    logger.debug(
                        f"Skipping directory loop at {entry.path}",
                        operation="resolve",
                        file_path=entry.path,
                    )
                continue
            yield from _walk_directory(
                entry.path,
                requested,
                follow_symlinks,
                ancestors | {key},
                error_collector,
                logger,
            )
        # other special files met during traversal are skipped


def iter_resolved_paths(
    paths: Iterable[str],
    recursive: bool,
    follow_symlinks: bool = True,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> Iterator[ResolvedPath]:
    """
    Lazily resolve ``paths`` into file entries and error entries.

    Args:
        paths: Requested path strings, in the order given by the caller
        recursive: Expand directories instead of reporting them as errors
        follow_symlinks: Descend into symlinked directories during expansion
        error_collector: Optional collector every error entry is added to
        logger: Optional logger every error entry is logged to
    """
    for requested in paths:
        try:
            st = os.stat(requested)
        except OSError as e:
            yield ResolvedPath(
                requested,
                error=handle_file_error(requested, "access", e, error_collector, logger),
            )
            continue

        if stat.S_ISREG(st.st_mode):
            yield ResolvedPath(requested, path=Path(requested), label=requested)
        elif stat.S_ISDIR(st.st_mode):
            if recursive:
                yield from _walk_directory(
                    requested,
                    requested,
                    follow_symlinks,
                    frozenset({_directory_key(st)}),
                    error_collector,
                    logger,
                )
            else:
                error = NotRegularFileError(
                    f"{requested} is a directory, use -r to search recursively",
                    Path(requested),
                    suggestions=["Pass -r/--recursive to search the files below it"],
                )
                yield ResolvedPath(
                    requested,
                    error=handle_file_error(requested, "access", error, error_collector, logger),
                )
        else:
            error = NotRegularFileError(f"{requested} is not a regular file", Path(requested))
            yield ResolvedPath(
                requested,
                error=handle_file_error(requested, "access", error, error_collector, logger),
            )


def resolve_sources(
    paths: Iterable[str],
    recursive: bool,
    follow_symlinks: bool = True,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> list[ResolvedPath]:
    """Eager form of :func:`iter_resolved_paths`."""
    return list(
        iter_resolved_paths(
            paths,
            recursive,
            follow_symlinks=follow_symlinks,
            error_collector=error_collector,
            logger=logger,
        )
    )
