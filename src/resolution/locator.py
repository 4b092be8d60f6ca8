"""Locate librarian files in a directory and across the search path.

Librarian files are named ``<library>=<version>``; only the last ``=``
separates the name from the version.
"""
from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from common.logging_utils import extra_context, is_debug_enabled, Timer
from constants import Constants
from versioning.compare import version_cmp
from versioning.matcher import matches_all
from versioning.models import Requirement, ResolvedFile

from .fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

Required = Union[Requirement, Sequence[Requirement]]
SearchPath = Union[str, Iterable[str]]


def split_entry(entry: str) -> Optional[Tuple[str, str]]:
    """Split a directory entry into (library name, version) at the last ``=``."""
    name, sep, version = entry.rpartition(Constants.VERSION_DELIMITER)
    if not sep:
        return None
    return name, version


def split_search_path(search_path: SearchPath) -> List[str]:
    """Return the non-empty directories of a search path.

    Accepts either a colon-separated string or an already split sequence.
    """
    if isinstance(search_path, str):
        search_path = search_path.split(Constants.PATH_SEPARATOR)
    return [d for d in search_path if d]


def _as_group(required: Required) -> List[Requirement]:
    if isinstance(required, Requirement):
        return [required]
    group = list(required)
    if not group:
        raise ValueError("at least one requirement is needed")
    if len({r.name for r in group}) != 1:
        raise ValueError("requirements must all name the same library")
    return group


def is_better(version: str, best: str, oldest: bool) -> bool:
    """Return True if ``version`` strictly beats ``best`` under the preference."""
    r = version_cmp(version, best)
    return r < 0 if oldest else r > 0


def locate_in_dir(
    required: Required,
    directory: str,
    oldest: bool = False,
    fs: Optional[FileSystem] = None,
) -> Optional[ResolvedFile]:
    """Find the best librarian file for a library in one directory.

    Args:
        required: Requirement, or requirements on the same library that
            must all be satisfied.
        directory: Directory to scan.
        oldest: Prefer the oldest satisfying version instead of the newest.
        fs: I/O primitives, the local file system by default.

    Returns:
        The winning file, or None if no entry qualifies. Ties go to the
        first entry in name order.

    Raises:
        LibrarianIOError: If the directory cannot be read.
    """
    group = _as_group(required)
    fs = fs or LocalFileSystem()
    name = group[0].name

    best: Optional[Tuple[str, str]] = None
    for entry in sorted(fs.list_entries(directory)):
        parts = split_entry(entry)
        if parts is None or parts[0] != name:
            continue
        version = parts[1]
        if not matches_all(version, group):
            continue
        if best is not None and not is_better(version, best[0], oldest):
            continue
        best = (version, entry)

    if best is None:
        return None
    return ResolvedFile(name, best[0], os.path.join(directory, best[1]))


def locate(
    required: Required,
    search_path: SearchPath,
    oldest: bool = False,
    fs: Optional[FileSystem] = None,
) -> Optional[ResolvedFile]:
    """Find the globally best librarian file for a library on the search path.

    A match from a later directory replaces the current best only if it is
    strictly better. The first unreadable directory aborts the search.

    Raises:
        LibrarianIOError: If a directory cannot be read.
    """
    group = _as_group(required)
    fs = fs or LocalFileSystem()

    best: Optional[ResolvedFile] = None
    with Timer() as t:
        for directory in split_search_path(search_path):
            found = locate_in_dir(group, directory, oldest, fs)
            if found is None:
                continue
            if best is None or is_better(found.version, best.version, oldest):
                best = found

    if is_debug_enabled(logger):
        logger.debug(
            "Located library",
            extra=extra_context(
                event="locate",
                component="locator",
                action="locate",
                target=", ".join(str(r) for r in group),
                outcome=best.path if best else "not_found",
                duration_ms=t.duration_ms(),
            ),
        )
    return best
