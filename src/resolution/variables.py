"""Read variable values from librarian files.

A librarian file holds one ``NAME value`` assignment per line. The name
must start the line and be followed by a single whitespace character; the
rest of the line, verbatim, is the value.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import ResolvedFile

from .fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\n\r\f\v"


def extract_variable(text: str, var: str) -> Optional[str]:
    """Return the value of the first assignment of ``var`` in ``text``.

    A name alone on its line yields an empty value. Returns None when the
    variable is not assigned.
    """
    text = "\n" + text + "\n"
    sought = "\n" + var
    pos = 0
    while True:
        p = text.find(sought, pos)
        if p < 0:
            return None
        after = p + len(sought)
        if after >= len(text) or text[after] not in _WHITESPACE:
            pos = p + 1
            continue
        if text[after] == "\n":
            return ""
        end = text.index("\n", after + 1)
        return text[after + 1:end]


def find_variable(path: str, var: str, fs: Optional[FileSystem] = None) -> Optional[str]:
    """Read ``path`` and return the value of ``var``, or None if unset.

    Raises:
        LibrarianIOError: If the file cannot be read.
    """
    fs = fs or LocalFileSystem()
    text = fs.read_file(path).decode("utf-8", errors="replace")
    return extract_variable(text, var)


def get_variables(
    variables: Sequence[str],
    files: Iterable[ResolvedFile],
    fs: Optional[FileSystem] = None,
) -> str:
    """Collect variables from files and join the non-empty values.

    Files are visited in the given order and, within each file, variables
    in the requested order.

    Raises:
        LibrarianIOError: If a file cannot be read.
    """
    fs = fs or LocalFileSystem()
    parts: List[str] = []
    for resolved in files:
        if not variables:
            break
        text = fs.read_file(resolved.path).decode("utf-8", errors="replace")
        for var in variables:
            value = extract_variable(text, var)
            if value:
                parts.append(value)
            elif is_debug_enabled(logger):
                logger.debug(
                    "Variable not set",
                    extra=extra_context(
                        event="variable_lookup",
                        component="variables",
                        action="extract",
                        target=resolved.path,
                        outcome="empty" if value == "" else "missing",
                        variable=var,
                    ),
                )
    return " ".join(parts)
