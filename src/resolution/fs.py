"""Directory listing and file reading primitives consumed by the resolver.

The resolver never touches ``os`` directly; tests substitute an in-memory
implementation of ``FileSystem``.
"""
from __future__ import annotations

import os
from typing import List, Protocol

from common.errors import LibrarianIOError


class FileSystem(Protocol):
    """I/O operations needed to resolve librarian files."""

    def list_entries(self, directory: str) -> List[str]:
        """Return the entry names of ``directory``.

        Raises:
            LibrarianIOError: If the directory cannot be read.
        """

    def read_file(self, path: str) -> bytes:
        """Return the full contents of ``path``.

        Raises:
            LibrarianIOError: If the file cannot be read.
        """


class LocalFileSystem:
    """``FileSystem`` backed by the operating system."""

    def list_entries(self, directory: str) -> List[str]:
        try:
            return os.listdir(directory)
        except OSError as exc:
            raise LibrarianIOError(directory, exc) from exc

    def read_file(self, path: str) -> bytes:
        try:
            with open(path, "rb") as fh:
                return fh.read()
        except OSError as exc:
            raise LibrarianIOError(path, exc) from exc
