"""Shared fixtures: on-disk librarian directories and an in-memory file system."""

import errno
import logging
import os

import pytest

from common.errors import LibrarianIOError


class MemoryFileSystem:
    """In-memory ``FileSystem`` keyed by directory then entry name."""

    def __init__(self, tree=None, unreadable=()):
        self.tree = {d: dict(entries) for d, entries in (tree or {}).items()}
        self.unreadable = set(unreadable)
        self.listed = []
        self.read = []

    def list_entries(self, directory):
        self.listed.append(directory)
        if directory in self.unreadable or directory not in self.tree:
            raise LibrarianIOError(directory, OSError(errno.ENOENT, "No such file or directory"))
        return list(self.tree[directory])

    def read_file(self, path):
        self.read.append(path)
        directory, entry = os.path.split(path)
        if path in self.unreadable or entry not in self.tree.get(directory, {}):
            raise LibrarianIOError(path, OSError(errno.EACCES, "Permission denied"))
        content = self.tree[directory][entry]
        return content.encode("utf-8") if isinstance(content, str) else content


@pytest.fixture
def memory_fs():
    """Factory for MemoryFileSystem instances."""
    return MemoryFileSystem


@pytest.fixture
def make_tree(tmp_path):
    """Create librarian directories under tmp_path.

    Takes a mapping of directory name to {entry name: content} and returns
    the list of created directory paths in the given order.
    """
    def _make(layout):
        dirs = []
        for name, entries in layout.items():
            directory = tmp_path / name
            directory.mkdir(parents=True, exist_ok=True)
            for entry, content in entries.items():
                (directory / entry).write_text(content, encoding="utf-8")
            dirs.append(str(directory))
        return dirs
    return _make


@pytest.fixture
def reset_logging():
    """Remove handlers installed by configure_logging after the test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if getattr(handler, "_librarian", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
