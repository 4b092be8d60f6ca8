"""Exception hierarchy shared by the resolution core and the CLI.

The core raises these; only the entry point maps them to exit codes.
"""
from __future__ import annotations

from typing import Optional


class LibrarianError(Exception):
    """Base class for every error raised while resolving libraries."""


class RequirementSyntaxError(LibrarianError):
    """A requirement token could not be parsed."""

    def __init__(self, token: str, reason: Optional[str] = None):
        self.token = token
        self.reason = reason
        message = f"invalid library requirement: {token!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class LibraryNotFoundError(LibrarianError):
    """No librarian file satisfies a requirement.

    Also raised when a library resolved earlier in the run does not
    satisfy a later, stricter requirement.
    """

    def __init__(self, requirement, message: Optional[str] = None):
        self.requirement = requirement
        super().__init__(message or f"cannot find library: {requirement}")


class InvalidDependencyError(LibraryNotFoundError):
    """A ``deps`` entry of a resolved file is not a valid requirement."""

    def __init__(self, token: str, path: str):
        self.token = token
        self.path = path
        super().__init__(None, f"invalid dependency {token!r} in {path}")


class LibrarianIOError(LibrarianError):
    """A directory or file on the search path could not be read."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        detail = cause.strerror or str(cause)
        super().__init__(f"{path}: {detail}")
