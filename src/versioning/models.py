"""Data models for requirements and resolved librarian files."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional


class Ordering(Enum):
    """Outcome of a version comparison."""
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True)
class Requirement:
    """A library name plus an optional version range.

    ``lower`` and ``upper`` are raw version strings, ``None`` when the
    corresponding side is unbounded. An exact requirement has both bounds
    equal and closed.
    """
    name: str
    lower: Optional[str] = None
    upper: Optional[str] = None
    lower_closed: bool = False
    upper_closed: bool = False

    @classmethod
    def exact(cls, name: str, version: str) -> "Requirement":
        """Build a requirement matching only ``version``."""
        return cls(name, version, version, True, True)

    @property
    def is_exact(self) -> bool:
        return self.lower is not None and self.lower == self.upper

    def __str__(self) -> str:
        if self.lower is None and self.upper is None:
            return self.name
        if self.is_exact:
            return f"{self.name}={self.lower}"
        text = self.name
        if self.lower is not None:
            text += (">=" if self.lower_closed else ">") + self.lower
        if self.upper is not None:
            text += ("<=" if self.upper_closed else "<") + self.upper
        return text


@dataclass(frozen=True)
class ResolvedFile:
    """A librarian file selected for a library."""
    library_name: str
    version: str
    path: str


class Registry:
    """Run-scoped mapping from library name to its single resolved file.

    Insertion order is preserved; it is the order variables are collected
    and paths are reported in.
    """

    def __init__(self) -> None:
        self._files: Dict[str, ResolvedFile] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._files

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[ResolvedFile]:
        return iter(list(self._files.values()))

    def get(self, name: str) -> Optional[ResolvedFile]:
        return self._files.get(name)

    def add(self, resolved: ResolvedFile) -> None:
        """Record ``resolved``; a library name can only be claimed once."""
        if resolved.library_name in self._files:
            raise ValueError(f"library already resolved: {resolved.library_name}")
        self._files[resolved.library_name] = resolved

    def files(self) -> List[ResolvedFile]:
        return list(self._files.values())

    def paths(self) -> List[str]:
        return [f.path for f in self._files.values()]
