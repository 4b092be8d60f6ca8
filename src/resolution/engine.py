"""Batch resolution of requirements and transitive dependency expansion."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from common.errors import InvalidDependencyError, LibraryNotFoundError, RequirementSyntaxError
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from versioning.matcher import version_matches
from versioning.models import Registry, Requirement, ResolvedFile
from versioning.parser import parse_requirement, split_dependency_tokens

from .fs import FileSystem, LocalFileSystem
from .locator import SearchPath, locate, split_search_path
from .variables import find_variable

logger = logging.getLogger(__name__)


def group_by_name(requirements: Sequence[Requirement]) -> Dict[str, List[Requirement]]:
    """Group requirements by library name in order of first appearance."""
    groups: Dict[str, List[Requirement]] = {}
    for req in requirements:
        groups.setdefault(req.name, []).append(req)
    return groups


class ResolutionEngine:
    """Resolve batches of requirements into a shared ``Registry``.

    Each library name is resolved at most once per engine; later
    requirements on the same name are checked against the file already
    chosen.
    """

    def __init__(
        self,
        search_path: SearchPath,
        oldest: bool = False,
        fs: Optional[FileSystem] = None,
        registry: Optional[Registry] = None,
    ):
        self.search_path = split_search_path(search_path)
        self.oldest = oldest
        self.fs = fs or LocalFileSystem()
        self.registry = registry if registry is not None else Registry()

    def resolve_all(self, requirements: Sequence[Requirement]) -> List[ResolvedFile]:
        """Resolve a batch, returning the files newly added to the registry.

        Raises:
            LibraryNotFoundError: If a requirement cannot be satisfied.
            LibrarianIOError: If the search path cannot be read.
        """
        newly: List[ResolvedFile] = []
        for name, group in group_by_name(requirements).items():
            existing = self.registry.get(name)
            if existing is not None:
                for req in group:
                    if not version_matches(existing.version, req):
                        raise LibraryNotFoundError(req)
                continue

            found = locate(group, self.search_path, self.oldest, self.fs)
            if found is None:
                raise LibraryNotFoundError(self._offending(group))
            self.registry.add(found)
            newly.append(found)
            logger.info("Resolved %s to %s", name, found.path)
        return newly

    def _offending(self, group: List[Requirement]) -> Requirement:
        """Return the first requirement that leaves no candidate file."""
        for i in range(1, len(group)):
            if locate(group[:i], self.search_path, self.oldest, self.fs) is None:
                return group[i - 1]
        return group[-1]

    def dependencies_of(self, files: Sequence[ResolvedFile]) -> List[Requirement]:
        """Parse the ``deps`` variable of each file into requirements.

        Raises:
            InvalidDependencyError: If a dependency token is malformed.
            LibrarianIOError: If a file cannot be read.
        """
        deps: List[Requirement] = []
        for resolved in files:
            value = find_variable(resolved.path, Constants.DEPS_VARIABLE, self.fs)
            for token in split_dependency_tokens(value or ""):
                try:
                    deps.append(parse_requirement(token))
                except RequirementSyntaxError as exc:
                    raise InvalidDependencyError(token, resolved.path) from exc
        return deps


def resolve_closure(
    requirements: Sequence[Requirement],
    search_path: SearchPath,
    oldest: bool = False,
    expand_deps: bool = False,
    fs: Optional[FileSystem] = None,
    registry: Optional[Registry] = None,
) -> Registry:
    """Resolve ``requirements`` and, optionally, their transitive dependencies.

    Each round resolves the pending batch and feeds the ``deps`` of the
    files it added back in as the next batch. Names already in the
    registry are only re-checked, so the loop ends once a round adds no
    new library.

    Returns:
        Registry: Every resolved file, in resolution order.

    Raises:
        LibraryNotFoundError: If a requirement cannot be satisfied or a
            dependency token is malformed.
        LibrarianIOError: If the search path cannot be read.
    """
    engine = ResolutionEngine(search_path, oldest, fs, registry)
    pending = list(requirements)
    rounds = 0
    while pending:
        rounds += 1
        newly = engine.resolve_all(pending)
        if not expand_deps:
            break
        pending = engine.dependencies_of(newly)
        if is_debug_enabled(logger):
            logger.debug(
                "Dependency round finished",
                extra=extra_context(
                    event="closure_round",
                    component="engine",
                    action="expand",
                    outcome="done" if not pending else "pending",
                    round=rounds,
                    resolved=len(newly),
                    pending=len(pending),
                ),
            )
    return engine.registry
