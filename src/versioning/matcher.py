"""Version range matching."""

from typing import Iterable

from .compare import version_cmp
from .models import Requirement


def version_matches(version: str, required: Requirement) -> bool:
    """Test whether ``version`` lies within the range of ``required``.

    An absent bound always passes; each closed flag only governs its own
    bound.
    """
    upper = version_cmp(version, required.upper) if required.upper is not None else -1
    lower = version_cmp(version, required.lower) if required.lower is not None else 1

    upper_ok = upper <= 0 if required.upper_closed else upper < 0
    lower_ok = lower >= 0 if required.lower_closed else lower > 0
    return upper_ok and lower_ok


def matches_all(version: str, requirements: Iterable[Requirement]) -> bool:
    """Test ``version`` against every requirement."""
    return all(version_matches(version, req) for req in requirements)
