"""Token parsing utilities for library requirements and variable names."""

import re
from typing import Iterable, List, Tuple

from common.errors import RequirementSyntaxError
from constants import Constants

from .models import Requirement

_VARIABLE = re.compile(r"[A-Z0-9_-]*")
_OPERATORS = Constants.RELATIONAL_OPERATORS


def is_variable(token: str) -> bool:
    """Return True if ``token`` names a variable rather than a library.

    Variable names consist only of uppercase letters, digits, underscores
    and hyphens.
    """
    return _VARIABLE.fullmatch(token) is not None


def _find_operator(s: str) -> int:
    """Return the index of the first relational operator in ``s`` or -1."""
    for i, c in enumerate(s):
        if c in _OPERATORS:
            return i
    return -1


def _check_bound(token: str, value: str) -> str:
    if not value:
        raise RequirementSyntaxError(token, "empty version bound")
    if _find_operator(value) >= 0:
        raise RequirementSyntaxError(token, "unexpected relational operator")
    return value


def parse_requirement(token: str) -> Requirement:
    """Parse ``name``, ``name=ver``, ``name>[=]lo[<[=]hi]`` or ``name<[=]hi``.

    Raises:
        RequirementSyntaxError: If the token is malformed.
    """
    if not token or "/" in token or token[0] in _OPERATORS:
        raise RequirementSyntaxError(token, "invalid library name")

    op = _find_operator(token)
    if op < 0:
        return Requirement(token)

    name, kind, rest = token[:op], token[op], token[op + 1:]

    if kind == "=":
        return Requirement.exact(name, _check_bound(token, rest))

    lower = upper = None
    lower_closed = upper_closed = False

    if kind == ">":
        lower_closed = rest.startswith("=")
        if lower_closed:
            rest = rest[1:]
        lower, sep, rest = rest.partition("<")
        _check_bound(token, lower)
        if not sep:
            return Requirement(name, lower=lower, lower_closed=lower_closed)

    upper_closed = rest.startswith("=")
    if upper_closed:
        rest = rest[1:]
    upper = _check_bound(token, rest)
    return Requirement(name, lower, upper, lower_closed, upper_closed)


def classify_tokens(tokens: Iterable[str]) -> Tuple[List[str], List[Requirement]]:
    """Split command-line tokens into variable names and requirements.

    Variable order and requirement order are both preserved.

    Raises:
        RequirementSyntaxError: If a library token is malformed.
    """
    variables: List[str] = []
    requirements: List[Requirement] = []
    for token in tokens:
        if is_variable(token):
            variables.append(token)
        else:
            requirements.append(parse_requirement(token))
    return variables, requirements


def split_dependency_tokens(value: str) -> List[str]:
    """Split a ``deps`` value on whitespace, dropping empty tokens."""
    return value.split()
