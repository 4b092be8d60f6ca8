"""dpkg-style version number comparison.

A version is ``[epoch:]segment(.segment)*``. Epochs are compared first,
then dot-separated segments pairwise from the left, a missing segment
comparing as the empty string. Inside an epoch or a segment, runs of
decimal digits compare by numeric magnitude (of any length) and runs of
other characters compare lexically, the two kinds alternating.
"""

import functools
import re
from itertools import zip_longest

from .models import Ordering

_DIGITS = re.compile(r"[0-9]*")
_NON_DIGITS = re.compile(r"[^0-9]*")


def _sign(a: str, b: str) -> int:
    return (a > b) - (a < b)


def version_subcmp(a: str, b: str) -> int:
    """Compare two epoch or segment strings.

    Returns:
        int: negative, zero or positive as ``a`` is less than, equal to or
        greater than ``b``.
    """
    i = j = 0
    while i < len(a) or j < len(b):
        ma = _DIGITS.match(a, i)
        mb = _DIGITS.match(b, j)
        da = ma.group().lstrip("0")
        db = mb.group().lstrip("0")
        if len(da) != len(db):
            return -1 if len(da) < len(db) else 1
        r = _sign(da, db)
        if r:
            return r
        i, j = ma.end(), mb.end()

        ma = _NON_DIGITS.match(a, i)
        mb = _NON_DIGITS.match(b, j)
        r = _sign(ma.group(), mb.group())
        if r:
            return r
        i, j = ma.end(), mb.end()
    return 0


def version_cmp(a: str, b: str) -> int:
    """Compare two version strings, returning -1, 0 or 1."""
    a_epoch, _, a_rest = a.partition(":") if ":" in a else ("", "", a)
    b_epoch, _, b_rest = b.partition(":") if ":" in b else ("", "", b)

    r = version_subcmp(a_epoch, b_epoch)
    if r:
        return r

    for a_seg, b_seg in zip_longest(a_rest.split("."), b_rest.split("."), fillvalue=""):
        r = version_subcmp(a_seg, b_seg)
        if r:
            return r
    return 0


def compare_versions(a: str, b: str) -> Ordering:
    """Compare two version strings, returning an ``Ordering``."""
    return Ordering(version_cmp(a, b))


version_key = functools.cmp_to_key(version_cmp)
