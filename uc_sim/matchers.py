"""
Sequence matchers.

Used both to decide which histories to record and to query the finished
registry.
"""

from .data_models import profile_of


def profile_match(a: str, b: str) -> bool:
    """True if a and b have the same chunk counts, in any order."""
    return profile_of(a) == profile_of(b)


def arrangement_match(a: str, b: str) -> bool:
    """True if a and b are identical chunk for chunk."""
    return a == b
