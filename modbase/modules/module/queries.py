"""
Capability queries: platform compatibility, debug flag, match data.
"""

import re
from collections.abc import Mapping
from typing import AbstractSet, Any, FrozenSet, Iterable, Union

from ..descriptor import ALL_PLATFORMS

# Keys in user_data that make user_data_is_match() true
MATCH_KEYS: FrozenSet[str] = frozenset({"match", "match_set", "run"})

_FLAG_PATTERN = re.compile(r"^(1|t|y)", re.IGNORECASE)


def _as_platform_set(candidate: Union[str, Iterable[str]]) -> FrozenSet[str]:
    if isinstance(candidate, str):
        candidate = candidate.split(",")
    return frozenset(str(p).strip().lower() for p in candidate if str(p).strip())


def platform_matches(platforms: AbstractSet[str], candidate: Union[str, Iterable[str]]) -> bool:
    """
    True if the declared platforms intersect candidate.

    A platform set of exactly {"all"} matches anything; an empty set matches
    nothing.
    """
    if platforms == frozenset({ALL_PLATFORMS}):
        return True
    return not platforms.isdisjoint(_as_platform_set(candidate))


def flag_enabled(value: Any) -> bool:
    """True for values whose string form starts with 1, t or y (any case)."""
    if value is None:
        return False
    return _FLAG_PATTERN.match(str(value)) is not None


def user_data_is_match(user_data: Any) -> bool:
    """Whether user_data carries everything needed to describe a match result."""
    return isinstance(user_data, Mapping) and MATCH_KEYS.issubset(user_data.keys())
