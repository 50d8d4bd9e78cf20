"""Match route hostnames against required HSTS domain patterns."""

import re
from collections.abc import Iterable
from functools import lru_cache

from routeguard.core.models import SelectorError


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise SelectorError(f"invalid domain pattern {pattern!r}: {e}") from e


def matches_domain(patterns: Iterable[str], domains: Iterable[str]) -> bool:
    """
    Check every pattern, in order, against every domain.

    A pattern must match the whole hostname. The first matching pair
    returns True; no match at all returns False.
    """
    candidates = list(domains)
    for pattern in patterns:
        matcher = _compile(pattern)
        if any(matcher.fullmatch(candidate) for candidate in candidates):
            return True
    return False
