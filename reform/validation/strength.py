"""
Password strength levels and scorer helpers.

The scoring algorithm itself lives outside this package. A scorer is any
deterministic, side-effect free callable ``(password) -> StrengthLevel``.
Because scorers are pure, their results can be memoized with
`cached_scorer`.
"""

from enum import Enum
from typing import Callable

from cachetools import LRUCache, cached


class StrengthLevel(Enum):
    """Classification returned by a password strength scorer."""

    VERY_WEAK = "very_weak"
    WEAK = "weak"
    REASONABLE = "reasonable"
    STRONG = "strong"
    VERY_STRONG = "very_strong"


ACCEPTABLE_STRENGTHS = frozenset(
    {StrengthLevel.REASONABLE, StrengthLevel.STRONG, StrengthLevel.VERY_STRONG}
)

StrengthScorer = Callable[[str], StrengthLevel]


def cached_scorer(scorer: StrengthScorer, maxsize: int = 128) -> StrengthScorer:
    """
    Memoize a scorer with an LRU cache of ``maxsize`` passwords.

    A ``maxsize`` of zero returns the scorer unchanged.
    """
    if maxsize <= 0:
        return scorer
    return cached(cache=LRUCache(maxsize=maxsize))(scorer)
