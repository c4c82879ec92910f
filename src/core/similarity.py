# src/core/similarity.py - v3
"""String similarity strategies used by reverse-geocode verification.

Selected by VERIFICATION_SIMILARITY:
- jaccard (default): word-set Jaccard index over whitespace tokens
- token_sort: rapidfuzz token_sort_ratio, tolerant of near-duplicate tokens
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseSimilarity(ABC):
    """Scores how alike two strings are, in [0, 1]."""

    @abstractmethod
    def similarity(self, a: str, b: str) -> float:
        """Return a similarity score between 0.0 and 1.0."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy identifier."""


class JaccardWordSimilarity(BaseSimilarity):
    """Intersection over union of the two whitespace-separated word sets.

    Order-insensitive and exact-token only: "350," and "350" are different words.
    """

    def similarity(self, a: str, b: str) -> float:
        words_a = set(a.split())
        words_b = set(b.split())
        union = words_a | words_b
        if not union:
            return 0.0
        return len(words_a & words_b) / len(union)

    @property
    def name(self) -> str:
        return "jaccard"


class TokenSortSimilarity(BaseSimilarity):
    """Edit-distance ratio after sorting tokens (rapidfuzz)."""

    def similarity(self, a: str, b: str) -> float:
        from rapidfuzz import fuzz

        if not a.strip() and not b.strip():
            return 0.0
        return fuzz.token_sort_ratio(a, b) / 100.0

    @property
    def name(self) -> str:
        return "token_sort"


_STRATEGIES: dict[str, type[BaseSimilarity]] = {
    "jaccard": JaccardWordSimilarity,
    "token_sort": TokenSortSimilarity,
}


def create_similarity(name: str = "jaccard") -> BaseSimilarity:
    """Instantiate a similarity strategy by name.

    Raises:
        ValueError: If the strategy is unknown.
    """
    try:
        strategy_cls = _STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported similarity strategy: {name!r}. "
            f"Available: {', '.join(sorted(_STRATEGIES))}"
        ) from None
    logger.debug("Using %s similarity for verification", name)
    return strategy_cls()
