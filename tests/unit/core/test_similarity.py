# tests/unit/core/test_similarity.py - v2
"""Tests for core/similarity.py - verification similarity strategies."""

from __future__ import annotations

import pytest

from eventlocator.core.similarity import (
    JaccardWordSimilarity,
    TokenSortSimilarity,
    create_similarity,
)


class TestJaccardWordSimilarity:
    def test_identical(self):
        assert JaccardWordSimilarity().similarity("a b c", "a b c") == 1.0

    def test_order_insensitive(self):
        assert JaccardWordSimilarity().similarity("a b c", "c b a") == 1.0

    def test_partial_overlap(self):
        # {a, b, c} vs {b, c, d}: 2 / 4
        assert JaccardWordSimilarity().similarity("a b c", "b c d") == pytest.approx(0.5)

    def test_disjoint(self):
        assert JaccardWordSimilarity().similarity("a b", "c d") == 0.0

    def test_both_empty(self):
        assert JaccardWordSimilarity().similarity("", "   ") == 0.0

    def test_punctuation_is_part_of_word(self):
        assert JaccardWordSimilarity().similarity("350,", "350") == 0.0


class TestTokenSortSimilarity:
    def test_identical(self):
        assert TokenSortSimilarity().similarity("main st", "main st") == pytest.approx(1.0)

    def test_order_insensitive(self):
        assert TokenSortSimilarity().similarity("5th ave 350", "350 5th ave") == pytest.approx(1.0)

    def test_near_duplicate_scores_high(self):
        score = TokenSortSimilarity().similarity("350 5th avenue", "350 5th avenu")
        assert 0.9 < score < 1.0

    def test_both_blank(self):
        assert TokenSortSimilarity().similarity("", " ") == 0.0


class TestCreateSimilarity:
    def test_by_name(self):
        assert create_similarity("jaccard").name == "jaccard"
        assert create_similarity("token_sort").name == "token_sort"

    def test_default(self):
        assert isinstance(create_similarity(), JaccardWordSimilarity)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unsupported similarity"):
            create_similarity("cosine")
