# tests/unit/cache/test_unit_fingerprint.py - v2
"""Tests for cache/fingerprint.py - clue fingerprint determinism."""

from __future__ import annotations

import hashlib

from eventlocator.cache.fingerprint import compute_clues_fingerprint, normalize_clues


class TestNormalizeClues:
    def test_lower_strip_sort(self):
        assert normalize_clues(["  Zeta ", "alpha", "Beta"]) == ["alpha", "beta", "zeta"]

    def test_drops_falsy(self):
        assert normalize_clues(["", None, "x"]) == ["x"]


class TestComputeCluesFingerprint:
    def test_order_and_case_independent(self):
        assert compute_clues_fingerprint(["B", "a"], "X") == compute_clues_fingerprint(["a", "B"], "X")

    def test_context_sensitive(self):
        assert compute_clues_fingerprint(["a"], "X") != compute_clues_fingerprint(["a"], "Y")

    def test_context_optional(self):
        assert compute_clues_fingerprint(["a"]) != compute_clues_fingerprint(["a"], "X")
        assert compute_clues_fingerprint(["a"], "") == compute_clues_fingerprint(["a"])

    def test_md5_of_joined_payload(self):
        expected = hashlib.md5(b"a|b|Salt Lake City, UT").hexdigest()
        assert compute_clues_fingerprint(["b", "A "], "Salt Lake City, UT") == expected

    def test_hex_length(self):
        assert len(compute_clues_fingerprint(["x"])) == 32
