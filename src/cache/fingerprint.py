# src/cache/fingerprint.py - v3
"""Clue fingerprinting: the cache key for a resolution.

Clue order and casing carry no meaning, so they are normalised away. The
user's city/state does change how clues are read ("Washington" near
Seattle vs. near Baltimore) and is therefore part of the key.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable

CLUE_DELIMITER = "|"


def normalize_clues(clues: Iterable[str | None]) -> list[str]:
    """Drop falsy clues, lower-case and trim the rest, sort lexicographically."""
    return sorted(clue.lower().strip() for clue in clues if clue)


def compute_clues_fingerprint(
    clues: Iterable[str | None],
    user_location: str | None = None,
) -> str:
    """Deterministic MD5 hex digest of the normalised clues plus user location.

    Args:
        clues: Free-text location clues in any order or case.
        user_location: Optional "City, ST" context appended after the clues.

    Returns:
        32-character hex string.
    """
    payload = CLUE_DELIMITER.join(normalize_clues(clues))
    if user_location:
        payload = f"{payload}{CLUE_DELIMITER}{user_location}"
    return hashlib.md5(payload.encode("utf-8")).hexdigest()  # noqa: S324
