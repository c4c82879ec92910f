# src/cache/models.py - v2
"""Cache domain models: CacheEntry."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from eventlocator.core.models import ResolvedLocation

CACHE_SCHEMA_VERSION = "1"


class CacheEntry(BaseModel):
    """Single cache entry linking a clue fingerprint to its resolved location."""

    fingerprint: str
    location: ResolvedLocation
    created_at: datetime
    schema_version: str = CACHE_SCHEMA_VERSION

    @classmethod
    def for_location(
        cls,
        fingerprint: str,
        location: ResolvedLocation,
        created_at: datetime | None = None,
    ) -> CacheEntry:
        """Wrap a location; the entry is stamped with the location's creation time by default."""
        return cls(
            fingerprint=fingerprint,
            location=location,
            created_at=created_at or location.created_at,
        )
