# src/cache/location_cache.py - v2
"""TTL-aware location cache on top of any BaseCacheStore.

Entries are expired lazily: a read older than the TTL is reported as a miss
and removed from the store. Writes always overwrite. Locations are copied on
the way in and out, so callers never share an object with the cache.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from eventlocator.cache.base_cache_store import BaseCacheStore
from eventlocator.cache.models import CacheEntry
from eventlocator.core.models import ResolvedLocation, utc_now

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(days=7)


class LocationCache:
    """Fingerprint -> ResolvedLocation map with a time-to-live."""

    def __init__(
        self,
        store: BaseCacheStore,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("Cache TTL must be positive")
        self._store = store
        self._ttl = ttl
        self._clock = clock

    @property
    def store(self) -> BaseCacheStore:
        return self._store

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    async def get(self, fingerprint: str) -> ResolvedLocation | None:
        """Return the cached location if present and younger than the TTL."""
        try:
            entry = await self._store.get(fingerprint)
        except Exception as e:
            logger.warning("Cache read failed for %s: %s", fingerprint, e)
            return None

        if entry is None:
            return None

        age = self._clock() - entry.created_at
        if age >= self._ttl:
            logger.debug("Cache entry %s expired (age=%s)", fingerprint, age)
            await self._discard(fingerprint)
            return None

        return entry.location.model_copy(deep=True)

    async def set(self, fingerprint: str, location: ResolvedLocation) -> None:
        """Store a location under its fingerprint, replacing any older entry."""
        entry = CacheEntry.for_location(
            fingerprint, location.model_copy(deep=True), created_at=self._clock()
        )
        await self._store.put(fingerprint, entry)

    async def invalidate(self, fingerprint: str) -> None:
        await self._store.delete(fingerprint)

    async def purge_expired(self) -> int:
        """Delete every expired entry. Returns the number removed."""
        now = self._clock()
        removed = 0
        for entry in await self._store.list_entries():
            if now - entry.created_at >= self._ttl:
                await self._store.delete(entry.fingerprint)
                removed += 1
        if removed:
            logger.info("Purged %d expired cache entries", removed)
        return removed

    async def _discard(self, fingerprint: str) -> None:
        try:
            await self._store.delete(fingerprint)
        except Exception as e:
            logger.warning("Failed to discard expired entry %s: %s", fingerprint, e)
