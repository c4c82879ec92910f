# src/cache/memory_store.py - v1
"""In-process dict-backed cache store (CACHE_BACKEND=memory).

Entries are only shared by resolvers holding the same store instance.
"""

from __future__ import annotations

from eventlocator.cache.base_cache_store import BaseCacheStore
from eventlocator.cache.models import CacheEntry


class MemoryCacheStore(BaseCacheStore):
    """Dictionary-backed cache store."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    async def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    async def put(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def list_entries(self) -> list[CacheEntry]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
