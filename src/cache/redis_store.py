# src/cache/redis_store.py - v2
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for multi-instance deployments sharing one cache. When a TTL is
given, Redis expires keys natively as well; LocationCache still checks age.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from eventlocator.cache.base_cache_store import BaseCacheStore
from eventlocator.cache.models import CacheEntry

logger = logging.getLogger(__name__)

_KEY_PREFIX = "eventlocator:location:"
_INDEX_KEY = "eventlocator:location:__index__"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for distributed deployments."""

    def __init__(self, redis_url: str, ttl_seconds: int | None = None) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._ttl_seconds = ttl_seconds

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        data = self._client.get(f"{_KEY_PREFIX}{key}")
        if data is None:
            return None
        try:
            return CacheEntry(**json.loads(data))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry, with native expiry when a TTL is configured."""
        redis_key = f"{_KEY_PREFIX}{key}"
        if self._ttl_seconds:
            self._client.set(redis_key, entry.model_dump_json(), ex=self._ttl_seconds)
        else:
            self._client.set(redis_key, entry.model_dump_json())
        self._client.sadd(_INDEX_KEY, key)

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._client.delete(f"{_KEY_PREFIX}{key}")
        self._client.srem(_INDEX_KEY, key)

    async def list_entries(self) -> list[CacheEntry]:
        """List all cached entries; index members whose key expired are pruned."""
        entries: list[CacheEntry] = []
        for key in self._client.smembers(_INDEX_KEY):
            entry = await self.get(key)
            if entry is None:
                self._client.srem(_INDEX_KEY, key)
                continue
            entries.append(entry)
        return entries

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
