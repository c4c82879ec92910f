# src/cache/cache_factory.py - v3
"""Factory for cache store instantiation from CACHE_BACKEND."""

from __future__ import annotations

from datetime import timedelta

from eventlocator.cache.base_cache_store import BaseCacheStore
from eventlocator.cache.location_cache import LocationCache
from eventlocator.config.settings import Settings

SQLITE_FILENAME = "eventlocator_cache.db"


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend

    if backend == "memory":
        from eventlocator.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    if backend == "json":
        from eventlocator.cache.json_store import JsonCacheStore
        return JsonCacheStore(cache_root=settings.cache_root)

    if backend == "sqlite":
        from eventlocator.cache.sqlite_store import SqliteCacheStore
        db_path = settings.cache_root.expanduser() / SQLITE_FILENAME
        return SqliteCacheStore(db_path=db_path)

    if backend == "redis":
        from eventlocator.cache.redis_store import RedisCacheStore
        if not settings.cache_redis_url:
            raise ValueError("CACHE_REDIS_URL must be set when CACHE_BACKEND=redis")
        return RedisCacheStore(
            redis_url=settings.cache_redis_url,
            ttl_seconds=settings.cache_ttl_seconds,
        )

    raise ValueError(f"Unknown cache backend: {backend!r}")


def create_location_cache(
    settings: Settings | None = None,
    store: BaseCacheStore | None = None,
) -> LocationCache:
    """Build a LocationCache with the configured store and TTL."""
    if store is None:
        store = create_cache_store(settings)
    if settings is None:
        return LocationCache(store)
    return LocationCache(store, ttl=timedelta(seconds=settings.cache_ttl_seconds))
