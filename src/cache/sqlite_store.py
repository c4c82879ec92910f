# src/cache/sqlite_store.py - v2
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3. One row per fingerprint; writes are upserts.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

from pydantic import ValidationError

from eventlocator.cache.base_cache_store import BaseCacheStore
from eventlocator.cache.models import CacheEntry

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS location_cache (
    key TEXT PRIMARY KEY,
    data TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_location_cache_created ON location_cache(created_at);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        cursor = self._conn.execute(
            "SELECT data FROM location_cache WHERE key = ?", (key,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        try:
            return CacheEntry(**json.loads(row[0]))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry (upsert)."""
        self._conn.execute(
            """INSERT OR REPLACE INTO location_cache (key, data, created_at)
               VALUES (?, ?, ?)""",
            (key, entry.model_dump_json(), entry.created_at.isoformat()),
        )
        self._conn.commit()

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._conn.execute("DELETE FROM location_cache WHERE key = ?", (key,))
        self._conn.commit()

    async def list_entries(self) -> list[CacheEntry]:
        """List all cached entries, oldest first."""
        cursor = self._conn.execute(
            "SELECT data FROM location_cache ORDER BY created_at"
        )
        entries: list[CacheEntry] = []
        for (data,) in cursor.fetchall():
            try:
                entries.append(CacheEntry(**json.loads(data)))
            except (json.JSONDecodeError, ValidationError, TypeError):
                continue
        return entries

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
