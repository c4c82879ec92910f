# src/geocoding/timezone.py - v1
"""IANA timezone lookup for a coordinate pair.

timezonefinder works offline from bundled polygons; the lookup runs in a
worker thread so the event loop is not blocked while it loads.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"


class BaseTimezoneLookup(ABC):
    """Maps a point to candidate IANA zone names, best first."""

    @abstractmethod
    def candidates(self, lat: float, lng: float) -> list[str]:
        """Return candidate zones; empty when the point matches none."""


class TimezoneFinderLookup(BaseTimezoneLookup):
    """timezonefinder-backed lookup. The finder is built on first use."""

    def __init__(self) -> None:
        self._finder: Any = None

    def _get_finder(self) -> Any:
        if self._finder is None:
            from timezonefinder import TimezoneFinder

            self._finder = TimezoneFinder()
        return self._finder

    def candidates(self, lat: float, lng: float) -> list[str]:
        zone = self._get_finder().timezone_at(lng=lng, lat=lat)
        return [zone] if zone else []


async def resolve_timezone(
    lookup: BaseTimezoneLookup,
    lat: float,
    lng: float,
    default: str = DEFAULT_TIMEZONE,
    timeout_s: float = 5.0,
) -> str:
    """First candidate zone for the point, or ``default`` on any failure."""
    try:
        zones = await asyncio.wait_for(
            asyncio.to_thread(lookup.candidates, lat, lng), timeout=timeout_s
        )
    except Exception as e:
        logger.warning("Timezone lookup failed for %s,%s: %s", lat, lng, e)
        return default

    if not zones:
        logger.info("No timezone found for %s,%s, using %s", lat, lng, default)
        return default
    return zones[0]
