# src/geocoding/base_geocoder.py - v1
"""Abstract geocoder interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from eventlocator.core.models import GeocodeResult, LonLat


class BaseGeocoder(ABC):
    """Forward and reverse geocoding against one provider."""

    @abstractmethod
    async def geocode(self, query: str, context: str | None = None) -> GeocodeResult:
        """Resolve free text to the provider's most relevant result.

        ``context`` is the wider text the query came from; it is logged for
        diagnosis and never sent to the provider.

        Raises:
            GeocodingError: On any failure, zero results included.
        """

    @abstractmethod
    async def reverse_geocode(self, coordinates: LonLat) -> GeocodeResult | None:
        """First result for a (longitude, latitude) pair, None when there is none."""

    @abstractmethod
    async def reverse_geocode_city_state(self, lat: float, lng: float) -> str:
        """Return "City, ST" for a point, or "" when it cannot be determined."""

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""

    async def __aenter__(self) -> BaseGeocoder:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
