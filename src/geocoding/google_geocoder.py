# src/geocoding/google_geocoder.py - v2
"""Google Geocoding API client over httpx.

One GET per call. The API key travels as a query parameter and is never
logged; request URLs are logged without it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from eventlocator.config.settings import DEFAULT_GEOCODING_URL
from eventlocator.core.coordinates import validate_coordinates
from eventlocator.core.errors import GeocodingError, InvalidCoordinatesError
from eventlocator.core.models import AddressComponents, GeocodeResult, LonLat
from eventlocator.core.retry import RetryConfig, RetryExhausted, with_retry
from eventlocator.geocoding.base_geocoder import BaseGeocoder

logger = logging.getLogger(__name__)


_CITY_TYPES = ("locality", "postal_town", "sublocality", "sublocality_level_2")
_STATE_TYPES = ("administrative_area_level_1", "administrative_area_level_2")


def _find_component(
    components: list[dict[str, Any]], types: tuple[str, ...]
) -> dict[str, Any] | None:
    """First component of the earliest listed type; ``types`` is in priority order."""
    for kind in types:
        for component in components:
            if kind in (component.get("types") or []):
                return component
    return None


def parse_address_components(components: list[dict[str, Any]]) -> AddressComponents:
    """Pick street number, route, city, state (short name) and ZIP from a result."""

    def long_name(kind: str) -> str | None:
        found = _find_component(components, (kind,))
        return found.get("long_name") if found else None

    state = _find_component(components, ("administrative_area_level_1",))
    return AddressComponents(
        street_number=long_name("street_number"),
        street_name=long_name("route"),
        city=long_name("locality"),
        state=state.get("short_name") if state else None,
        zip_code=long_name("postal_code"),
    )


def parse_result(result: dict[str, Any]) -> GeocodeResult:
    """Convert one raw API result into a GeocodeResult.

    Raises:
        GeocodingError: If geometry is missing.
        InvalidCoordinatesError: If lat/lng are not numbers in range.
    """
    try:
        location = result["geometry"]["location"]
        coordinates = (location["lng"], location["lat"])
    except (KeyError, TypeError) as e:
        raise GeocodingError(f"Malformed geocoding result: missing {e}") from e
    if not validate_coordinates(coordinates):
        raise InvalidCoordinatesError(coordinates)

    components = parse_address_components(result.get("address_components") or [])
    return GeocodeResult(
        coordinates=coordinates,
        formatted_address=components.format(),
        provider_address=result.get("formatted_address") or "",
        address_components=components,
        location_type=(result.get("geometry") or {}).get("location_type") or "",
        place_id=result.get("place_id") or "",
        is_partial_match=bool(result.get("partial_match", False)),
    )


class GoogleGeocoder(BaseGeocoder):
    """Geocoder backed by the Google Geocoding HTTP API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_GEOCODING_URL,
        timeout_s: float = 10.0,
        retry_configs: dict[str, RetryConfig] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._retry_configs = retry_configs
        self._owns_client = client is None
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout_s)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def geocode(self, query: str, context: str | None = None) -> GeocodeResult:
        if not query or not query.strip():
            raise GeocodingError("Empty geocoding query")

        logger.debug("Geocoding query=%r context=%r", query, context)
        data = await self._request({"address": query}, operation="geocode")

        results = data.get("results") or []
        if not results:
            raise GeocodingError(
                "No coordinates found for address", provider_status=data.get("status")
            )

        result = parse_result(results[0])
        logger.info(
            "Geocoded %r -> %s (%s, partial=%s)",
            query, result.coordinates, result.location_type or "?", result.is_partial_match,
        )
        return result

    async def reverse_geocode(self, coordinates: LonLat) -> GeocodeResult | None:
        lng, lat = coordinates
        data = await self._request({"latlng": f"{lat},{lng}"}, operation="reverse_geocode")
        results = data.get("results") or []
        if not results:
            return None
        return parse_result(results[0])

    async def reverse_geocode_city_state(self, lat: float, lng: float) -> str:
        try:
            data = await self._request(
                {"latlng": f"{lat},{lng}"}, operation="reverse_geocode_city_state"
            )
        except GeocodingError as e:
            logger.warning("City/state lookup failed for %s,%s: %s", lat, lng, e)
            return ""

        results = data.get("results") or []
        if data.get("status") != "OK" or not results:
            logger.warning("No results found for city/state lookup at %s,%s", lat, lng)
            return ""

        components = results[0].get("address_components") or []
        city = _find_component(components, _CITY_TYPES)
        state = _find_component(components, _STATE_TYPES)
        if city and state:
            return f"{city.get('long_name', '')}, {state.get('short_name', '')}"

        logger.warning(
            "Could not find both city and state (city=%s, state=%s)",
            city is not None, state is not None,
        )
        return ""

    async def _request(self, params: dict[str, str], operation: str) -> dict[str, Any]:
        """GET with retry on transient failures; every failure is a GeocodingError."""
        if not self._api_key:
            raise GeocodingError("Geocoding API key is required for geocoding requests")
        try:
            return await with_retry(
                self._request_once,
                params,
                operation=operation,
                retry_configs=self._retry_configs,
            )
        except RetryExhausted as e:
            if isinstance(e.last_error, GeocodingError):
                raise e.last_error from e
            raise GeocodingError(f"Geocoding request failed: {e.last_error}") from e

    async def _request_once(self, params: dict[str, str]) -> dict[str, Any]:
        client = self._get_client()
        logger.debug("GET %s params=%s", self._base_url, params)
        try:
            response = await asyncio.wait_for(
                client.get(self._base_url, params={**params, "key": self._api_key}),
                timeout=self._timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise GeocodingError(
                f"Geocoding request timeout after {self._timeout_s:.1f}s"
            ) from e
        except httpx.RequestError as e:
            raise GeocodingError(f"Geocoding connection error: {type(e).__name__}") from e

        if not response.is_success:
            raise GeocodingError(
                f"Geocoding API request failed ({response.status_code}): "
                f"{response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GeocodingError("Geocoding API returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise GeocodingError("Geocoding API returned an unexpected payload")

        status = data.get("status")
        if status == "REQUEST_DENIED":
            raise GeocodingError(
                f"Geocoding API request denied: {data.get('error_message', '')}",
                status_code=response.status_code,
                provider_status=status,
            )
        if status == "OVER_QUERY_LIMIT":
            raise GeocodingError(
                "Geocoding API rate limit exceeded (429)",
                status_code=response.status_code,
                provider_status=status,
            )
        return data
