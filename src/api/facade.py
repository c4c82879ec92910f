# src/api/facade.py - v2
"""Public API facade: single entry point for location resolution.

Usage:
    from eventlocator.api.facade import resolve_location
    location = await resolve_location(["Joe's Diner, 435-555-0100"], "Salt Lake City, UT")
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import timedelta
from typing import TYPE_CHECKING

from eventlocator.api.models import EventLocationRequest, EventLocationResult
from eventlocator.cache.cache_factory import create_cache_store
from eventlocator.cache.location_cache import LocationCache
from eventlocator.config.settings import Settings
from eventlocator.core.models import LocationQuery, ResolvedLocation, UserCoordinates
from eventlocator.core.retry import build_retry_configs
from eventlocator.core.similarity import create_similarity
from eventlocator.extraction.address_extractor import AddressExtractor
from eventlocator.geocoding.google_geocoder import GoogleGeocoder
from eventlocator.geocoding.timezone import TimezoneFinderLookup, resolve_timezone
from eventlocator.geocoding.verification import ReverseGeocodeVerifier
from eventlocator.llm.client_factory import create_llm_client
from eventlocator.llm.config import resolve_llm
from eventlocator.pipeline.location_resolver import LocationResolver

if TYPE_CHECKING:
    from eventlocator.cache.base_cache_store import BaseCacheStore
    from eventlocator.core.similarity import BaseSimilarity
    from eventlocator.geocoding.base_geocoder import BaseGeocoder
    from eventlocator.geocoding.timezone import BaseTimezoneLookup
    from eventlocator.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


def build_resolver(
    settings: Settings | None = None,
    *,
    llm: BaseLLMClient | None = None,
    geocoder: BaseGeocoder | None = None,
    timezone_lookup: BaseTimezoneLookup | None = None,
    cache_store: BaseCacheStore | None = None,
    similarity: BaseSimilarity | None = None,
) -> LocationResolver:
    """Wire a LocationResolver from settings; any collaborator may be injected.

    Args:
        settings: Global settings. Loaded from .env if None.
        llm: Language model client. Built from the LLM_* cascade if None.
        geocoder: Geocoder. GoogleGeocoder with GOOGLE_GEOCODING_API_KEY if None.
        timezone_lookup: Timezone source. timezonefinder if None.
        cache_store: Cache backend. Built from CACHE_BACKEND if None.
        similarity: Verification strategy. From VERIFICATION_SIMILARITY if None.
    """
    settings = settings or Settings()

    if llm is None:
        assignment = resolve_llm("address_extractor", settings)
        logger.info("Address extractor LLM: %s (from %s)", assignment.key, assignment.source)
        llm = create_llm_client(assignment.provider, assignment.model, settings)

    if geocoder is None:
        geocoder = GoogleGeocoder(
            api_key=settings.google_geocoding_api_key,
            base_url=settings.geocoding_base_url,
            timeout_s=settings.geocoding_timeout_s,
            retry_configs=build_retry_configs(
                settings.geocoding_max_retries, settings.retry_base_delay_s
            ),
        )

    extractor = AddressExtractor(
        llm,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        json_mode=settings.llm_json_mode,
        timeout_s=settings.llm_timeout_s,
        retry_configs=build_retry_configs(settings.llm_max_retries, settings.retry_base_delay_s),
    )
    verifier = ReverseGeocodeVerifier(
        geocoder,
        similarity=similarity or create_similarity(settings.verification_similarity),
        threshold=settings.verification_threshold,
        timeout_s=settings.geocoding_timeout_s,
    )
    cache = LocationCache(
        cache_store or create_cache_store(settings),
        ttl=timedelta(seconds=settings.cache_ttl_seconds),
    )

    return LocationResolver(
        extractor=extractor,
        geocoder=geocoder,
        verifier=verifier,
        timezone_lookup=timezone_lookup or TimezoneFinderLookup(),
        cache=cache,
        timezone_default=settings.timezone_default,
        timezone_timeout_s=settings.timezone_timeout_s,
    )


async def resolve_location(
    clues: Sequence[str],
    user_city_state: str | None = None,
    user_coordinates: UserCoordinates | None = None,
    *,
    settings: Settings | None = None,
    resolver: LocationResolver | None = None,
) -> ResolvedLocation:
    """Resolve clues to a location.

    A resolver built here owns its geocoder and cache store and releases them
    before returning; pass ``resolver`` to reuse one (and its cache) across calls.

    Raises:
        LocationResolutionError: Subclass naming the step that failed.
    """
    query = LocationQuery(
        clues=list(clues),
        user_city_state=user_city_state or None,
        user_coordinates=user_coordinates,
    )
    if resolver is not None:
        return await resolver.resolve(query)

    resolver = build_resolver(settings)
    try:
        return await resolver.resolve(query)
    finally:
        await _close(resolver)


async def resolve_event_location(
    request: EventLocationRequest,
    *,
    settings: Settings | None = None,
    resolver: LocationResolver | None = None,
) -> EventLocationResult:
    """Resolve an event's location into a GeoJSON-shaped result.

    When only user coordinates are known, "City, ST" is derived from them by
    reverse geocoding first, since it sharpens both the prompt and the cache key.
    """
    owned = resolver is None
    if resolver is None:
        resolver = build_resolver(settings)

    try:
        user_city_state = request.user_city_state or ""
        if not user_city_state and request.user_coordinates is not None:
            user_city_state = await resolver.geocoder.reverse_geocode_city_state(
                request.user_coordinates.lat, request.user_coordinates.lng
            )
            logger.info("Derived user city/state: %r", user_city_state or "(unknown)")

        location = await resolve_location(
            request.clues,
            user_city_state or None,
            request.user_coordinates,
            resolver=resolver,
        )
    finally:
        if owned:
            await _close(resolver)

    return EventLocationResult.from_resolved(location)


async def get_timezone(lat: float, lng: float, settings: Settings | None = None) -> str:
    """IANA zone for a point, falling back to TIMEZONE_DEFAULT."""
    settings = settings or Settings()
    return await resolve_timezone(
        TimezoneFinderLookup(),
        lat,
        lng,
        default=settings.timezone_default,
        timeout_s=settings.timezone_timeout_s,
    )


async def _close(resolver: LocationResolver) -> None:
    await resolver.geocoder.aclose()
    resolver.cache.store.close()
