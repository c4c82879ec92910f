# src/pipeline/location_resolver.py - v2
"""Location resolution orchestrator.

cache -> extraction -> geocode -> reverse-geocode verification -> timezone.
Exactly one confidence tier applies per resolution:

  verified address  0.8   address geocoded and reverse geocodes back to it
  address           0.5   address geocoded, verification failed
  notes             0.4   only location notes could be geocoded
  user coordinates  0.3   nothing usable in the clues, user position used

Extraction and geocoding failures propagate and nothing is cached.
Verification and timezone lookup never abort a resolution.
"""

from __future__ import annotations

import logging
import time

from eventlocator.cache.fingerprint import compute_clues_fingerprint
from eventlocator.cache.location_cache import LocationCache
from eventlocator.core.coordinates import validate_coordinates
from eventlocator.core.errors import (
    InvalidCoordinatesError,
    LocationUndeterminedError,
    NoLocationCluesError,
)
from eventlocator.core.models import (
    TIER_CONFIDENCE,
    ExtractedAddress,
    GeocodeResult,
    LocationQuery,
    ResolutionTier,
    ResolvedLocation,
    UserCoordinates,
)
from eventlocator.extraction.address_extractor import AddressExtractor, build_user_context
from eventlocator.geocoding.base_geocoder import BaseGeocoder
from eventlocator.geocoding.timezone import (
    DEFAULT_TIMEZONE,
    BaseTimezoneLookup,
    resolve_timezone,
)
from eventlocator.geocoding.verification import ReverseGeocodeVerifier
from eventlocator.logging.context import clear_context, set_resolution_context, set_step_context

logger = logging.getLogger(__name__)


class LocationResolver:
    """Resolves free-text clues plus user context into a ResolvedLocation."""

    def __init__(
        self,
        extractor: AddressExtractor,
        geocoder: BaseGeocoder,
        verifier: ReverseGeocodeVerifier,
        timezone_lookup: BaseTimezoneLookup,
        cache: LocationCache,
        timezone_default: str = DEFAULT_TIMEZONE,
        timezone_timeout_s: float = 5.0,
    ) -> None:
        self._extractor = extractor
        self._geocoder = geocoder
        self._verifier = verifier
        self._timezone_lookup = timezone_lookup
        self._cache = cache
        self._timezone_default = timezone_default
        self._timezone_timeout_s = timezone_timeout_s

    @property
    def geocoder(self) -> BaseGeocoder:
        return self._geocoder

    @property
    def cache(self) -> LocationCache:
        return self._cache

    async def resolve(self, query: LocationQuery) -> ResolvedLocation:
        """Resolve one query.

        Raises:
            NoLocationCluesError: No usable clue and no user coordinates.
            ExtractionError: Language model failure or unparseable response.
            GeocodingError: Provider failure or zero results.
            InvalidCoordinatesError: Geocoder returned an out-of-range point.
            LocationUndeterminedError: Nothing in the clues and no user coordinates.
        """
        clues = query.unique_clues()
        if not clues and query.user_coordinates is None:
            raise NoLocationCluesError()

        fingerprint = compute_clues_fingerprint(query.clues, query.user_city_state)
        set_resolution_context(fingerprint)
        start = time.monotonic()
        try:
            if not clues and query.user_coordinates is not None:
                logger.info("No usable clues, falling back to user coordinates")
                return await self._finish(
                    self._user_coordinates_location(
                        query.user_coordinates, query.user_city_state, None
                    ),
                    fingerprint,
                    cache=False,
                )

            set_step_context("cache")
            cached = await self._cache.get(fingerprint)
            if cached is not None:
                logger.info("Using cached location (confidence=%.2f)", cached.confidence)
                return cached

            logger.info("Resolving %d clue(s)", len(clues))
            set_step_context("extraction")
            extracted = await self._extractor.extract(
                query.clue_text,
                build_user_context(query.user_city_state, query.user_coordinates),
            )

            location = await self._locate(query, extracted)
            return await self._finish(location, fingerprint, cache=True)
        finally:
            logger.debug("Resolution finished in %.0fms", (time.monotonic() - start) * 1000)
            clear_context()

    async def _locate(self, query: LocationQuery, extracted: ExtractedAddress) -> ResolvedLocation:
        """Apply the first tier the extracted evidence supports."""
        notes = extracted.location_notes or None

        if extracted.has_address:
            set_step_context("geocode")
            result = await self._geocoder.geocode(
                extracted.address, f"{extracted.address} | {extracted.location_notes}"
            )
            self._check_coordinates(result)

            set_step_context("verify")
            verified = await self._verifier.verify(result.coordinates, result.formatted_address)
            tier = ResolutionTier.VERIFIED_ADDRESS if verified else ResolutionTier.ADDRESS
            return self._location(result.formatted_address, result.coordinates, tier, notes)

        if extracted.has_notes:
            set_step_context("geocode")
            result = await self._geocoder.geocode(
                extracted.location_notes, extracted.location_notes
            )
            self._check_coordinates(result)
            return self._location(
                result.formatted_address, result.coordinates, ResolutionTier.NOTES, notes
            )

        if query.user_coordinates is not None:
            logger.info("No address or notes extracted, falling back to user coordinates")
            return self._user_coordinates_location(
                query.user_coordinates, query.user_city_state, extracted.location_notes
            )

        raise LocationUndeterminedError()

    async def _finish(
        self, location: ResolvedLocation, fingerprint: str, cache: bool
    ) -> ResolvedLocation:
        set_step_context("timezone")
        location.timezone = await resolve_timezone(
            self._timezone_lookup,
            location.latitude,
            location.longitude,
            default=self._timezone_default,
            timeout_s=self._timezone_timeout_s,
        )
        location.fingerprint = fingerprint

        if cache:
            set_step_context("cache")
            await self._cache.set(fingerprint, location)

        logger.info(
            "Resolved location tier=%s confidence=%.2f coordinates=%s timezone=%s",
            location.tier.value, location.confidence, location.coordinates, location.timezone,
        )
        return location

    def _user_coordinates_location(
        self, user_coordinates: UserCoordinates, city_state: str | None, notes: str | None
    ) -> ResolvedLocation:
        coordinates = user_coordinates.as_lonlat()
        if not validate_coordinates(coordinates):
            raise InvalidCoordinatesError(coordinates)
        return self._location(
            city_state or "",
            coordinates,
            ResolutionTier.USER_COORDINATES,
            notes or None,
        )

    @staticmethod
    def _check_coordinates(result: GeocodeResult) -> None:
        if not validate_coordinates(result.coordinates):
            raise InvalidCoordinatesError(result.coordinates)

    @staticmethod
    def _location(
        address: str,
        coordinates: tuple[float, float],
        tier: ResolutionTier,
        notes: str | None,
    ) -> ResolvedLocation:
        return ResolvedLocation(
            address=address,
            coordinates=coordinates,
            confidence=TIER_CONFIDENCE[tier],
            location_notes=notes,
            tier=tier,
        )
