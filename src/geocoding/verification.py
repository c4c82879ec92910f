# src/geocoding/verification.py - v1
"""Reverse-geocode verification of a forward geocoding result.

The point is reverse geocoded and the provider's address compared with the
address we expected. Verification only adjusts confidence, so it never raises.
"""

from __future__ import annotations

import asyncio
import logging

from eventlocator.core.models import LonLat
from eventlocator.core.similarity import BaseSimilarity, JaccardWordSimilarity
from eventlocator.geocoding.base_geocoder import BaseGeocoder

logger = logging.getLogger(__name__)


class ReverseGeocodeVerifier:
    """Checks that coordinates reverse geocode to something like the expected address."""

    def __init__(
        self,
        geocoder: BaseGeocoder,
        similarity: BaseSimilarity | None = None,
        threshold: float = 0.7,
        timeout_s: float = 10.0,
    ) -> None:
        self._geocoder = geocoder
        self._similarity = similarity or JaccardWordSimilarity()
        self._threshold = threshold
        self._timeout_s = timeout_s

    @property
    def threshold(self) -> float:
        return self._threshold

    async def verify(self, coordinates: LonLat, expected_address: str) -> bool:
        """True when similarity(expected, reverse geocoded) exceeds the threshold."""
        try:
            result = await asyncio.wait_for(
                self._geocoder.reverse_geocode(coordinates), timeout=self._timeout_s
            )
        except Exception as e:
            logger.warning("Reverse geocoding verification failed: %s", e)
            return False

        if result is None:
            logger.info("Reverse geocoding returned no result for %s", coordinates)
            return False

        reverse_address = result.provider_address or result.formatted_address
        score = self._similarity.similarity(
            expected_address.lower(), reverse_address.lower()
        )
        verified = score > self._threshold
        logger.info(
            "Reverse geocoding verification %s (%s=%.2f, threshold=%.2f): %r vs %r",
            "passed" if verified else "failed",
            self._similarity.name, score, self._threshold,
            expected_address, reverse_address,
        )
        return verified
