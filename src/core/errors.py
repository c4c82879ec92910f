# src/core/errors.py - v1
"""Error taxonomy for location resolution.

Steps that abort a resolution raise a subclass of LocationResolutionError.
Advisory steps (reverse-geocode verification, timezone lookup) never raise.
"""

from __future__ import annotations


class LocationResolutionError(Exception):
    """Base class for every fatal resolution failure."""


class NoLocationCluesError(LocationResolutionError, ValueError):
    """No usable clue and no user coordinates to fall back on."""

    def __init__(self, message: str = "No location clues provided") -> None:
        super().__init__(message)


class ExtractionError(LocationResolutionError):
    """The language model call failed or its response could not be parsed."""


class GeocodingError(LocationResolutionError):
    """Forward geocoding failed (HTTP error, provider denial, zero results)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        provider_status: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.provider_status = provider_status
        super().__init__(message)


class InvalidCoordinatesError(LocationResolutionError):
    """A coordinate pair produced mid-pipeline is out of range or non-numeric."""

    def __init__(self, coordinates: object) -> None:
        self.coordinates = coordinates
        super().__init__(f"Invalid coordinates obtained from geocoding: {coordinates!r}")


class LocationUndeterminedError(LocationResolutionError):
    """No address, no notes and no user coordinates were available."""

    def __init__(
        self,
        message: str = (
            "Cannot determine event location: no address, location notes "
            "or user coordinates available"
        ),
    ) -> None:
        super().__init__(message)
