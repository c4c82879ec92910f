# src/core/models.py - v2
"""Shared Pydantic domain models used across modules.

No module redefines these types: all imports come from core.models.
Coordinates travel in GeoJSON order, (longitude, latitude), everywhere
except UserCoordinates, which mirrors what clients send (lat/lng fields).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# (longitude, latitude)
LonLat = tuple[float, float]


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


# === INPUT ===


class UserCoordinates(BaseModel):
    """Where the user was when the event was captured."""

    lat: float
    lng: float

    def as_lonlat(self) -> LonLat:
        """Return the pair in GeoJSON (longitude, latitude) order."""
        return (self.lng, self.lat)


class LocationQuery(BaseModel):
    """Free-text clues plus optional user context for one resolution."""

    clues: list[str] = Field(default_factory=list)
    user_city_state: str | None = None
    user_coordinates: UserCoordinates | None = None

    def unique_clues(self) -> list[str]:
        """Stripped, non-empty clues with duplicates removed, first occurrence kept."""
        seen: set[str] = set()
        result: list[str] = []
        for clue in self.clues:
            if not clue:
                continue
            text = clue.strip()
            if not text or text in seen:
                continue
            seen.add(text)
            result.append(text)
        return result

    @property
    def clue_text(self) -> str:
        """Deduplicated clues joined into the single text blob sent to the LLM."""
        return " | ".join(self.unique_clues())


# === EXTRACTION ===


class ExtractedAddress(BaseModel):
    """Address candidate pulled out of the clues by the language model."""

    model_config = ConfigDict(populate_by_name=True)

    address: str = ""
    location_notes: str = Field(default="", alias="locationNotes")
    confidence: float = 0.0

    @property
    def has_address(self) -> bool:
        return bool(self.address)

    @property
    def has_notes(self) -> bool:
        return bool(self.location_notes)


class ParseOutcome(BaseModel):
    """Tagged result of parsing an extraction response.

    ``ok`` with a value whose address is empty means "no address found";
    ``ok=False`` means the response could not be parsed at all.
    """

    ok: bool
    value: ExtractedAddress | None = None
    stage: Literal["json", "pattern"] | None = None
    error: str | None = None


# === GEOCODING ===


class AddressComponents(BaseModel):
    """Structured pieces of a geocoder result used to build a clean address."""

    street_number: str | None = None
    street_name: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None

    def format(self) -> str:
        """Join the present components with ', '."""
        parts = [
            self.street_number,
            self.street_name,
            self.city,
            self.state,
            self.zip_code,
        ]
        return ", ".join(p for p in parts if p)


class GeocodeResult(BaseModel):
    """First (most relevant) candidate returned by a geocoder."""

    coordinates: LonLat
    formatted_address: str
    provider_address: str = ""
    address_components: AddressComponents = Field(default_factory=AddressComponents)
    location_type: str = ""
    place_id: str = ""
    is_partial_match: bool = False


# === RESOLUTION ===


class ResolutionTier(str, Enum):
    """Which evidence produced the final coordinates."""

    VERIFIED_ADDRESS = "verified_address"
    ADDRESS = "address"
    NOTES = "notes"
    USER_COORDINATES = "user_coordinates"


# More corroborating evidence always means higher confidence.
TIER_CONFIDENCE: dict[ResolutionTier, float] = {
    ResolutionTier.VERIFIED_ADDRESS: 0.8,
    ResolutionTier.ADDRESS: 0.5,
    ResolutionTier.NOTES: 0.4,
    ResolutionTier.USER_COORDINATES: 0.3,
}


class ResolvedLocation(BaseModel):
    """Best-effort geocoded location for a set of clues."""

    address: str
    coordinates: LonLat
    confidence: float = Field(ge=0.0, le=1.0)
    timezone: str = "UTC"
    location_notes: str | None = None
    tier: ResolutionTier
    fingerprint: str = ""
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]
