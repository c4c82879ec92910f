# src/api/models.py - v2
"""API-level models: EventLocationRequest, GeoPoint, EventLocationResult."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from eventlocator.core.models import ResolvedLocation, UserCoordinates, utc_now


class EventLocationRequest(BaseModel):
    """Location clues for one event, plus whatever is known about the user."""

    clues: list[str] = Field(default_factory=list)
    user_city_state: str | None = None
    user_coordinates: UserCoordinates | None = None


class GeoPoint(BaseModel):
    """GeoJSON Point; coordinates are [longitude, latitude]."""

    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float]


class EventLocationResult(BaseModel):
    """Resolved event location in the shape stored alongside events."""

    address: str
    coordinates: GeoPoint
    confidence: float
    timezone: str
    location_notes: str | None = None
    resolved_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_resolved(cls, location: ResolvedLocation) -> EventLocationResult:
        return cls(
            address=location.address,
            coordinates=GeoPoint(coordinates=location.coordinates),
            confidence=location.confidence,
            timezone=location.timezone,
            location_notes=location.location_notes,
        )
