# src/core/coordinates.py - v1
"""Coordinate validation for GeoJSON-ordered (longitude, latitude) pairs."""

from __future__ import annotations

from numbers import Real
from typing import Any


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_coordinates(coordinates: Any) -> bool:
    """True iff ``coordinates`` is a numeric (lon, lat) pair within range.

    Longitude must lie in [-180, 180] and latitude in [-90, 90]. NaN fails
    both range checks.
    """
    if not isinstance(coordinates, (tuple, list)) or len(coordinates) != 2:
        return False
    lon, lat = coordinates
    if not (_is_number(lon) and _is_number(lat)):
        return False
    return -180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0
