# tests/unit/core/test_unit_coordinates.py - v1
"""Tests for core/coordinates.py - (lon, lat) validation."""

from __future__ import annotations

import pytest

from eventlocator.core.coordinates import validate_coordinates


@pytest.mark.parametrize(
    "coords",
    [(-73.9857, 40.7484), (180, 90), (-180, -90), [0, 0], (0.0, -0.0)],
)
def test_valid(coords):
    assert validate_coordinates(coords) is True


@pytest.mark.parametrize(
    "coords",
    [
        (-73.9857, 95.0),
        (181.0, 0.0),
        (0.0, -90.5),
        (float("nan"), 0.0),
        ("1", "2"),
        (True, 0.0),
        (1.0,),
        (1.0, 2.0, 3.0),
        None,
        {"lon": 0, "lat": 0},
    ],
)
def test_invalid(coords):
    assert validate_coordinates(coords) is False
