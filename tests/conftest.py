# tests/conftest.py - v2
"""Shared test fixtures for all unit and integration tests.

Provides fake LLM clients, geocoders and timezone lookups plus a ready-wired
LocationResolver. No network access: all I/O is mocked.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from eventlocator.cache.location_cache import LocationCache
from eventlocator.cache.memory_store import MemoryCacheStore
from eventlocator.config.settings import Settings
from eventlocator.core.models import (
    AddressComponents,
    GeocodeResult,
    LocationQuery,
    UserCoordinates,
)
from eventlocator.extraction.address_extractor import AddressExtractor
from eventlocator.geocoding.base_geocoder import BaseGeocoder
from eventlocator.geocoding.timezone import BaseTimezoneLookup
from eventlocator.geocoding.verification import ReverseGeocodeVerifier
from eventlocator.llm.base_client import BaseLLMClient
from eventlocator.llm.models import LLMResponse
from eventlocator.pipeline.location_resolver import LocationResolver

# Empire State Building, GeoJSON order.
EMPIRE_STATE = (-73.9857, 40.7484)


# === HELPERS ===


def make_llm_response(content: str | dict) -> LLMResponse:
    """LLMResponse carrying ``content`` (dicts are JSON-encoded)."""
    if isinstance(content, dict):
        content = json.dumps(content)
    return LLMResponse(
        content=content,
        input_tokens=120,
        output_tokens=40,
        model="test-model",
        provider="test",
        latency_ms=5,
    )


def make_geocode_result(
    coordinates: tuple[float, float] = EMPIRE_STATE,
    formatted_address: str = "350, 5th Avenue, New York, NY, 10118",
    provider_address: str = "350 5th Ave, New York, NY 10118, USA",
) -> GeocodeResult:
    return GeocodeResult(
        coordinates=coordinates,
        formatted_address=formatted_address,
        provider_address=provider_address,
        address_components=AddressComponents(
            street_number="350",
            street_name="5th Avenue",
            city="New York",
            state="NY",
            zip_code="10118",
        ),
        location_type="ROOFTOP",
        place_id="place_001",
    )


class FakeClock:
    """Settable clock for TTL tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


# === FIXTURES: Collaborators ===


@pytest.fixture
def mock_llm() -> AsyncMock:
    """LLM client whose complete() returns a full street address."""
    llm = AsyncMock(spec=BaseLLMClient)
    llm.complete.return_value = make_llm_response(
        {
            "address": "350 5th Ave, New York, NY 10118",
            "locationNotes": "Empire State Building",
            "confidence": 0.9,
        }
    )
    llm.provider_name = "test"
    llm.model_name = "test-model"
    return llm


@pytest.fixture
def mock_geocoder() -> AsyncMock:
    """Geocoder returning the Empire State Building for every query."""
    geocoder = AsyncMock(spec=BaseGeocoder)
    geocoder.geocode.return_value = make_geocode_result()
    geocoder.reverse_geocode.return_value = make_geocode_result(
        provider_address="350, 5th avenue, new york, ny, 10118",
    )
    geocoder.reverse_geocode_city_state.return_value = "New York, NY"
    return geocoder


@pytest.fixture
def mock_timezone_lookup() -> MagicMock:
    lookup = MagicMock(spec=BaseTimezoneLookup)
    lookup.candidates.return_value = ["America/New_York"]
    return lookup


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def location_cache(memory_store: MemoryCacheStore, fake_clock: FakeClock) -> LocationCache:
    return LocationCache(memory_store, clock=fake_clock)


@pytest.fixture
def resolver(
    mock_llm: AsyncMock,
    mock_geocoder: AsyncMock,
    mock_timezone_lookup: MagicMock,
    location_cache: LocationCache,
) -> LocationResolver:
    """Resolver wired to fakes, with retries disabled."""
    return LocationResolver(
        extractor=AddressExtractor(mock_llm, retry_configs={}),
        geocoder=mock_geocoder,
        verifier=ReverseGeocodeVerifier(mock_geocoder),
        timezone_lookup=mock_timezone_lookup,
        cache=location_cache,
    )


# === FIXTURES: Inputs ===


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, google_geocoding_api_key="test-key")


@pytest.fixture
def nyc_query() -> LocationQuery:
    return LocationQuery(
        clues=["Empire State Building", "350 5th Ave", "Call (212) 736-3100"],
        user_city_state="New York, NY",
        user_coordinates=UserCoordinates(lat=40.75, lng=-73.99),
    )


# === FIXTURES: Factories ===


@pytest.fixture
def llm_response():
    """Factory: llm_response(content) -> LLMResponse."""
    return make_llm_response


@pytest.fixture
def geocode_result():
    """Factory: geocode_result(coordinates=..., formatted_address=...) -> GeocodeResult."""
    return make_geocode_result
