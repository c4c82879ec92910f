# src/extraction/response_parser.py - v1
"""Parse the address extractor's LLM response into an ExtractedAddress.

Two stages: the JSON object the prompt asks for, then free-text patterns
for models that ignore the format instruction. Parsing never raises; the
outcome is tagged so the caller decides what a failure means.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from eventlocator.core.models import ExtractedAddress, ParseOutcome

logger = logging.getLogger(__name__)

NO_ADDRESS = "NO_ADDRESS"
PATTERN_CONFIDENCE = 0.8

# Tried in order; the first capture group is the address.
_ADDRESS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"EXTRACTED LOCATION:\s*(.+)", re.IGNORECASE),
    re.compile(r"ADDRESS:\s*(.+)", re.IGNORECASE),
    re.compile(r"(\d+.*?,\s*[A-Za-z\s]+,\s*[A-Z]{2})"),
)


def strip_code_fences(content: str) -> str:
    """Remove markdown ``` fences some models wrap around JSON."""
    text = content.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = [line for line in lines if not line.strip().startswith("```")]
        text = "\n".join(lines)
    return text.strip()


def parse_extraction_response(content: str | None) -> ParseOutcome:
    """Parse a raw completion into a tagged outcome.

    Returns:
        ParseOutcome with stage "json" or "pattern" on success, ok=False when
        neither the JSON body nor any address pattern could be read.
    """
    text = strip_code_fences(content or "")

    data = _load_json_object(text)
    if data is not None:
        return ParseOutcome(ok=True, value=_from_json(data), stage="json")

    for pattern in _ADDRESS_PATTERNS:
        match = pattern.search(text)
        if match:
            address = match.group(1).strip()
            logger.debug("Recovered address from free text with /%s/", pattern.pattern)
            return ParseOutcome(
                ok=True,
                value=ExtractedAddress(
                    address=_normalize_address(address),
                    location_notes="",
                    confidence=PATTERN_CONFIDENCE,
                ),
                stage="pattern",
            )

    return ParseOutcome(ok=False, error="Could not extract address from LLM response")


def _load_json_object(text: str) -> dict[str, Any] | None:
    if not text:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _from_json(data: dict[str, Any]) -> ExtractedAddress:
    address = data.get("address")
    notes = data.get("locationNotes", data.get("location_notes"))
    return ExtractedAddress(
        address=_normalize_address(address if isinstance(address, str) else ""),
        location_notes=notes.strip() if isinstance(notes, str) else "",
        confidence=_coerce_confidence(data.get("confidence")),
    )


def _normalize_address(address: str) -> str:
    address = address.strip()
    return "" if address.upper() == NO_ADDRESS else address


def _coerce_confidence(value: Any) -> float:
    """Numeric confidence clamped to [0, 1]; anything unreadable is 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return 0.0
    if confidence != confidence:  # NaN
        return 0.0
    return min(max(confidence, 0.0), 1.0)
