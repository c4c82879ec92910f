# src/extraction/area_codes.py - v1
"""Phone area code hints for disambiguating city names.

A phone number on a flyer is often the only clue separating Springfield, IL
from Springfield, MO. The directory is rendered into the extraction prompt
and also scanned against the clues so detected codes can be called out.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Matches (435) 555-1234, 435-555-1234, 435.555.1234, +1 435 555 1234.
_PHONE_RE = re.compile(
    r"(?<!\d)(?:\+?1[\s.-]?)?\(?([2-9]\d{2})\)?[\s.-]?\d{3}[\s.-]?\d{4}(?!\d)"
)


@dataclass(frozen=True)
class AreaCodeHint:
    """Region served by one North American area code."""

    code: str
    region: str


_DEFAULT_AREA_CODES: dict[str, str] = {
    "202": "Washington, DC",
    "206": "Seattle, Washington",
    "207": "Maine",
    "212": "New York City (Manhattan), NY",
    "213": "Los Angeles, CA",
    "214": "Dallas, TX",
    "215": "Philadelphia, PA",
    "217": "Springfield, Illinois (central Illinois)",
    "240": "Maryland (western and suburban DC)",
    "253": "Tacoma, Washington",
    "267": "Philadelphia, PA",
    "281": "Houston, TX",
    "301": "Maryland (western and suburban DC)",
    "303": "Denver, CO",
    "305": "Miami, FL",
    "310": "Los Angeles (West side), CA",
    "312": "Chicago, IL",
    "323": "Los Angeles, CA",
    "332": "New York City (Manhattan), NY",
    "347": "New York City (outer boroughs), NY",
    "360": "Western Washington (outside Seattle)",
    "380": "Columbus, Ohio",
    "385": "Salt Lake City area, Utah",
    "404": "Atlanta, GA",
    "413": "Springfield, Massachusetts (western Massachusetts)",
    "415": "San Francisco, CA",
    "417": "Springfield, Missouri (southwest Missouri)",
    "425": "Bellevue / Everett, Washington",
    "435": "Utah (outside Salt Lake area)",
    "469": "Dallas, TX",
    "470": "Atlanta, GA",
    "503": "Portland, Oregon",
    "509": "Eastern Washington (Spokane)",
    "512": "Austin, TX",
    "571": "Northern Virginia",
    "602": "Phoenix, AZ",
    "614": "Columbus, Ohio",
    "615": "Nashville, TN",
    "617": "Boston, MA",
    "628": "San Francisco, CA",
    "629": "Nashville, TN",
    "646": "New York City (Manhattan), NY",
    "678": "Atlanta, GA",
    "702": "Las Vegas, NV",
    "703": "Northern Virginia",
    "706": "Columbus, Georgia",
    "713": "Houston, TX",
    "718": "New York City (outer boroughs), NY",
    "720": "Denver, CO",
    "725": "Las Vegas, NV",
    "737": "Austin, TX",
    "762": "Columbus, Georgia",
    "770": "Atlanta suburbs, GA",
    "786": "Miami, FL",
    "801": "Salt Lake City area, Utah",
    "808": "Hawaii",
    "832": "Houston, TX",
    "857": "Boston, MA",
    "872": "Chicago, IL",
    "907": "Alaska",
    "917": "New York City, NY",
    "929": "New York City (outer boroughs), NY",
    "937": "Dayton / Springfield, Ohio",
    "971": "Portland, Oregon",
    "972": "Dallas, TX",
}


class AreaCodeDirectory:
    """Lookup table of area code -> region, extensible at runtime."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(
            _DEFAULT_AREA_CODES if entries is None else entries
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def register(self, code: str, region: str) -> None:
        """Add or replace the region for a three-digit area code."""
        if not re.fullmatch(r"\d{3}", code):
            raise ValueError(f"Area code must be three digits, got {code!r}")
        self._entries[code] = region

    def lookup(self, code: str) -> AreaCodeHint | None:
        region = self._entries.get(code)
        return AreaCodeHint(code=code, region=region) if region else None

    def find_in_text(self, text: str) -> list[AreaCodeHint]:
        """Known area codes of every phone number in text, first occurrence order."""
        hints: list[AreaCodeHint] = []
        seen: set[str] = set()
        for match in _PHONE_RE.finditer(text):
            code = match.group(1)
            if code in seen:
                continue
            seen.add(code)
            hint = self.lookup(code)
            if hint is not None:
                hints.append(hint)
        return hints

    def render_reference(self) -> str:
        """Prompt-ready list, one '- CODE: Region' line per entry."""
        return "\n".join(
            f"   - {code}: {region}" for code, region in sorted(self._entries.items())
        )
