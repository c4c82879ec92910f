# tests/unit/extraction/test_unit_area_codes.py - v1
"""Tests for extraction/area_codes.py - area code hints."""

from __future__ import annotations

import pytest

from eventlocator.extraction.area_codes import AreaCodeDirectory


class TestAreaCodeDirectory:
    def test_default_has_utah(self):
        hint = AreaCodeDirectory().lookup("435")
        assert hint is not None
        assert "Utah" in hint.region

    def test_unknown_code(self):
        assert AreaCodeDirectory().lookup("999") is None

    def test_custom_entries(self):
        d = AreaCodeDirectory({"555": "Testville"})
        assert len(d) == 1
        assert "555" in d

    def test_register(self):
        d = AreaCodeDirectory({})
        d.register("417", "Springfield, Missouri")
        assert d.lookup("417").region == "Springfield, Missouri"

    def test_register_rejects_bad_code(self):
        with pytest.raises(ValueError, match="three digits"):
            AreaCodeDirectory().register("43", "x")

    @pytest.mark.parametrize(
        "text",
        [
            "Call (435) 555-0100 for tickets",
            "Info: 435-555-0100",
            "tel 435.555.0100",
            "+1 435 555 0100",
            "1-435-555-0100",
        ],
    )
    def test_find_in_text_formats(self, text):
        hints = AreaCodeDirectory().find_in_text(text)
        assert [h.code for h in hints] == ["435"]

    def test_find_in_text_dedupes_and_skips_unknown(self):
        text = "(217) 555-1111 or (217) 555-2222, fax (999) 555-3333, (417) 555-4444"
        assert [h.code for h in AreaCodeDirectory().find_in_text(text)] == ["217", "417"]

    def test_no_phone_numbers(self):
        assert AreaCodeDirectory().find_in_text("Springfield fair, May 4 2026") == []

    def test_render_reference(self):
        rendered = AreaCodeDirectory({"801": "Salt Lake City area, Utah", "202": "Washington, DC"}).render_reference()
        assert rendered.splitlines() == [
            "   - 202: Washington, DC",
            "   - 801: Salt Lake City area, Utah",
        ]
