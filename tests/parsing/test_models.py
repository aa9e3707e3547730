"""Tests for parsing data models."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from easydate.parsing.models import ConversionMode, ParsedMoment


class TestParsedMoment:
    """Tests for ParsedMoment."""

    def test_from_naive_datetime(self):
        parsed = ParsedMoment.from_datetime(datetime(2007, 1, 1, 23, 22, 1, 500), strategy="test")
        assert parsed.civil_fields() == {
            "year": 2007,
            "month": 1,
            "day": 1,
            "hour": 23,
            "minute": 22,
            "second": 1,
            "nanosecond": 500000,
        }
        assert parsed.timezone is None
        assert parsed.strategy == "test"

    def test_from_aware_datetime(self):
        moment = datetime(2007, 7, 1, 22, 32, 10, tzinfo=ZoneInfo("US/Eastern"))
        assert ParsedMoment.from_datetime(moment).timezone == "America/New_York"

    def test_from_date(self):
        parsed = ParsedMoment.from_datetime(date(2007, 5, 3))
        assert (parsed.year, parsed.month, parsed.day, parsed.hour) == (2007, 5, 3, 0)
        assert parsed.timezone is None

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            ParsedMoment.from_datetime("2007-01-01")

    def test_to_dict(self):
        data = ParsedMoment(2007, timezone="UTC", strategy="ical").to_dict()
        assert data["year"] == 2007
        assert data["timezone"] == "UTC"
        assert data["strategy"] == "ical"


def test_conversion_mode_values():
    assert [mode.value for mode in ConversionMode] == ["none", "wall_clock", "instant"]
