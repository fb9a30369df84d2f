"""Tests for instant parsing and the sheet display timestamp codec."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from shiftsheet.core.timestamps import (
    format_timestamp,
    parse_display_timestamp,
    parse_instant,
    strip_text_marker,
    text_mark,
)

UTC = timezone.utc


class TestParseInstant:
    @pytest.mark.parametrize("value", [
        "2025-01-05T10:00:00Z",
        "2025-01-05T10:00:00.000Z",
        "2025-01-05T15:30:00+05:30",
        "2025-01-05T10:00:00",
    ])
    def test_iso_variants_normalize_to_utc(self, value):
        assert parse_instant(value) == datetime(2025, 1, 5, 10, 0, tzinfo=UTC)

    def test_date_only(self):
        assert parse_instant("2025-01-05") == datetime(2025, 1, 5, tzinfo=UTC)

    def test_accepts_datetime_and_date_objects(self):
        assert parse_instant(datetime(2025, 1, 5, 10)) == datetime(2025, 1, 5, 10, tzinfo=UTC)
        assert parse_instant(date(2025, 1, 5)) == datetime(2025, 1, 5, tzinfo=UTC)

    @pytest.mark.parametrize("value", [None, "", "   ", "yesterday", "2025-13-45T00:00:00Z"])
    def test_unparseable_returns_none(self, value):
        assert parse_instant(value) is None

    @pytest.mark.parametrize("value", ["0001-01-01T00:00:00+05:30", "9999-12-31T23:00:00-05:00"])
    def test_instant_outside_utc_range_returns_none(self, value):
        assert parse_instant(value) is None

    def test_earliest_utc_instant_is_kept(self):
        assert parse_instant("0001-01-01T02:00:00Z") == datetime(1, 1, 1, 2, tzinfo=UTC)


class TestDisplayFormat:
    def test_afternoon(self):
        assert format_timestamp(datetime(2025, 1, 5, 15, 4, tzinfo=UTC)) == "Jan 5, 2025, 3:04 PM"

    def test_midnight_and_noon_use_twelve(self):
        assert format_timestamp(datetime(2025, 1, 5, 0, 7, tzinfo=UTC)) == "Jan 5, 2025, 12:07 AM"
        assert format_timestamp(datetime(2025, 12, 25, 12, 0, tzinfo=UTC)) == "Dec 25, 2025, 12:00 PM"

    def test_renders_in_utc(self):
        ist = datetime.fromisoformat("2025-01-05T09:00:00+05:30")
        assert format_timestamp(ist) == "Jan 5, 2025, 3:30 AM"

    def test_year_is_four_digits(self):
        assert format_timestamp(datetime(1, 1, 1, 2, 0, tzinfo=UTC)) == "Jan 1, 0001, 2:00 AM"


class TestParseDisplay:
    def test_marked_value(self):
        assert parse_display_timestamp("'Jan 5, 2025, 3:04 PM") == datetime(2025, 1, 5, 15, 4, tzinfo=UTC)

    def test_unmarked_value(self):
        assert parse_display_timestamp("Jan 15, 2025, 11:59 AM") == datetime(2025, 1, 15, 11, 59, tzinfo=UTC)

    def test_narrow_no_break_space_before_meridiem(self):
        assert parse_display_timestamp("Jan 5, 2025, 3:04\u202fPM") == datetime(2025, 1, 5, 15, 4, tzinfo=UTC)

    def test_round_trip_through_format(self):
        instant = datetime(2025, 7, 1, 23, 45, tzinfo=UTC)
        assert parse_display_timestamp(text_mark(format_timestamp(instant))) == instant

    def test_round_trip_at_start_of_range(self):
        instant = datetime(1, 1, 1, 2, 0, tzinfo=UTC)
        assert parse_display_timestamp(format_timestamp(instant)) == instant

    @pytest.mark.parametrize("value", [None, "", "'", "Processed On", "2025-01-05T10:00:00Z"])
    def test_unparseable_returns_none(self, value):
        assert parse_display_timestamp(value) is None


class TestTextMarker:
    def test_marks_once(self):
        assert text_mark("Jan 5") == "'Jan 5"
        assert text_mark("'Jan 5") == "'Jan 5"

    def test_empty_stays_empty(self):
        assert text_mark("") == ""

    def test_strip(self):
        assert strip_text_marker("'2025-01-05") == "2025-01-05"
        assert strip_text_marker("2025-01-05") == "2025-01-05"
