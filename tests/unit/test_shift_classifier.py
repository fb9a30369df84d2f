"""Tests for shift classification at the IST window boundaries."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from shiftsheet.core.config import ShiftConfig
from shiftsheet.shifts.classifier import Shift, ShiftWindow, classify, classify_or_none

IST = timezone(timedelta(hours=5, minutes=30))


def _local(hour: int, minute: int = 0, day: int = 5) -> datetime:
    """An IST wall-clock time on January ``day``, returned as a UTC instant."""
    return datetime(2025, 1, day, hour, minute, tzinfo=IST).astimezone(timezone.utc)


class TestBoundaries:
    def test_nine_am_local_starts_day_shift(self):
        assert classify(_local(9, 0)) == (Shift.DAY, date(2025, 1, 5))

    def test_eight_fifty_nine_local_is_previous_days_night(self):
        assert classify(_local(8, 59)) == (Shift.NIGHT, date(2025, 1, 4))

    def test_twenty_fifty_nine_local_is_still_day(self):
        assert classify(_local(20, 59)) == (Shift.DAY, date(2025, 1, 5))

    def test_nine_pm_local_is_same_days_night(self):
        assert classify(_local(21, 0)) == (Shift.NIGHT, date(2025, 1, 5))


class TestShiftDateAnchoring:
    def test_after_local_midnight_uses_utc_date_minus_one(self):
        # 20:00 UTC on Jan 5 is 01:30 IST on Jan 6; the shift date comes from the UTC date.
        instant = datetime(2025, 1, 5, 20, 0, tzinfo=timezone.utc)
        assert classify(instant) == (Shift.NIGHT, date(2025, 1, 4))

    def test_late_evening_local_keeps_utc_date(self):
        instant = datetime(2025, 1, 5, 18, 0, tzinfo=timezone.utc)  # 23:30 IST
        assert classify(instant) == (Shift.NIGHT, date(2025, 1, 5))

    def test_naive_instant_is_treated_as_utc(self):
        assert classify(datetime(2025, 1, 5, 3, 30)) == (Shift.DAY, date(2025, 1, 5))

    def test_aware_non_utc_instant_is_converted(self):
        instant = datetime(2025, 1, 5, 9, 0, tzinfo=IST)
        assert classify(instant) == (Shift.DAY, date(2025, 1, 5))


@pytest.mark.parametrize("hour", range(24))
def test_every_local_hour_follows_window(hour):
    instant = _local(hour, 15, day=10)
    shift, shift_date = classify(instant)

    assert shift is (Shift.DAY if 9 <= hour < 21 else Shift.NIGHT)
    expected_date = instant.date() - timedelta(days=1) if hour < 9 else instant.date()
    assert shift_date == expected_date


class TestCustomWindow:
    def test_window_from_config(self):
        window = ShiftWindow.from_config(ShiftConfig(utc_offset_minutes=0, day_start_hour=8, day_end_hour=20))
        assert window == ShiftWindow(utc_offset=timedelta(0), day_start=8, day_end=20)

    def test_utc_window_boundaries(self):
        window = ShiftWindow(utc_offset=timedelta(0), day_start=8, day_end=20)
        assert classify(datetime(2025, 1, 5, 7, 59, tzinfo=timezone.utc), window) == (
            Shift.NIGHT, date(2025, 1, 4),
        )
        assert classify(datetime(2025, 1, 5, 8, 0, tzinfo=timezone.utc), window) == (
            Shift.DAY, date(2025, 1, 5),
        )
        assert classify(datetime(2025, 1, 5, 20, 0, tzinfo=timezone.utc), window).shift is Shift.NIGHT


# ---------- ends of the datetime range ----------

class TestRangeEnds:
    def test_latest_instant_does_not_overflow_local_hour(self):
        # 23:00 UTC is 04:30 IST on a date past datetime.max
        assert classify(datetime(9999, 12, 31, 23, 0, tzinfo=timezone.utc)) == (
            Shift.NIGHT, date(9999, 12, 30),
        )

    def test_earliest_day_shift(self):
        assert classify(datetime(1, 1, 1, 10, 0, tzinfo=timezone.utc)) == (Shift.DAY, date(1, 1, 1))

    def test_night_before_first_date_overflows(self):
        with pytest.raises(OverflowError):
            classify(datetime(1, 1, 1, 2, 0, tzinfo=timezone.utc))

    def test_classify_or_none(self):
        assert classify_or_none(datetime(1, 1, 1, 2, 0, tzinfo=timezone.utc)) is None
        assert classify_or_none(_local(10)) == (Shift.DAY, date(2025, 1, 5))
