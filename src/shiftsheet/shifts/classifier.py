"""Work shift classification.

The local hour (UTC instant + fixed offset) decides the label. The
shift date is the *UTC* calendar date of the instant, moved back one day
when the local hour falls before the day shift starts, so an overnight
shift is attributed to the day it began.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import StrEnum
from typing import NamedTuple

from shiftsheet.core.config import ShiftConfig


class Shift(StrEnum):
    DAY = "Day"
    NIGHT = "Night"


class ShiftAssignment(NamedTuple):
    shift: Shift
    shift_date: date


@dataclass(frozen=True)
class ShiftWindow:
    """Day shift is local hours [day_start, day_end); everything else is Night."""

    utc_offset: timedelta = timedelta(hours=5, minutes=30)
    day_start: int = 9
    day_end: int = 21

    @classmethod
    def from_config(cls, config: ShiftConfig) -> ShiftWindow:
        return cls(
            utc_offset=timedelta(minutes=config.utc_offset_minutes),
            day_start=config.day_start_hour,
            day_end=config.day_end_hour,
        )


DEFAULT_WINDOW = ShiftWindow()


def classify(instant: datetime, window: ShiftWindow = DEFAULT_WINDOW) -> ShiftAssignment:
    """Classify an instant into (shift, shift_date). Naive instants are UTC.

    Raises OverflowError when the instant, or its shift date, falls outside
    the datetime range (e.g. a Night shift starting before 0001-01-01).
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    utc = instant.astimezone(timezone.utc)
    # Wall-clock arithmetic, so instants at either end of the range never overflow.
    offset_minutes = window.utc_offset // timedelta(minutes=1)
    local_hour = (utc.hour * 60 + utc.minute + offset_minutes) % (24 * 60) // 60
    utc_date = utc.date()

    if window.day_start <= local_hour < window.day_end:
        return ShiftAssignment(Shift.DAY, utc_date)
    if local_hour < window.day_start:
        return ShiftAssignment(Shift.NIGHT, utc_date - timedelta(days=1))
    return ShiftAssignment(Shift.NIGHT, utc_date)


def classify_or_none(instant: datetime, window: ShiftWindow = DEFAULT_WINDOW) -> ShiftAssignment | None:
    """classify(), or None when the shift date is not representable."""
    try:
        return classify(instant, window)
    except OverflowError:
        return None
