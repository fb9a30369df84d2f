"""Export sheet column contract, date range, and run result models."""

from __future__ import annotations

from datetime import datetime, time, timezone
from enum import IntEnum, StrEnum

from pydantic import BaseModel

from shiftsheet.core.exceptions import InvalidDateRangeError
from shiftsheet.core.timestamps import TEXT_MARKER, parse_instant, text_mark
from shiftsheet.core.types import Row

EXPORT_COLUMNS: tuple[str, ...] = (
    "Upload Date",
    "File Name",
    "Client/Agent tag",
    "Final Reviewer",
    "Processed By",
    "Processed On",
    "Reviewer Handle Time",
    "Validator Handle Time",
    "Latest Status",
    "Shift Date",
    "Shift",
    "Institution Name",
    "Pages",
    "Confidence Score",
)


class Column(IntEnum):
    """Zero-based position of each column in EXPORT_COLUMNS."""

    UPLOAD_DATE = 0
    FILE_NAME = 1
    AGENT = 2
    FINAL_REVIEWER = 3
    PROCESSED_BY = 4
    PROCESSED_ON = 5
    REVIEWER_HANDLE_TIME = 6
    VALIDATOR_HANDLE_TIME = 7
    STATUS = 8
    SHIFT_DATE = 9
    SHIFT = 10
    INSTITUTION = 11
    PAGES = 12
    CONFIDENCE = 13


COLUMN_COUNT = len(EXPORT_COLUMNS)

# Cells the sheet would otherwise coerce into serial dates.
TEXT_COLUMNS: tuple[Column, ...] = (Column.UPLOAD_DATE, Column.PROCESSED_ON, Column.SHIFT_DATE)

# Free text the sheet would otherwise run as a formula or turn into a number or date.
FREE_TEXT_COLUMNS: tuple[Column, ...] = (
    Column.FILE_NAME,
    Column.AGENT,
    Column.FINAL_REVIEWER,
    Column.PROCESSED_BY,
    Column.STATUS,
    Column.INSTITUTION,
)

_COERCED_PREFIXES = ("=", "+", "-", "@", TEXT_MARKER)


def pad_row(row: Row) -> Row:
    """Right-pad (or truncate) a stored row to the header width.

    Sheet reads drop trailing empty cells, so rows come back ragged.
    """
    cells = [str(c) for c in row[:COLUMN_COUNT]]
    return cells + [""] * (COLUMN_COUNT - len(cells))


def protect_text(value: str) -> str:
    """Text-mark a free-text value the sheet would not store verbatim.

    Unlike text_mark, a value that already starts with the marker gets a
    second one, so the stored cell keeps its own leading apostrophe.
    """
    if value and (value.startswith(_COERCED_PREFIXES) or value[0].isdigit()):
        return TEXT_MARKER + value
    return value


def mark_text_columns(row: Row) -> Row:
    """Return a copy ready for a user-entered write.

    Date/time columns are always text-marked; free-text columns only when
    the sheet would otherwise reinterpret them.
    """
    out = list(row)
    for col in TEXT_COLUMNS:
        if col < len(out):
            out[col] = text_mark(out[col])
    for col in FREE_TEXT_COLUMNS:
        if col < len(out):
            out[col] = protect_text(out[col])
    return out


class ExportStatus(StrEnum):
    EXPORTED = "exported"
    NO_RECORDS = "no_records"  # search returned nothing
    NO_ROWS = "no_rows"  # nothing left to write after normalization


class ExportResult(BaseModel):
    """Summary of one export run."""

    status: ExportStatus
    message: str
    added_count: int = 0
    fetched_count: int = 0
    stored_count: int = 0
    relabelled_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.status is ExportStatus.EXPORTED


class DateRange(BaseModel):
    """Inclusive instant bounds for a search or export run."""

    start: datetime
    end: datetime

    @classmethod
    def parse(cls, from_text: str | None, to_text: str | None) -> DateRange:
        """Validate raw request bounds.

        A date-only ``to`` bound covers that whole day.
        """
        if not from_text or not to_text:
            raise InvalidDateRangeError("fromDate and toDate are required")
        start = parse_instant(from_text)
        end = parse_instant(to_text)
        if start is None or end is None:
            raise InvalidDateRangeError(
                f"fromDate and toDate must be ISO-8601 instants, got {from_text!r} and {to_text!r}"
            )
        if _is_date_only(to_text):
            end = datetime.combine(end.date(), time.max, tzinfo=timezone.utc)
        if start > end:
            raise InvalidDateRangeError(f"fromDate {from_text!r} is after toDate {to_text!r}")
        return cls(start=start, end=end)


def _is_date_only(text: str) -> bool:
    return "T" not in text.strip().upper() and " " not in text.strip()
