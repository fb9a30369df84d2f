"""Instant parsing and the spreadsheet display timestamp codec.

Display values look like ``Jan 5, 2025, 3:04 PM`` (UTC) and are stored
with a leading apostrophe so the sheet keeps them as text instead of
coercing them to a serial date number.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

TEXT_MARKER = "'"
DISPLAY_FORMAT = "%b %d, %Y, %I:%M %p"

# Some spreadsheet/ICU renderings put a narrow or regular no-break space before AM/PM.
_SPACE_VARIANTS = ("\u202f", "\u00a0")


def parse_instant(value: object) -> datetime | None:
    """Parse an ISO-8601 instant into an aware UTC datetime.

    Naive values are taken as UTC. Returns None for anything unparseable,
    including instants whose UTC form falls outside the datetime range.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def format_timestamp(instant: datetime) -> str:
    """Render an instant as ``Mon d, yyyy, h:mm AM`` in UTC, without the text marker."""
    utc = instant.astimezone(timezone.utc) if instant.tzinfo else instant
    hour = utc.hour % 12 or 12
    return f"{utc:%b} {utc.day}, {utc.year:04d}, {hour}:{utc:%M} {utc:%p}"


def parse_display_timestamp(text: str | None) -> datetime | None:
    """Inverse of format_timestamp; accepts marked or unmarked values."""
    if not text:
        return None
    cleaned = strip_text_marker(text).strip()
    for variant in _SPACE_VARIANTS:
        cleaned = cleaned.replace(variant, " ")
    try:
        parsed = datetime.strptime(cleaned, DISPLAY_FORMAT)
    except (ValueError, OverflowError):
        return None
    return parsed.replace(tzinfo=timezone.utc)


def text_mark(value: str) -> str:
    """Prefix a non-empty value with the text marker, once."""
    if not value or value.startswith(TEXT_MARKER):
        return value
    return TEXT_MARKER + value


def strip_text_marker(value: str) -> str:
    return value[len(TEXT_MARKER):] if value.startswith(TEXT_MARKER) else value
