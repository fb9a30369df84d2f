"""RecordNormalizer: search documents -> fixed-width export rows."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from shiftsheet.core.timestamps import format_timestamp, parse_instant
from shiftsheet.core.types import JsonDict, Row
from shiftsheet.models.export import COLUMN_COUNT, Column, mark_text_columns
from shiftsheet.models.source_record import SourceRecord
from shiftsheet.shifts.classifier import DEFAULT_WINDOW, ShiftWindow, classify_or_none

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _display_timestamp(value: str | None) -> str:
    instant = parse_instant(value)
    return format_timestamp(instant) if instant else ""


class RecordNormalizer:
    """Maps SourceRecords onto the EXPORT_COLUMNS contract."""

    def __init__(self, *, window: ShiftWindow = DEFAULT_WINDOW,
                 processed_by_fallback: str = "Unknown") -> None:
        self._window = window
        self._processed_by_fallback = processed_by_fallback

    def normalize(self, record: SourceRecord) -> Row:
        row = [""] * COLUMN_COUNT
        row[Column.UPLOAD_DATE] = _display_timestamp(record.uploaded_date)
        row[Column.FILE_NAME] = _text(record.original_filename)
        row[Column.AGENT] = _text(record.agent)
        row[Column.FINAL_REVIEWER] = _text(record.final_reviewer)
        row[Column.PROCESSED_BY] = record.processed_by or self._processed_by_fallback
        row[Column.PROCESSED_ON] = _display_timestamp(record.processed_on)
        row[Column.REVIEWER_HANDLE_TIME] = _text(record.reviewer_handle_time)
        row[Column.VALIDATOR_HANDLE_TIME] = _text(record.validator_handle_time)
        row[Column.STATUS] = _text(record.status)
        row[Column.INSTITUTION] = _text(record.institution_name)
        row[Column.PAGES] = _text(record.pages)
        row[Column.CONFIDENCE] = _text(record.confidence_score)

        processed_on = parse_instant(record.processed_on)
        assignment = classify_or_none(processed_on, self._window) if processed_on is not None else None
        if assignment is not None:
            row[Column.SHIFT_DATE] = assignment.shift_date.isoformat()
            row[Column.SHIFT] = assignment.shift.value
        return mark_text_columns(row)

    def normalize_batch(self, docs: Iterable[JsonDict | SourceRecord],
                        limit: int | None = None) -> list[Row]:
        """Normalize documents newest-upload first; missing upload dates sort last.

        ``limit`` keeps only the newest N rows.
        """
        records = [d if isinstance(d, SourceRecord) else SourceRecord.from_document(d) for d in docs]
        records.sort(key=lambda r: parse_instant(r.uploaded_date) or _OLDEST, reverse=True)
        if limit is not None:
            records = records[:limit]
        return [self.normalize(r) for r in records]
