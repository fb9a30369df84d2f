"""Dominant-shift reconciliation over the full stored row set.

Every row is bucketed by (shift date, worker), where the worker is the
display value in the "Processed By" column. Each bucket's Day/Night
counts pick one dominant label (ties go to Day) and that label is
written into the Shift column of every row in the bucket. Rows whose
"Processed On" cell does not parse are never touched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from shiftsheet.core.timestamps import parse_display_timestamp
from shiftsheet.core.types import Row, WorkerName
from shiftsheet.models.export import Column
from shiftsheet.shifts.classifier import DEFAULT_WINDOW, Shift, ShiftAssignment, ShiftWindow, classify_or_none

logger = logging.getLogger(__name__)

UNKNOWN_WORKER: WorkerName = "Unknown"


@dataclass(frozen=True, order=True)
class ShiftKey:
    shift_date: date
    worker: WorkerName


@dataclass
class ShiftCounts:
    day: int = 0
    night: int = 0

    def add(self, shift: Shift) -> None:
        if shift is Shift.DAY:
            self.day += 1
        else:
            self.night += 1

    @property
    def dominant(self) -> Shift:
        return Shift.DAY if self.day >= self.night else Shift.NIGHT


def _cell(row: Sequence[str], col: Column) -> str:
    return row[col] if len(row) > col else ""


def row_worker(row: Sequence[str]) -> WorkerName:
    return _cell(row, Column.PROCESSED_BY).strip() or UNKNOWN_WORKER


def classify_row(row: Sequence[str], window: ShiftWindow = DEFAULT_WINDOW) -> ShiftAssignment | None:
    """Classify a stored row by its Processed On cell; None when unparseable or out of range."""
    processed_on = parse_display_timestamp(_cell(row, Column.PROCESSED_ON))
    if processed_on is None:
        return None
    return classify_or_none(processed_on, window)


def tally_shifts(
    rows: Iterable[Sequence[str]], window: ShiftWindow = DEFAULT_WINDOW
) -> dict[ShiftKey, ShiftCounts]:
    """Count Day/Night rows per (shift date, worker), keys in sorted order."""
    tally: dict[ShiftKey, ShiftCounts] = {}
    for row in rows:
        assignment = classify_row(row, window)
        if assignment is None:
            continue
        key = ShiftKey(assignment.shift_date, row_worker(row))
        tally.setdefault(key, ShiftCounts()).add(assignment.shift)
    return {key: tally[key] for key in sorted(tally)}


def dominant_shifts(tally: dict[ShiftKey, ShiftCounts]) -> dict[ShiftKey, Shift]:
    return {key: counts.dominant for key, counts in tally.items()}


def reconcile(rows: Sequence[Sequence[str]], window: ShiftWindow = DEFAULT_WINDOW) -> list[Row]:
    """Return a copy of ``rows`` with each Shift cell set to its bucket's dominant label.

    Pure: the input rows are not mutated. Idempotent for a fixed row set,
    since relabelling the Shift column never changes the tally.
    """
    tally = tally_shifts(rows, window)
    table = dominant_shifts(tally)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Shift tally: %s", {f"{k.shift_date}/{k.worker}": (c.day, c.night) for k, c in tally.items()})
        logger.debug("Dominant shifts: %s", {f"{k.shift_date}/{k.worker}": v.value for k, v in table.items()})

    out: list[Row] = []
    for row in rows:
        new_row = list(row)
        assignment = classify_row(row, window)
        if assignment is not None:
            label = table.get(ShiftKey(assignment.shift_date, row_worker(row)))
            if label is not None:
                if len(new_row) <= Column.SHIFT:
                    new_row.extend([""] * (Column.SHIFT + 1 - len(new_row)))
                new_row[Column.SHIFT] = label.value
        out.append(new_row)
    return out


def relabelled_count(before: Sequence[Sequence[str]], after: Sequence[Sequence[str]]) -> int:
    """Number of rows whose Shift cell differs between two aligned row sets."""
    return sum(1 for old, new in zip(before, after) if _cell(old, Column.SHIFT) != _cell(new, Column.SHIFT))
