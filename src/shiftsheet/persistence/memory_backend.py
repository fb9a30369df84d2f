"""In-memory backends for unit tests and local runs: dict-backed fakes."""

from __future__ import annotations

import copy
from collections.abc import Sequence
from datetime import datetime

from shiftsheet.core.timestamps import parse_instant, strip_text_marker
from shiftsheet.core.types import JsonDict, Row
from shiftsheet.persistence.ranges import SheetRange


class MemoryQueryClient:
    """List-backed IQueryClient; filters on processed_on and request.agent."""

    def __init__(self, documents: dict[str, list[JsonDict]] | None = None) -> None:
        self._documents: dict[str, list[JsonDict]] = documents or {}
        self.calls: list[tuple[str, datetime, datetime, tuple[str, ...] | None]] = []

    def add(self, namespace: str, *docs: JsonDict) -> None:
        self._documents.setdefault(namespace, []).extend(docs)

    def search(
        self,
        namespace: str,
        from_instant: datetime,
        to_instant: datetime,
        allow_list: Sequence[str] | None = None,
    ) -> list[JsonDict]:
        self.calls.append((namespace, from_instant, to_instant, tuple(allow_list) if allow_list else None))
        results: list[JsonDict] = []
        for doc in self._documents.get(namespace, []):
            processed_on = parse_instant(doc.get("processed_on"))
            if processed_on is None or not from_instant <= processed_on <= to_instant:
                continue
            if allow_list and (doc.get("request") or {}).get("agent") not in allow_list:
                continue
            results.append(copy.deepcopy(doc))
        return results


class MemorySheetStore:
    """Grid-backed ISheetStore mimicking the Sheets values API.

    Writes are user-entered: a leading text marker is consumed, not stored.
    Reads drop trailing empty cells and trailing empty rows.
    """

    def __init__(self) -> None:
        self._sheets: dict[str, list[Row]] = {}

    def grid(self, sheet: str) -> list[Row]:
        """Snapshot of a sheet's stored cells, trimmed like a read."""
        return _trim(copy.deepcopy(self._sheets.get(sheet, [])))

    def _grid(self, sheet: str) -> list[Row]:
        return self._sheets.setdefault(sheet, [])

    def read_range(self, range_spec: str) -> list[Row]:
        rng = SheetRange.parse(range_spec)
        grid = self._grid(rng.sheet)
        start = (rng.start_row or 1) - 1
        stop = rng.end_row if rng.end_row is not None else len(grid)
        first = rng.first_col or 0
        last = rng.last_col + 1 if rng.last_col is not None else None
        return _trim([list(row[first:last]) for row in grid[start:stop]])

    def append_rows(self, range_spec: str, rows: Sequence[Row]) -> None:
        rng = SheetRange.parse(range_spec)
        grid = self._grid(rng.sheet)
        next_row = len(_trim(grid))
        for offset, row in enumerate(rows):
            self._write_row(grid, next_row + offset, rng.first_col or 0, row)

    def clear_range(self, range_spec: str) -> None:
        rng = SheetRange.parse(range_spec)
        grid = self._grid(rng.sheet)
        start = (rng.start_row or 1) - 1
        stop = rng.end_row if rng.end_row is not None else len(grid)
        for row in grid[start:stop]:
            last = rng.last_col + 1 if rng.last_col is not None else len(row)
            for col in range(rng.first_col or 0, min(last, len(row))):
                row[col] = ""

    def overwrite_range(self, range_spec: str, rows: Sequence[Row]) -> None:
        rng = SheetRange.parse(range_spec)
        grid = self._grid(rng.sheet)
        for offset, row in enumerate(rows):
            self._write_row(grid, (rng.start_row or 1) - 1 + offset, rng.first_col or 0, row)

    @staticmethod
    def _write_row(grid: list[Row], row_index: int, first_col: int, values: Row) -> None:
        while len(grid) <= row_index:
            grid.append([])
        target = grid[row_index]
        while len(target) < first_col + len(values):
            target.append("")
        for i, value in enumerate(values):
            target[first_col + i] = strip_text_marker(str(value))


def _trim(rows: list[Row]) -> list[Row]:
    trimmed = []
    for row in rows:
        end = len(row)
        while end and row[end - 1] == "":
            end -= 1
        trimmed.append(row[:end])
    while trimmed and not trimmed[-1]:
        trimmed.pop()
    return trimmed
