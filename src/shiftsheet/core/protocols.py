"""Protocol interfaces for the export's external collaborators.

Structural typing, no inheritance required: production adapters and the
in-memory fakes both satisfy these and are checked with isinstance().
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable

from shiftsheet.core.types import JsonDict, Row


# ---------------------------------------------------------------------------
# Query: transcript search index
# ---------------------------------------------------------------------------

@runtime_checkable
class IQueryClient(Protocol):
    """Date-range lookup over transcript documents.

    Bounds are inclusive. Result order is unspecified and the result size
    is capped by the implementation.
    """

    def search(
        self,
        namespace: str,
        from_instant: datetime,
        to_instant: datetime,
        allow_list: Sequence[str] | None = None,
    ) -> list[JsonDict]: ...


# ---------------------------------------------------------------------------
# Storage: range-addressed spreadsheet
# ---------------------------------------------------------------------------

@runtime_checkable
class ISheetStore(Protocol):
    """Tabular store addressed by A1 ranges; every cell is a string."""

    def read_range(self, range_spec: str) -> list[Row]: ...

    def append_rows(self, range_spec: str, rows: Sequence[Row]) -> None: ...

    def clear_range(self, range_spec: str) -> None: ...

    def overwrite_range(self, range_spec: str, rows: Sequence[Row]) -> None: ...
