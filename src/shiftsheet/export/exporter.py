"""ShiftExporter runs one synchronous export: fetch, normalize, merge, then reconcile.

Stages run strictly in order and nothing is retried. A collaborator
failure aborts the run; the sheet keeps whatever the last completed
write left in it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import StrEnum
from typing import Literal

from shiftsheet.core.config import AppSettings
from shiftsheet.core.exceptions import CollaboratorError
from shiftsheet.core.protocols import IQueryClient, ISheetStore
from shiftsheet.core.types import Row
from shiftsheet.export.normalizer import RecordNormalizer
from shiftsheet.models.export import (
    COLUMN_COUNT,
    EXPORT_COLUMNS,
    DateRange,
    ExportResult,
    ExportStatus,
    mark_text_columns,
    pad_row,
)
from shiftsheet.persistence.ranges import SheetRange
from shiftsheet.shifts.classifier import ShiftWindow
from shiftsheet.shifts.reconciler import reconcile, relabelled_count

logger = logging.getLogger(__name__)

MergeMode = Literal["append", "refresh"]


class ExportStage(StrEnum):
    FETCH = "fetch"
    NORMALIZE = "normalize"
    MERGE = "merge"
    RECONCILE = "reconcile"


class ShiftExporter:
    """Coordinates one export run against injected query and sheet collaborators."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        query_client: IQueryClient,
        sheet_store: ISheetStore,
        normalizer: RecordNormalizer | None = None,
    ) -> None:
        self._settings = settings
        self._query = query_client
        self._store = sheet_store
        self._window = ShiftWindow.from_config(settings.shift)
        self._normalizer = normalizer or RecordNormalizer(
            window=self._window,
            processed_by_fallback=settings.export.processed_by_fallback,
        )
        sheet = settings.sheets.sheet_name
        last_col = COLUMN_COUNT - 1
        self._header_range = SheetRange(sheet, start_row=1, end_row=1)
        self._anchor_range = SheetRange(sheet, start_row=1, first_col=0)
        self._table_range = SheetRange(sheet, first_col=0, last_col=last_col)
        self._data_range = SheetRange(sheet, start_row=2, first_col=0, last_col=last_col)

    def run(
        self,
        date_range: DateRange,
        namespace: str | None = None,
        allow_list: Sequence[str] | None = None,
        merge_mode: MergeMode | None = None,
    ) -> ExportResult:
        namespace = namespace or self._settings.default_namespace
        if allow_list is None:
            allow_list = self._settings.export.agent_allow_list
        mode = merge_mode or self._settings.sheets.merge_mode

        stage = ExportStage.FETCH
        try:
            logger.info("Export %s: fetching records from %s to %s",
                        namespace, date_range.start.isoformat(), date_range.end.isoformat())
            docs = self._query.search(namespace, date_range.start, date_range.end, allow_list)
            if not docs:
                logger.info("Export %s: no matching records", namespace)
                return ExportResult(
                    status=ExportStatus.NO_RECORDS,
                    message="No results found to add to Google Sheets",
                )

            stage = ExportStage.NORMALIZE
            rows = self._normalizer.normalize_batch(docs, limit=self._settings.export.row_limit)
            if not rows:
                return ExportResult(
                    status=ExportStatus.NO_ROWS,
                    message="No rows to add to Google Sheets",
                    fetched_count=len(docs),
                )

            stage = ExportStage.MERGE
            if mode == "refresh":
                self._refresh(rows)
            else:
                self._append(rows)
            stored = [pad_row(r) for r in self._store.read_range(self._data_range.a1())]

            stage = ExportStage.RECONCILE
            reconciled = self._reconcile(stored)
        except CollaboratorError:
            logger.exception("Export %s aborted during %s stage", namespace, stage)
            raise

        return ExportResult(
            status=ExportStatus.EXPORTED,
            message=f"{len(rows)} recent rows added to Google Sheet",
            added_count=len(rows),
            fetched_count=len(docs),
            stored_count=len(stored),
            relabelled_count=reconciled,
        )

    def _append(self, rows: list[Row]) -> None:
        """Append rows, writing the header first only if row 1 doesn't already hold it."""
        existing = self._store.read_range(self._header_range.a1())
        header_exists = bool(existing) and existing[0] == list(EXPORT_COLUMNS)
        if existing and existing[0] and not header_exists:
            logger.warning("Row 1 of %r does not match the export header; writing a new header",
                           self._settings.sheets.sheet_name)
        values = rows if header_exists else [list(EXPORT_COLUMNS), *rows]
        self._store.append_rows(self._anchor_range.a1(), values)
        logger.info("Appended %d rows%s", len(rows), "" if header_exists else " with header")

    def _refresh(self, rows: list[Row]) -> None:
        """Clear the export columns and rewrite header plus rows unconditionally."""
        self._store.clear_range(self._table_range.a1())
        values = [list(EXPORT_COLUMNS), *rows]
        target = SheetRange(self._settings.sheets.sheet_name, start_row=1, end_row=len(values),
                            first_col=0, last_col=COLUMN_COUNT - 1)
        self._store.overwrite_range(target.a1(), values)
        logger.info("Refreshed sheet with %d rows", len(rows))

    def _reconcile(self, stored: list[Row]) -> int:
        """Relabel shifts over every stored row and write them back. Returns rows relabelled."""
        reconciled = reconcile(stored, self._window)
        changed = relabelled_count(stored, reconciled)
        if reconciled:
            target = SheetRange(self._settings.sheets.sheet_name, start_row=2,
                                end_row=len(reconciled) + 1, first_col=0, last_col=COLUMN_COUNT - 1)
            self._store.overwrite_range(target.a1(), [mark_text_columns(r) for r in reconciled])
        logger.info("Reconciled %d stored rows, %d shift labels changed", len(reconciled), changed)
        return changed
