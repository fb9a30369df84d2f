"""Export, search, and auth-probe endpoints mounted under /api."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from shiftsheet.api.errors import ApiError
from shiftsheet.api.security import require_basic_auth
from shiftsheet.core.exceptions import CollaboratorError
from shiftsheet.export.exporter import ShiftExporter
from shiftsheet.models.export import DateRange

logger = logging.getLogger(__name__)

router = APIRouter(tags=["export"], dependencies=[Depends(require_basic_auth)])


def get_exporter(request: Request) -> ShiftExporter:
    state = request.app.state
    return ShiftExporter(
        settings=state.settings,
        query_client=state.query_client,
        sheet_store=state.sheet_store,
    )


@router.get("/addToSheets")
def add_to_sheets(
    from_date: str | None = Query(None, alias="fromDate"),
    to_date: str | None = Query(None, alias="toDate"),
    env: str | None = None,
    agent: list[str] | None = Query(None),
    exporter: ShiftExporter = Depends(get_exporter),
) -> dict[str, Any]:
    """Run one export for the given range and report how many rows were added."""
    date_range = DateRange.parse(from_date, to_date)
    try:
        result = exporter.run(date_range, namespace=env, allow_list=agent)
    except CollaboratorError as exc:
        raise ApiError(500, "Failed to add to Google Sheets", str(exc)) from exc
    if not result.has_data:
        raise ApiError(404, result.message)
    return {"message": result.message, "count": result.added_count}


@router.get("/search")
def search(
    request: Request,
    env: str | None = None,
    from_date: str | None = Query(None, alias="fromDate"),
    to_date: str | None = Query(None, alias="toDate"),
) -> dict[str, Any]:
    """Raw passthrough to the transcript search index."""
    if not env or not from_date or not to_date:
        raise ApiError(400, "Missing query parameters: env, fromDate, toDate are required")
    date_range = DateRange.parse(from_date, to_date)
    try:
        results = request.app.state.query_client.search(env, date_range.start, date_range.end)
    except CollaboratorError as exc:
        raise ApiError(500, "Search failed", str(exc)) from exc
    return {"count": len(results), "results": results}


@router.get("/test-auth")
async def test_auth() -> dict[str, str]:
    return {"message": "Authentication successful"}
