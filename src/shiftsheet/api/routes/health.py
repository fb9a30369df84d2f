"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(request: Request) -> dict[str, str]:
    state = request.app.state
    wired = getattr(state, "query_client", None) is not None and getattr(state, "sheet_store", None) is not None
    return {"status": "ready" if wired else "not_configured", "environment": state.settings.environment}
