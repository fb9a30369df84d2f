"""Exception -> JSON response mapping. Error bodies are ``{error, details}``."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shiftsheet.core.exceptions import (
    AuthenticationError,
    CollaboratorError,
    ConfigurationError,
    InvalidDateRangeError,
    ShiftSheetError,
)

logger = logging.getLogger(__name__)


class ApiError(ShiftSheetError):
    """An error response a route wants returned verbatim."""

    def __init__(self, status_code: int, error: str, details: str | None = None) -> None:
        self.status_code = status_code
        self.error = error
        self.details = details
        super().__init__(f"{status_code} {error}: {details}" if details else f"{status_code} {error}")


def error_body(error: str, details: str | None = None) -> dict[str, str]:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return body


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def _api_error(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.error, exc.details))

    @app.exception_handler(InvalidDateRangeError)
    async def _invalid_range(request: Request, exc: InvalidDateRangeError) -> JSONResponse:
        return JSONResponse(status_code=400, content=error_body("Invalid date range", str(exc)))

    @app.exception_handler(AuthenticationError)
    async def _unauthenticated(request: Request, exc: AuthenticationError) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content=error_body(str(exc)),
            headers={"WWW-Authenticate": 'Basic realm="Secure Area"'},
        )

    @app.exception_handler(CollaboratorError)
    async def _collaborator(request: Request, exc: CollaboratorError) -> JSONResponse:
        return JSONResponse(status_code=500, content=error_body("Upstream service failed", str(exc)))

    @app.exception_handler(ConfigurationError)
    async def _misconfigured(request: Request, exc: ConfigurationError) -> JSONResponse:
        logger.error("Service misconfigured: %s", exc)
        return JSONResponse(status_code=500, content=error_body("Service misconfigured", str(exc)))
