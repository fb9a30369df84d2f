"""HTTP basic auth guarding the /api routes."""

from __future__ import annotations

import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from shiftsheet.core.exceptions import AuthenticationError

_basic = HTTPBasic(auto_error=False)


def require_basic_auth(
    request: Request,
    credentials: HTTPBasicCredentials | None = Depends(_basic),
) -> None:
    """No-op unless SHIFTSHEET_AUTH_USERNAME and SHIFTSHEET_AUTH_PASSWORD are both set."""
    auth = request.app.state.settings.auth
    if not auth.enabled:
        return
    if credentials is None:
        raise AuthenticationError("Authentication required")
    user_ok = secrets.compare_digest(credentials.username.encode(), auth.username.encode())
    pass_ok = secrets.compare_digest(credentials.password.encode(), auth.password.encode())
    if not (user_ok and pass_ok):
        raise AuthenticationError("Invalid credentials")
