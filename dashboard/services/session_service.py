"""Session cookie helpers (issue tokens, set/clear the cookie, read it back)."""
from __future__ import annotations

import secrets

from fastapi import Request, Response

from dashboard.core.config import get_settings

SESSION_COOKIE_NAME = "dashboard_session"


def issue_token() -> str:
    return secrets.token_urlsafe(32)


def session_token(request: Request) -> str | None:
    """Return the session token sent by the client, if any."""
    return request.cookies.get(SESSION_COOKIE_NAME) or None


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    secure_cookie = settings.app_env == "prod"
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=secure_cookie,
        samesite="strict",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
