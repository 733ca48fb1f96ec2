from __future__ import annotations

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import JSONResponse

from dashboard.core.config import get_settings
from dashboard.core.rate_limiter import rate_limit_ip
from dashboard.domain.defaults import ALL_PERMISSIONS
from dashboard.routers.deps import get_dashboard, require_login, role_payload
from dashboard.services.auth_service import AuthState, InvalidCredentialsError
from dashboard.services.session_service import clear_session_cookie, session_token, set_session_cookie

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_payload(state: AuthState) -> dict:
    role = state.role
    return {
        "user": state.user.public_dict() if state.user else None,
        "role": role_payload(role),
        "permissions": [p.value for p in ALL_PERMISSIONS if role and p in role.permissions],
    }


@router.post("/login")
def login(request: Request, username: str = Form(""), password: str = Form("")):
    settings = get_settings()
    rate_limit_ip(
        request,
        "login",
        limit=settings.login_rate_limit,
        window_seconds=settings.login_rate_window_seconds,
        trust_forwarded=settings.trust_forwarded_for,
    )
    auth = get_dashboard(request).auth
    try:
        if not auth.session_matches(session_token(request)):
            # a failed attempt from another client must not end the active session
            auth.authenticate(username, password)
        state = auth.login(username, password)
    except InvalidCredentialsError as exc:
        raise HTTPException(401, exc.message)
    response = JSONResponse(_session_payload(state))
    set_session_cookie(response, auth.session_token)
    return response


@router.post("/logout")
def logout(request: Request):
    auth = get_dashboard(request).auth
    if auth.session_matches(session_token(request)):
        auth.logout()
    response = JSONResponse({"ok": True})
    clear_session_cookie(response)
    return response


@router.get("/me")
def me(request: Request):
    require_login(request)
    return _session_payload(get_dashboard(request).auth.state)
