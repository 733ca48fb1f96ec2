"""Request-scoped helpers: reach the wired services and gate by permission."""
from __future__ import annotations

from fastapi import HTTPException, Request

from dashboard.app_factory import Dashboard
from dashboard.domain.models import Permission, Role, User
from dashboard.services.session_service import session_token


def get_dashboard(request: Request) -> Dashboard:
    dashboard = getattr(getattr(request.app, "state", None), "dashboard", None)
    if not dashboard:
        raise RuntimeError("Dashboard no configurado")
    return dashboard


def require_login(request: Request) -> User:
    """401 unless a session is active and this client holds its cookie."""
    auth = get_dashboard(request).auth
    auth.refresh()
    if not auth.is_authenticated or not auth.session_matches(session_token(request)):
        raise HTTPException(401, "No autenticado")
    return auth.current_user


def require_permission(permission: Permission):
    """Dependency factory: 401 without a session, 403 without the permission."""

    def _dependency(request: Request) -> User:
        user = require_login(request)
        if not get_dashboard(request).auth.has_permission(permission):
            raise HTTPException(403, "No tienes permiso para acceder a esta sección.")
        return user

    return _dependency


def role_payload(role: Role | None) -> dict | None:
    return role.to_dict() if role else None
