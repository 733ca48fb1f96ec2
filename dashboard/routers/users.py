from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request

from dashboard.domain.models import Permission, User
from dashboard.routers.deps import get_dashboard, require_permission
from dashboard.services.user_service import ROLE_NOT_AVAILABLE

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_permission(Permission.MANAGE_USERS))])


def _user_row(user: User, role_name: str) -> dict:
    row = user.public_dict()
    row["role_name"] = role_name
    return row


def _role_name(request: Request, user: User) -> str:
    role = get_dashboard(request).roles.get_by_id(user.role_id)
    return role.name if role else ROLE_NOT_AVAILABLE


@router.get("")
def list_users(request: Request):
    rows = get_dashboard(request).user_service.list_with_roles()
    return {"items": [_user_row(user, role_name) for user, role_name in rows]}


@router.get("/{user_id}")
def get_user(user_id: str, request: Request):
    user = get_dashboard(request).user_service.get(user_id)
    return _user_row(user, _role_name(request, user))


@router.post("", status_code=201)
def create_user(request: Request, username: str = Form(""), password: str = Form(""), role_id: str = Form("")):
    user = get_dashboard(request).user_service.save(username=username, password=password, role_id=role_id)
    return _user_row(user, _role_name(request, user))


@router.put("/{user_id}")
def update_user(user_id: str, request: Request, username: str = Form(""), password: str = Form(""), role_id: str = Form("")):
    user = get_dashboard(request).user_service.save(user_id=user_id, username=username, password=password, role_id=role_id)
    return _user_row(user, _role_name(request, user))


@router.delete("/{user_id}")
def delete_user(user_id: str, request: Request):
    get_dashboard(request).user_service.delete(user_id)
    return {"ok": True}
