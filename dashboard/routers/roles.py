from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Form, Request

from dashboard.domain.models import Permission
from dashboard.routers.deps import get_dashboard, require_permission

router = APIRouter(prefix="/roles", tags=["roles"], dependencies=[Depends(require_permission(Permission.MANAGE_ROLES))])


@router.get("")
def list_roles(request: Request):
    return {"items": [role.to_dict() for role in get_dashboard(request).role_service.list()]}


@router.get("/{role_id}")
def get_role(role_id: str, request: Request):
    return get_dashboard(request).role_service.get(role_id).to_dict()


@router.post("", status_code=201)
def create_role(request: Request, name: str = Form(""), permissions: List[str] = Form([])):
    return get_dashboard(request).role_service.save(name=name, permissions=permissions).to_dict()


@router.put("/{role_id}")
def update_role(role_id: str, request: Request, name: str = Form(""), permissions: List[str] = Form([])):
    return get_dashboard(request).role_service.save(role_id=role_id, name=name, permissions=permissions).to_dict()


@router.delete("/{role_id}")
def delete_role(role_id: str, request: Request):
    get_dashboard(request).role_service.delete(role_id)
    return {"ok": True}
