from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Form, Request

from dashboard.domain.defaults import SERVICE_TYPES
from dashboard.domain.models import Permission
from dashboard.routers.deps import get_dashboard, require_permission

router = APIRouter(prefix="/services", tags=["services"], dependencies=[Depends(require_permission(Permission.MANAGE_SERVICES))])


@router.get("")
def list_services(request: Request):
    return {"items": [service.to_dict() for service in get_dashboard(request).catalog_service.list()]}


@router.get("/types")
def service_types():
    return {"items": [t.value for t in SERVICE_TYPES]}


@router.get("/{service_id}")
def get_service(service_id: str, request: Request):
    return get_dashboard(request).catalog_service.get(service_id).to_dict()


@router.post("", status_code=201)
def create_service(
    request: Request,
    type: str = Form(""),
    value: str = Form(""),
    detail: str = Form(""),
    image_urls: List[str] = Form([]),
):
    svc = get_dashboard(request).catalog_service
    return svc.save(type=type, value=value, detail=detail, image_urls=image_urls).to_dict()


@router.put("/{service_id}")
def update_service(
    service_id: str,
    request: Request,
    type: str = Form(""),
    value: str = Form(""),
    detail: str = Form(""),
    image_urls: List[str] = Form([]),
):
    svc = get_dashboard(request).catalog_service
    return svc.save(service_id=service_id, type=type, value=value, detail=detail, image_urls=image_urls).to_dict()


@router.delete("/{service_id}")
def delete_service(service_id: str, request: Request):
    get_dashboard(request).catalog_service.delete(service_id)
    return {"ok": True}
