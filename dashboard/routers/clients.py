from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request

from dashboard.domain.models import Permission
from dashboard.routers.deps import get_dashboard, require_permission

router = APIRouter(prefix="/clients", tags=["clients"], dependencies=[Depends(require_permission(Permission.MANAGE_CLIENTS))])


@router.get("")
def list_clients(request: Request):
    return {"items": [client.to_dict() for client in get_dashboard(request).client_service.list()]}


@router.get("/{client_id}")
def get_client(client_id: str, request: Request):
    return get_dashboard(request).client_service.get(client_id).to_dict()


@router.post("", status_code=201)
def create_client(request: Request, nit: str = Form(""), name: str = Form(""), detail: str = Form("")):
    return get_dashboard(request).client_service.save(nit=nit, name=name, detail=detail).to_dict()


@router.put("/{client_id}")
def update_client(client_id: str, request: Request, nit: str = Form(""), name: str = Form(""), detail: str = Form("")):
    svc = get_dashboard(request).client_service
    return svc.save(client_id=client_id, nit=nit, name=name, detail=detail).to_dict()


@router.delete("/{client_id}")
def delete_client(client_id: str, request: Request):
    get_dashboard(request).client_service.delete(client_id)
    return {"ok": True}
