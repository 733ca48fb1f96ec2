"""Entity types persisted by the dashboard store."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Optional
import math

MAX_SERVICE_IMAGES = 3


class Permission(str, Enum):
    MANAGE_USERS = "manage_users"
    MANAGE_ROLES = "manage_roles"
    MANAGE_CLIENTS = "manage_clients"
    MANAGE_SERVICES = "manage_services"

    @classmethod
    def parse(cls, value: Any) -> Optional["Permission"]:
        """Return the matching permission or None for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class ServiceType(str, Enum):
    CONSULTING = "Consultoría"
    DEVELOPMENT = "Desarrollo"
    SUPPORT = "Soporte"
    MAINTENANCE = "Mantenimiento"
    DESIGN = "Diseño"

    @classmethod
    def parse(cls, value: Any) -> Optional["ServiceType"]:
        """Accept either the stored label ("Soporte") or the member name ("SUPPORT")."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            pass
        return cls.__members__.get(text.upper())


@dataclass
class User:
    id: str
    username: str
    role_id: str
    password: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.id, "username": self.username, "password": self.password, "roleId": self.role_id}

    def public_dict(self) -> dict:
        return {"id": self.id, "username": self.username, "role_id": self.role_id}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        return cls(
            id=str(data.get("id") or ""),
            username=str(data.get("username") or ""),
            role_id=str(data.get("roleId") or ""),
            password=data.get("password"),
        )

    def with_id(self, entity_id: str) -> "User":
        return replace(self, id=entity_id)


@dataclass
class Role:
    id: str
    name: str
    permissions: list[Permission] = field(default_factory=list)

    def has(self, permission: Any) -> bool:
        parsed = Permission.parse(permission)
        return parsed is not None and parsed in self.permissions

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "permissions": [p.value for p in self.permissions]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Role":
        perms = []
        for raw in data.get("permissions") or []:
            parsed = Permission.parse(raw)
            if parsed is not None and parsed not in perms:
                perms.append(parsed)
        return cls(id=str(data.get("id") or ""), name=str(data.get("name") or ""), permissions=perms)

    def with_id(self, entity_id: str) -> "Role":
        return replace(self, id=entity_id, permissions=list(self.permissions))


@dataclass
class Client:
    id: str
    nit: str
    name: str
    detail: str

    def to_dict(self) -> dict:
        return {"id": self.id, "nit": self.nit, "name": self.name, "detail": self.detail}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Client":
        return cls(
            id=str(data.get("id") or ""),
            nit=str(data.get("nit") or ""),
            name=str(data.get("name") or ""),
            detail=str(data.get("detail") or ""),
        )

    def with_id(self, entity_id: str) -> "Client":
        return replace(self, id=entity_id)


@dataclass
class Service:
    id: str
    type: ServiceType
    value: float
    detail: str
    image_urls: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "value": self.value,
            "detail": self.detail,
            "imageUrls": list(self.image_urls),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Service":
        service_id = str(data.get("id") or "")
        raw_value = data.get("value")
        try:
            value = float(raw_value if raw_value is not None else 0)
        except (TypeError, ValueError):
            value = math.nan
        if math.isnan(value) or math.isinf(value):
            print(f"[store] Servicio '{service_id}': valor invalido {raw_value!r}, se usa 0.")
            value = 0.0
        service_type = ServiceType.parse(data.get("type"))
        if service_type is None:
            print(f"[store] Servicio '{service_id}': tipo desconocido {data.get('type')!r}, se usa {ServiceType.CONSULTING.value}.")
            service_type = ServiceType.CONSULTING
        return cls(
            id=service_id,
            type=service_type,
            value=value,
            detail=str(data.get("detail") or ""),
            image_urls=[str(u) for u in (data.get("imageUrls") or [])],
        )

    def with_id(self, entity_id: str) -> "Service":
        return replace(self, id=entity_id, image_urls=list(self.image_urls))
