"""Role management use cases."""

from __future__ import annotations

from typing import Iterable

from dashboard.core.utils import clean
from dashboard.domain.models import Permission, Role
from dashboard.repositories.entity_repository import RoleRepository
from dashboard.services.validation import NotFoundError, ValidationError, key_taken


class RoleService:
    """Role names are unique regardless of case."""

    def __init__(self, roles: RoleRepository) -> None:
        self.roles = roles

    def list(self) -> list[Role]:
        return self.roles.list()

    def get(self, role_id: str) -> Role:
        role = self.roles.get_by_id(role_id)
        if not role:
            raise NotFoundError("Rol", role_id)
        return role

    def parse_permissions(self, values: Iterable[str | Permission]) -> list[Permission]:
        permissions: list[Permission] = []
        for raw in values or []:
            parsed = Permission.parse(raw)
            if parsed is None:
                raise ValidationError(f"Permiso desconocido: {raw}")
            if parsed not in permissions:
                permissions.append(parsed)
        return permissions

    def save(self, *, name: str, permissions: Iterable[str | Permission] = (), role_id: str = "") -> Role:
        name = clean(name)
        with self.roles.store.lock:
            if role_id:
                self.get(role_id)
            if not name:
                raise ValidationError("El nombre del rol es obligatorio.")
            if key_taken(self.roles.list(), lambda r: r.name.strip().lower(), name.lower(), exclude_id=role_id):
                raise ValidationError("Ya existe un rol con este nombre.")
            role = Role(id=role_id, name=name, permissions=self.parse_permissions(permissions))
            return self.roles.save(role)

    def delete(self, role_id: str) -> None:
        # users pointing at the role keep their roleId (shown as N/A)
        self.roles.delete(role_id)
