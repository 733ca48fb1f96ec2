"""User management use cases (validation before persistence)."""

from __future__ import annotations

from typing import Optional

from dashboard.core.utils import clean
from dashboard.domain.models import User
from dashboard.repositories.entity_repository import RoleRepository, UserRepository
from dashboard.services.validation import NotFoundError, ValidationError, key_taken

ROLE_NOT_AVAILABLE = "N/A"


class UserService:
    """Validates user forms and delegates persistence to UserRepository."""

    def __init__(self, users: UserRepository, roles: RoleRepository) -> None:
        self.users = users
        self.roles = roles

    def list(self) -> list[User]:
        return self.users.list()

    def list_with_roles(self) -> list[tuple[User, str]]:
        role_names = {role.id: role.name for role in self.roles.list()}
        return [(user, role_names.get(user.role_id, ROLE_NOT_AVAILABLE)) for user in self.users.list()]

    def get(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Usuario", user_id)
        return user

    def save(self, *, username: str, role_id: str, password: Optional[str] = None, user_id: str = "") -> User:
        username = clean(username)
        role_id = clean(role_id)
        password = password or ""
        with self.users.store.lock:
            existing = self.get(user_id) if user_id else None

            if not username or not role_id:
                raise ValidationError("Todos los campos obligatorios deben ser completados.")
            if existing is None and not password:
                raise ValidationError("La contraseña es obligatoria para nuevos usuarios.")
            if key_taken(self.users.list(), lambda u: u.username, username, exclude_id=user_id):
                raise ValidationError("El nombre de usuario ya existe. Por favor, elige otro.")
            if not self.roles.get_by_id(role_id):
                raise ValidationError("El rol seleccionado no existe.")

            user = User(id=user_id, username=username, role_id=role_id, password=password or None)
            return self.users.save(user)

    def delete(self, user_id: str) -> None:
        self.users.delete(user_id)
