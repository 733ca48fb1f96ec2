"""Seed data and storage key names."""
from __future__ import annotations

from .models import Permission, Role, ServiceType, User

COLLECTIONS = ("users", "roles", "clients", "services")
CURRENT_USER_KEY = "current_user_id"
SESSION_TOKEN_KEY = "session_token"

ALL_PERMISSIONS = [
    Permission.MANAGE_USERS,
    Permission.MANAGE_ROLES,
    Permission.MANAGE_CLIENTS,
    Permission.MANAGE_SERVICES,
]

SERVICE_TYPES = [
    ServiceType.CONSULTING,
    ServiceType.DEVELOPMENT,
    ServiceType.SUPPORT,
    ServiceType.MAINTENANCE,
    ServiceType.DESIGN,
]

ADMIN_ROLE_ID = "admin-role-id"
EDITOR_ROLE_ID = "editor-role-id"
VIEWER_ROLE_ID = "viewer-role-id"


def predefined_roles() -> list[Role]:
    return [
        Role(id=ADMIN_ROLE_ID, name="Administrator", permissions=list(ALL_PERMISSIONS)),
        Role(
            id=EDITOR_ROLE_ID,
            name="Editor",
            permissions=[Permission.MANAGE_CLIENTS, Permission.MANAGE_SERVICES],
        ),
        Role(id=VIEWER_ROLE_ID, name="Viewer", permissions=[]),
    ]


def default_admin_user() -> User:
    return User(id="admin-user-id", username="admin", password="adminpassword", role_id=ADMIN_ROLE_ID)


def storage_key(prefix: str, name: str) -> str:
    """Map a collection (or the session slot) to its key in the key-value storage."""
    return f"{prefix}{name}"
