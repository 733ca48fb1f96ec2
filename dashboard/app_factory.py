"""Wiring of storage, repositories and services (shared by the app and the scripts)."""
from __future__ import annotations

from dataclasses import dataclass

from dashboard.core.config import Settings, get_settings
from dashboard.repositories.entity_repository import (
    ClientRepository,
    RoleRepository,
    ServiceRepository,
    UserRepository,
)
from dashboard.repositories.storage import KeyValueStorage, build_storage
from dashboard.repositories.store import PersistentStore
from dashboard.services.auth_service import AuthService
from dashboard.services.catalog_service import CatalogService
from dashboard.services.client_service import ClientService
from dashboard.services.role_service import RoleService
from dashboard.services.user_service import UserService


@dataclass
class Dashboard:
    store: PersistentStore
    users: UserRepository
    roles: RoleRepository
    clients: ClientRepository
    services: ServiceRepository
    auth: AuthService
    user_service: UserService
    role_service: RoleService
    client_service: ClientService
    catalog_service: CatalogService


def build_dashboard(settings: Settings | None = None, storage: KeyValueStorage | None = None, *, seed: bool = True) -> Dashboard:
    """Build every component around one store handle; seeds the store unless told otherwise."""
    settings = settings or get_settings()
    store = PersistentStore(
        storage if storage is not None else build_storage(settings),
        key_prefix=settings.storage_key_prefix,
        strict=settings.storage_strict,
    )
    if seed:
        store.ensure_seeded()
    users = UserRepository(store)
    roles = RoleRepository(store)
    clients = ClientRepository(store)
    services = ServiceRepository(store)
    return Dashboard(
        store=store,
        users=users,
        roles=roles,
        clients=clients,
        services=services,
        auth=AuthService(store, users, roles),
        user_service=UserService(users, roles),
        role_service=RoleService(roles),
        client_service=ClientService(clients),
        catalog_service=CatalogService(services),
    )
