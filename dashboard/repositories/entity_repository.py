"""CRUD helpers over the persistent store collections."""
from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from dashboard.core.security import verify_password
from dashboard.core.utils import new_entity_id
from dashboard.domain.models import Client, Role, Service, User
from dashboard.repositories.store import PersistentStore

E = TypeVar("E", User, Role, Client, Service)


class EntityRepository(Generic[E]):
    """
    list/get_by_id/save/delete over one collection.

    No validation happens here: callers check required fields and natural-key
    uniqueness before calling save (see the services package).
    """

    collection: str = ""
    id_prefix: str = ""
    from_dict: Callable[[dict], E]

    def __init__(self, store: PersistentStore) -> None:
        self.store = store

    def _load(self) -> dict[str, dict]:
        return self.store.load(self.collection)

    def list(self) -> list[E]:
        return [self.from_dict(record) for record in self._load().values()]

    def get_by_id(self, entity_id: str) -> Optional[E]:
        if not entity_id:
            return None
        record = self._load().get(entity_id)
        return self.from_dict(record) if record is not None else None

    def save(self, entity: E) -> E:
        with self.store.lock:
            records = self._load()
            if not entity.id:
                entity = entity.with_id(new_entity_id(self.id_prefix, records))
            else:
                entity = entity.with_id(entity.id)
            entity = self._before_write(entity, records)
            records[entity.id] = entity.to_dict()
            self.store.save(self.collection, records)
        return entity

    def _before_write(self, entity: E, records: dict[str, dict]) -> E:
        return entity

    def delete(self, entity_id: str) -> None:
        with self.store.lock:
            records = self._load()
            if entity_id not in records:
                return
            del records[entity_id]
            self.store.save(self.collection, records)


class UserRepository(EntityRepository[User]):
    collection = "users"
    id_prefix = "user"
    from_dict = staticmethod(User.from_dict)

    def _before_write(self, entity: User, records: dict[str, dict]) -> User:
        if not entity.password:
            previous = records.get(entity.id)
            if previous is not None and previous.get("password"):
                entity.password = previous["password"]
        return entity

    def find_by_username(self, username: str) -> Optional[User]:
        for user in self.list():
            if user.username == username:
                return user
        return None

    def find_by_credentials(self, username: str, password: str) -> Optional[User]:
        for user in self.list():
            if user.username == username and verify_password(password, user.password):
                return user
        return None


class RoleRepository(EntityRepository[Role]):
    collection = "roles"
    id_prefix = "role"
    from_dict = staticmethod(Role.from_dict)

    def find_by_name(self, name: str) -> Optional[Role]:
        wanted = (name or "").strip().lower()
        for role in self.list():
            if role.name.strip().lower() == wanted:
                return role
        return None


class ClientRepository(EntityRepository[Client]):
    collection = "clients"
    id_prefix = "client"
    from_dict = staticmethod(Client.from_dict)

    def find_by_nit(self, nit: str) -> Optional[Client]:
        for client in self.list():
            if client.nit == nit:
                return client
        return None


class ServiceRepository(EntityRepository[Service]):
    collection = "services"
    id_prefix = "service"
    from_dict = staticmethod(Service.from_dict)
