"""
Persistent store: named entity collections plus the current-session slot.

Each collection is a single key in the key-value storage whose value is a
JSON object {id: record}. Writes always replace the whole collection, so any
read-modify-write must hold `store.lock` from the load to the save.
"""

from __future__ import annotations

from typing import Optional
import json
import threading

from dashboard.domain.defaults import (
    COLLECTIONS,
    CURRENT_USER_KEY,
    SESSION_TOKEN_KEY,
    default_admin_user,
    predefined_roles,
    storage_key,
)
from dashboard.repositories.storage import CorruptDataError, KeyValueStorage

__all__ = ["CorruptDataError", "PersistentStore"]


class PersistentStore:
    """Typed access to the dashboard collections stored in a KeyValueStorage."""

    def __init__(self, storage: KeyValueStorage, *, key_prefix: str = "admin_dashboard_", strict: bool = False) -> None:
        self.storage = storage
        self.key_prefix = key_prefix
        self.strict = strict
        self.lock = threading.RLock()

    def _key(self, collection: str) -> str:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection!r}")
        return storage_key(self.key_prefix, collection)

    # -------------------------- collections --------------------------
    def load(self, collection: str) -> dict[str, dict]:
        raw = self.storage.get_item(self._key(collection))
        if raw is None or raw == "":
            return {}
        try:
            data = json.loads(raw)
        except ValueError as exc:
            return self._corrupt(collection, f"JSON invalido ({exc})")
        if not isinstance(data, dict):
            return self._corrupt(collection, "se esperaba un objeto {id: registro}")
        return {str(k): v for k, v in data.items() if isinstance(v, dict)}

    def save(self, collection: str, mapping: dict[str, dict]) -> None:
        self.storage.set_item(self._key(collection), json.dumps(mapping, ensure_ascii=False))

    def exists(self, collection: str) -> bool:
        return self.storage.get_item(self._key(collection)) is not None

    def _corrupt(self, collection: str, reason: str) -> dict:
        if self.strict:
            raise CorruptDataError(collection, reason)
        # mismo trato que una coleccion ausente
        print(f"[store] Colección '{collection}' ilegible: {reason}; se trata como vacia.")
        return {}

    # -------------------------- session slot --------------------------
    def get_current_session_id(self) -> Optional[str]:
        value = self.storage.get_item(storage_key(self.key_prefix, CURRENT_USER_KEY))
        return value or None

    def set_current_session_id(self, user_id: Optional[str]) -> None:
        self._set_slot(CURRENT_USER_KEY, user_id)

    def get_session_token(self) -> Optional[str]:
        value = self.storage.get_item(storage_key(self.key_prefix, SESSION_TOKEN_KEY))
        return value or None

    def set_session_token(self, token: Optional[str]) -> None:
        self._set_slot(SESSION_TOKEN_KEY, token)

    def _set_slot(self, name: str, value: Optional[str]) -> None:
        key = storage_key(self.key_prefix, name)
        with self.lock:
            if value:
                self.storage.set_item(key, value)
            else:
                self.storage.remove_item(key)

    # -------------------------- lifecycle --------------------------
    def ensure_seeded(self) -> bool:
        """
        Write the predefined roles, the default admin and empty clients/services
        collections for every key that does not exist yet. Returns True when
        anything was written.
        """
        seeded = False
        with self.lock:
            if not self.exists("roles"):
                self.save("roles", {role.id: role.to_dict() for role in predefined_roles()})
                seeded = True
            if not self.exists("users"):
                admin = default_admin_user()
                self.save("users", {admin.id: admin.to_dict()})
                seeded = True
            for collection in ("clients", "services"):
                if not self.exists(collection):
                    self.save(collection, {})
                    seeded = True
        if seeded:
            print("[store] Datos iniciales creados.")
        return seeded

    def reset(self) -> None:
        with self.lock:
            for collection in COLLECTIONS:
                self.storage.remove_item(self._key(collection))
            self.set_current_session_id(None)
            self.set_session_token(None)
