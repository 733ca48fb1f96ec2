"""
Key-value storage backends.

Every backend exposes the same three calls as browser local storage:
get_item/set_item/remove_item with string values. The PersistentStore sits on
top and never knows which backend it talks to.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol
import json
import os
import tempfile
import threading
import time

from sqlalchemy import delete

from dashboard.core.config import Settings
from dashboard.db.models import StorageItem
from dashboard.db.session import get_engine, get_session


class CorruptDataError(Exception):
    """Stored data is not valid JSON, or not the JSON object it should be."""

    def __init__(self, collection: str, reason: str):
        super().__init__(f"Colección '{collection}' corrupta: {reason}")
        self.collection = collection
        self.reason = reason
        self.message = str(self)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage, handy for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStorage:
    """
    The whole key space lives in one JSON object on disk.

    Values are kept as strings (exactly what set_item received) so the file
    is a faithful dump of what a browser would hold. Writes land in a temp
    file next to the target and are swapped in with os.replace, so a reader
    never sees a half-written file.

    An unreadable file is never overwritten: strict mode raises
    CorruptDataError, otherwise the file is moved aside to `<name>.bak`
    and the storage starts over empty.
    """

    def __init__(self, path: Path | str, *, strict: bool = False) -> None:
        self.path = Path(path).expanduser().resolve()
        self.strict = strict
        self._lock = threading.RLock()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as exc:
            return self._corrupt(f"JSON invalido ({exc})")
        if not isinstance(data, dict):
            return self._corrupt("se esperaba un objeto JSON")
        return data

    def _corrupt(self, reason: str) -> dict:
        if self.strict:
            raise CorruptDataError(str(self.path), reason)
        backup = self.path.with_name(self.path.name + ".bak")
        if backup.exists():
            backup = self.path.with_name(f"{self.path.name}.{int(time.time() * 1000)}.bak")
        os.replace(self.path, backup)
        print(f"[store] Archivo {self.path} ilegible ({reason}); copia guardada en {backup}.")
        return {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = str(value)
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


class SQLStorage:
    """Key-value rows in the storage_items table."""

    def __init__(self, *, create_schema: bool = True) -> None:
        if create_schema:
            StorageItem.__table__.create(bind=get_engine(), checkfirst=True)

    def get_item(self, key: str) -> Optional[str]:
        with get_session() as session:
            entity = session.get(StorageItem, key)
            return entity.value if entity else None

    def set_item(self, key: str, value: str) -> None:
        with get_session() as session:
            entity = session.get(StorageItem, key)
            if not entity:
                session.add(StorageItem(key=key, value=str(value)))
            else:
                entity.value = str(value)
            session.commit()

    def remove_item(self, key: str) -> None:
        with get_session() as session:
            session.execute(delete(StorageItem).where(StorageItem.key == key))
            session.commit()


def build_storage(settings: Settings) -> KeyValueStorage:
    backend = settings.storage_backend
    if backend == "json":
        return JsonFileStorage(settings.data_file, strict=settings.storage_strict)
    if backend == "sql":
        return SQLStorage()
    if backend == "memory":
        return MemoryStorage()
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")
