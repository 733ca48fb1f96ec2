"""
Persistence adapters.

storage.py holds the key-value backends (memory, JSON file, SQL), store.py the
collection/session layout on top of them and entity_repository.py the typed
CRUD facades. Services depend on repositories instead of touching storage keys.
"""
