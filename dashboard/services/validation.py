"""Errors and checks shared by the entity services."""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

T = TypeVar("T")


class ValidationError(Exception):
    """Missing required field, duplicated natural key or malformed value."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(Exception):
    """The requested id does not exist in its collection."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} '{entity_id}' no encontrado")
        self.kind = kind
        self.entity_id = entity_id


def key_taken(entities: Iterable[T], key: Callable[[T], str], value: str, *, exclude_id: str = "") -> bool:
    """True when another entity (id != exclude_id) already owns `value`."""
    for entity in entities:
        if exclude_id and getattr(entity, "id", None) == exclude_id:
            continue
        if key(entity) == value:
            return True
    return False
