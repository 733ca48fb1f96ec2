"""Create the storage_items table ahead of time (SQLStorage also does it lazily)."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from .models import StorageItem
from .session import get_engine


def create_all() -> None:
    StorageItem.__table__.create(bind=get_engine(), checkfirst=True)


if __name__ == "__main__":
    try:
        create_all()
        print("Tabla storage_items lista.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"No se pudo crear la tabla: {exc}") from exc
