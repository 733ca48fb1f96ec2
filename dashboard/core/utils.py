"""
Utility helpers shared across repositories/services.
"""

import secrets
import time
from typing import Container


def new_entity_id(prefix: str, taken: Container[str] = ()) -> str:
    """
    Genera un id "<prefix>-<epoch ms>-<hex>" que no este en `taken`.
    """
    while True:
        candidate = f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(3)}"
        if candidate not in taken:
            return candidate


def clean(value) -> str:
    """Normalize optional form input to a stripped string."""
    if value is None:
        return ""
    return str(value).strip()
