"""Credential comparison helpers."""

from __future__ import annotations

import secrets


def verify_password(password: str | None, stored: str | None) -> bool:
    """
    Exact, case-sensitive comparison between the supplied and the stored password.

    Stored passwords are opaque plain values; no hashing scheme is applied.
    """
    if password is None or stored is None:
        return False
    return secrets.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))
