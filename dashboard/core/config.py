"""
Configuration helpers for the admin dashboard backend.

Routers, services and scripts read settings from here instead of fetching
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[2] / "data.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    data_file: str
    database_url: str
    storage_key_prefix: str
    storage_strict: bool
    login_rate_limit: int
    login_rate_window_seconds: int
    trust_forwarded_for: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "json").strip().lower(),
        data_file=os.getenv("DATA_FILE") or str(DEFAULT_DATA_FILE),
        database_url=os.getenv("DATABASE_URL", ""),
        storage_key_prefix=os.getenv("STORAGE_KEY_PREFIX", "admin_dashboard_"),
        storage_strict=_bool(os.getenv("STORAGE_STRICT"), False),
        login_rate_limit=_int(os.getenv("LOGIN_RATE_LIMIT", "10"), 10),
        login_rate_window_seconds=_int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "60"), 60),
        trust_forwarded_for=_bool(os.getenv("TRUST_FORWARDED_FOR"), False),
    )
