from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi import HTTPException
from starlette.requests import Request

# Garantiza que el paquete dashboard sea importable durante las pruebas locales
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dashboard.core import rate_limiter  # noqa: E402


def _request(forwarded: str | None = None, host: str = "192.0.2.10") -> Request:
    headers = [(b"x-forwarded-for", forwarded.encode())] if forwarded else []
    return Request({"type": "http", "method": "POST", "path": "/auth/login", "headers": headers, "client": (host, 5000)})


def test_expired_keys_are_purged(monkeypatch):
    limiter = rate_limiter._RateLimiter()
    clock = {"now": 1000.0}
    monkeypatch.setattr(rate_limiter.time, "time", lambda: clock["now"])

    for i in range(50):
        limiter.check(f"login:10.0.0.{i}", limit=5, window_seconds=60)
    assert len(limiter._hits) == 50

    clock["now"] += 61
    limiter.check("login:10.0.1.1", limit=5, window_seconds=60)
    assert list(limiter._hits) == ["login:10.0.1.1"]


def test_window_expiry_resets_the_count(monkeypatch):
    limiter = rate_limiter._RateLimiter()
    clock = {"now": 1000.0}
    monkeypatch.setattr(rate_limiter.time, "time", lambda: clock["now"])

    for _ in range(3):
        limiter.check("login:a", limit=3, window_seconds=60)
    with pytest.raises(HTTPException) as exc:
        limiter.check("login:a", limit=3, window_seconds=60)
    assert exc.value.status_code == 429

    clock["now"] += 61
    limiter.check("login:a", limit=3, window_seconds=60)


def test_forwarded_header_ignored_by_default():
    assert rate_limiter._client_ip(_request("203.0.113.7")) == "192.0.2.10"


def test_forwarded_header_used_when_trusted():
    request = _request("198.51.100.1, 203.0.113.7")
    assert rate_limiter._client_ip(request, trust_forwarded=True) == "203.0.113.7"
    assert rate_limiter._client_ip(_request(), trust_forwarded=True) == "192.0.2.10"
