"""
Core utilities shared across the dashboard backend.

This package hosts configuration helpers (env vars, storage paths), credential
comparison, id generation and the login rate limiter. Services should depend on
core primitives instead of reading os.environ or FastAPI objects directly.
"""
