"""
FastAPI routers grouped by section (auth, users, roles, clients, services).

Each module exposes an APIRouter included by create_app(). Section routers are
gated as a whole by the permission that unlocks the section.
"""
