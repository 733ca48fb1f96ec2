from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from dashboard.app_factory import build_dashboard
from dashboard.core.config import Settings, get_settings
from dashboard.domain.models import Permission
from dashboard.repositories.storage import KeyValueStorage
from dashboard.repositories.store import CorruptDataError
from dashboard.routers import auth as auth_router
from dashboard.routers import clients as clients_router
from dashboard.routers import roles as roles_router
from dashboard.routers import services as services_router
from dashboard.routers import users as users_router
from dashboard.routers.deps import get_dashboard, require_login
from dashboard.services.validation import NotFoundError, ValidationError

SECTIONS = [
    ("users", Permission.MANAGE_USERS, "Administra las cuentas de usuario, asigna roles y mantén el control de acceso."),
    ("roles", Permission.MANAGE_ROLES, "Define y modifica los roles y sus respectivos permisos dentro de la aplicación."),
    ("clients", Permission.MANAGE_CLIENTS, "Crea, edita y elimina la información de tus clientes."),
    ("services", Permission.MANAGE_SERVICES, "Administra los servicios ofrecidos, incluyendo detalles e imágenes."),
]


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, nosniff, referrer policy)."""

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cache-Control", "no-store")
        return response


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return JSONResponse({"detail": exc.message}, status_code=422)

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return JSONResponse({"detail": str(exc)}, status_code=404)

    @app.exception_handler(CorruptDataError)
    async def _corrupt(request: Request, exc: CorruptDataError):
        return JSONResponse({"detail": str(exc)}, status_code=500)


def create_app(settings: Settings | None = None, storage: KeyValueStorage | None = None) -> FastAPI:
    """Factory compatible with uvicorn --factory."""
    settings = settings or get_settings()
    app = FastAPI(title="Admin Dashboard API")

    dashboard = build_dashboard(settings, storage)
    dashboard.auth.restore_from_persisted_session()
    app.state.dashboard = dashboard
    app.state.settings = settings

    if settings.app_env != "prod":
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[
                "http://localhost:8000",
                "http://127.0.0.1:8000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            ],
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware)
    _register_error_handlers(app)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/")
    def home(request: Request):
        user = require_login(request)
        auth = get_dashboard(request).auth
        sections = [
            {"name": name, "path": f"/{name}", "description": description}
            for name, permission, description in SECTIONS
            if auth.has_permission(permission)
        ]
        return {
            "welcome": f"Bienvenido al Dashboard, {user.username}!",
            "role": auth.current_role.name,
            "sections": sections,
        }

    app.include_router(auth_router.router)
    app.include_router(users_router.router)
    app.include_router(roles_router.router)
    app.include_router(clients_router.router)
    app.include_router(services_router.router)
    return app
