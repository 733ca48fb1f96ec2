"""
Session and authorization use cases.

Two states: unauthenticated, or authenticated with a user and its resolved
role. The current user's id is persisted in the store session slot so a
restart can restore it, together with the session token handed to the client
that logged in; only that client may act on the session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
import secrets

from dashboard.domain.models import Role, User
from dashboard.repositories.entity_repository import RoleRepository, UserRepository
from dashboard.repositories.store import PersistentStore
from dashboard.services.session_service import issue_token

INVALID_CREDENTIALS_MESSAGE = "Credenciales incorrectas. Intenta de nuevo."


class AuthError(Exception):
    """Base class for authentication-related exceptions."""


class InvalidCredentialsError(AuthError):
    def __init__(self, message: str = INVALID_CREDENTIALS_MESSAGE):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class AuthState:
    user: Optional[User] = None
    role: Optional[Role] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.role is not None


UNAUTHENTICATED = AuthState()


class AuthService:
    """Login/logout/restore and the permission predicate."""

    def __init__(self, store: PersistentStore, users: UserRepository, roles: RoleRepository) -> None:
        self.store = store
        self.users = users
        self.roles = roles
        self._state = UNAUTHENTICATED

    # -------------------------------------- state --------------------------------------
    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def current_user(self) -> Optional[User]:
        return self._state.user

    @property
    def current_role(self) -> Optional[Role]:
        return self._state.role

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    def _resolve(self, user_id: Optional[str]) -> AuthState:
        user = self.users.get_by_id(user_id) if user_id else None
        if not user:
            return UNAUTHENTICATED
        role = self.roles.get_by_id(user.role_id)
        if not role:
            return UNAUTHENTICATED
        return AuthState(user=user, role=role)

    # -------------------------------------- login --------------------------------------
    def authenticate(self, username: str, password: str) -> AuthState:
        """Check credentials without touching the current session."""
        user = self.users.find_by_credentials(username or "", password or "")
        role = self.roles.get_by_id(user.role_id) if user else None
        if not user or not role:
            # unknown user, wrong password and dangling role look the same to the caller
            print(f"[auth] Inicio de sesion fallido para '{username}'.")
            raise InvalidCredentialsError()
        return AuthState(user=user, role=role)

    def login(self, username: str, password: str) -> AuthState:
        try:
            state = self.authenticate(username, password)
        except InvalidCredentialsError:
            self._clear_session()
            raise
        with self.store.lock:
            self._state = state
            self.store.set_current_session_id(state.user.id)
            self.store.set_session_token(issue_token())
        return self._state

    def logout(self) -> None:
        self._clear_session()

    def _clear_session(self) -> None:
        with self.store.lock:
            self._state = UNAUTHENTICATED
            self.store.set_current_session_id(None)
            self.store.set_session_token(None)

    @property
    def session_token(self) -> Optional[str]:
        """Token of the active session; None when nobody is logged in."""
        if not self._state.is_authenticated:
            return None
        return self.store.get_session_token()

    def session_matches(self, token: Optional[str]) -> bool:
        expected = self.session_token
        if not token or not expected:
            return False
        return secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))

    def restore_from_persisted_session(self) -> AuthState:
        """Resolve the persisted user id; the stored id is left untouched either way."""
        self._state = self._resolve(self.store.get_current_session_id())
        if self._state.is_authenticated:
            print(f"[auth] Sesion restaurada para '{self._state.user.username}'.")
        return self._state

    def refresh(self) -> AuthState:
        """Re-read the current user and role after they may have been edited."""
        if self._state.user is not None:
            self._state = self._resolve(self._state.user.id)
        return self._state

    # -------------------------------------- authorization --------------------------------------
    def has_permission(self, permission: Any) -> bool:
        if not self._state.is_authenticated:
            return False
        return self._state.role.has(permission)
