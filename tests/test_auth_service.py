from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garantiza que el paquete dashboard sea importable durante las pruebas locales
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dashboard.app_factory import build_dashboard  # noqa: E402
from dashboard.core.config import get_settings  # noqa: E402
from dashboard.domain.defaults import ALL_PERMISSIONS  # noqa: E402
from dashboard.domain.models import Permission  # noqa: E402
from dashboard.repositories.storage import MemoryStorage  # noqa: E402
from dashboard.services.auth_service import (  # noqa: E402
    INVALID_CREDENTIALS_MESSAGE,
    AuthService,
    InvalidCredentialsError,
)


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def dash(storage):
    get_settings.cache_clear()
    yield build_dashboard(get_settings(), storage)
    get_settings.cache_clear()


def _fresh_auth(dash) -> AuthService:
    """A second service over the same store, as after a restart."""
    return AuthService(dash.store, dash.users, dash.roles)


def test_default_admin_login_grants_all_permissions(dash):
    state = dash.auth.login("admin", "adminpassword")
    assert state.is_authenticated
    assert state.role.name == "Administrator"
    assert set(state.role.permissions) == set(ALL_PERMISSIONS)
    assert all(dash.auth.has_permission(p) for p in Permission)
    assert dash.store.get_current_session_id() == "admin-user-id"


def test_wrong_password_and_unknown_user_fail_identically(dash):
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        dash.auth.login("admin", "nope")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        dash.auth.login("ghost", "adminpassword")
    assert str(wrong_password.value) == str(unknown_user.value) == INVALID_CREDENTIALS_MESSAGE
    assert not dash.auth.is_authenticated


def test_failed_login_clears_previous_session(dash):
    dash.auth.login("admin", "adminpassword")
    with pytest.raises(InvalidCredentialsError):
        dash.auth.login("admin", "wrong")
    assert dash.auth.current_user is None
    assert dash.store.get_current_session_id() is None


def test_login_with_dangling_role_fails_like_bad_credentials(dash):
    dash.role_service.delete("admin-role-id")
    with pytest.raises(InvalidCredentialsError) as exc:
        dash.auth.login("admin", "adminpassword")
    assert str(exc.value) == INVALID_CREDENTIALS_MESSAGE
    assert dash.store.get_current_session_id() is None


def test_viewer_has_no_permission(dash):
    dash.user_service.save(username="view", password="v", role_id="viewer-role-id")
    dash.auth.login("view", "v")
    assert dash.auth.is_authenticated
    assert not any(dash.auth.has_permission(p) for p in Permission)


def test_unauthenticated_and_unknown_permissions_are_denied(dash):
    assert dash.auth.has_permission(Permission.MANAGE_USERS) is False
    dash.auth.login("admin", "adminpassword")
    assert dash.auth.has_permission("manage_users") is True
    assert dash.auth.has_permission("launch_rockets") is False
    assert dash.auth.has_permission(None) is False


def test_custom_role_scenario(dash):
    qa = dash.role_service.save(name="QA", permissions=[Permission.MANAGE_CLIENTS])
    dash.user_service.save(username="qa1", password="x", role_id=qa.id)

    state = dash.auth.login("qa1", "x")

    assert state.is_authenticated
    assert dash.auth.has_permission(Permission.MANAGE_SERVICES) is False
    assert dash.auth.has_permission(Permission.MANAGE_CLIENTS) is True


def test_logout_clears_state_and_slot(dash):
    dash.auth.login("admin", "adminpassword")
    dash.auth.logout()
    assert not dash.auth.is_authenticated
    assert dash.store.get_current_session_id() is None
    dash.auth.logout()
    assert not dash.auth.is_authenticated


def test_restore_from_persisted_session(dash):
    dash.auth.login("admin", "adminpassword")
    restored = _fresh_auth(dash).restore_from_persisted_session()
    assert restored.is_authenticated
    assert restored.user.username == "admin"


def test_restore_with_dangling_role_keeps_stored_id(dash):
    dash.auth.login("admin", "adminpassword")
    dash.role_service.delete("admin-role-id")
    auth = _fresh_auth(dash)
    assert not auth.restore_from_persisted_session().is_authenticated
    assert dash.store.get_current_session_id() == "admin-user-id"


def test_restore_with_deleted_user_is_unauthenticated(dash):
    dash.auth.login("admin", "adminpassword")
    dash.user_service.delete("admin-user-id")
    assert not _fresh_auth(dash).restore_from_persisted_session().is_authenticated
    assert dash.store.get_current_session_id() == "admin-user-id"


def test_refresh_picks_up_role_changes(dash):
    dash.auth.login("admin", "adminpassword")
    dash.role_service.save(role_id="admin-role-id", name="Administrator", permissions=["manage_roles"])
    dash.auth.refresh()
    assert dash.auth.has_permission(Permission.MANAGE_ROLES)
    assert not dash.auth.has_permission(Permission.MANAGE_USERS)


def test_login_issues_a_session_token(dash):
    dash.auth.login("admin", "adminpassword")
    token = dash.auth.session_token
    assert token and dash.store.get_session_token() == token
    assert dash.auth.session_matches(token)
    assert not dash.auth.session_matches("other")
    assert not dash.auth.session_matches(None)

    dash.auth.login("admin", "adminpassword")
    assert dash.auth.session_token != token


def test_logout_and_failed_login_drop_the_token(dash):
    dash.auth.login("admin", "adminpassword")
    dash.auth.logout()
    assert dash.store.get_session_token() is None
    assert dash.auth.session_token is None

    dash.auth.login("admin", "adminpassword")
    with pytest.raises(InvalidCredentialsError):
        dash.auth.login("admin", "nope")
    assert dash.store.get_session_token() is None


def test_authenticate_leaves_the_session_alone(dash):
    dash.auth.login("admin", "adminpassword")
    token = dash.auth.session_token
    with pytest.raises(InvalidCredentialsError):
        dash.auth.authenticate("admin", "nope")
    assert dash.auth.is_authenticated
    assert dash.auth.session_token == token


def test_restored_session_keeps_its_token(dash):
    dash.auth.login("admin", "adminpassword")
    token = dash.auth.session_token
    restored = _fresh_auth(dash)
    restored.restore_from_persisted_session()
    assert restored.session_matches(token)
