"""
Validation at the pre-save boundary: required fields and natural keys.
"""
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
from dashboard.domain.models import Permission, ServiceType  # noqa: E402
from dashboard.repositories.storage import MemoryStorage  # noqa: E402
from dashboard.services.validation import NotFoundError, ValidationError  # noqa: E402

PNG_DATA = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def dash(storage, monkeypatch):
    monkeypatch.delenv("STORAGE_STRICT", raising=False)
    get_settings.cache_clear()
    yield build_dashboard(get_settings(), storage)
    get_settings.cache_clear()


# -------------------------- users --------------------------
def test_duplicate_username_is_rejected_before_persistence(dash, storage):
    before = storage.get_item("admin_dashboard_users")
    with pytest.raises(ValidationError) as exc:
        dash.user_service.save(username="admin", password="other", role_id="viewer-role-id")
    assert exc.value.message == "El nombre de usuario ya existe. Por favor, elige otro."
    assert storage.get_item("admin_dashboard_users") == before


def test_new_user_requires_password(dash):
    with pytest.raises(ValidationError, match="contraseña es obligatoria"):
        dash.user_service.save(username="ana", password="", role_id="viewer-role-id")


def test_user_requires_username_and_role(dash):
    with pytest.raises(ValidationError, match="obligatorios"):
        dash.user_service.save(username="  ", password="x", role_id="viewer-role-id")
    with pytest.raises(ValidationError, match="obligatorios"):
        dash.user_service.save(username="ana", password="x", role_id="")


def test_user_role_must_exist(dash):
    with pytest.raises(ValidationError, match="rol seleccionado"):
        dash.user_service.save(username="ana", password="x", role_id="ghost-role")


def test_user_can_keep_own_username_on_update(dash):
    user = dash.user_service.save(username="ana", password="x", role_id="viewer-role-id")
    updated = dash.user_service.save(user_id=user.id, username="ana", password="", role_id="editor-role-id")
    assert updated.role_id == "editor-role-id"
    assert dash.users.get_by_id(user.id).password == "x"


def test_user_cannot_take_another_username_on_update(dash):
    user = dash.user_service.save(username="ana", password="x", role_id="viewer-role-id")
    with pytest.raises(ValidationError):
        dash.user_service.save(user_id=user.id, username="admin", role_id="viewer-role-id")


def test_update_missing_user_is_not_found(dash):
    with pytest.raises(NotFoundError):
        dash.user_service.save(user_id="nope", username="x", role_id="viewer-role-id")


def test_list_with_roles_shows_na_for_dangling_role(dash):
    user = dash.user_service.save(username="ana", password="x", role_id="editor-role-id")
    dash.role_service.delete("editor-role-id")
    rows = dict((u.id, name) for u, name in dash.user_service.list_with_roles())
    assert rows[user.id] == "N/A"
    assert rows["admin-user-id"] == "Administrator"


# -------------------------- roles --------------------------
def test_role_name_unique_case_insensitive(dash):
    with pytest.raises(ValidationError, match="Ya existe un rol"):
        dash.role_service.save(name="administrator", permissions=[])


def test_role_rename_to_same_name_with_other_case_is_allowed(dash):
    role = dash.role_service.save(role_id="viewer-role-id", name="VIEWER", permissions=["manage_clients"])
    assert role.name == "VIEWER"
    assert role.permissions == [Permission.MANAGE_CLIENTS]


def test_role_name_required(dash):
    with pytest.raises(ValidationError, match="obligatorio"):
        dash.role_service.save(name="", permissions=[])


def test_role_permissions_are_validated_and_deduplicated(dash):
    role = dash.role_service.save(name="QA", permissions=["manage_clients", Permission.MANAGE_CLIENTS, "manage_users"])
    assert role.permissions == [Permission.MANAGE_CLIENTS, Permission.MANAGE_USERS]
    with pytest.raises(ValidationError, match="Permiso desconocido"):
        dash.role_service.save(name="Bad", permissions=["launch_rockets"])


# -------------------------- clients --------------------------
def test_client_fields_required(dash):
    with pytest.raises(ValidationError, match="Todos los campos son obligatorios"):
        dash.client_service.save(nit="900", name="ACME", detail="")


def test_client_nit_unique(dash):
    client = dash.client_service.save(nit="900", name="ACME", detail="Mayorista")
    with pytest.raises(ValidationError, match="NIT"):
        dash.client_service.save(nit="900", name="Otra", detail="x")
    same = dash.client_service.save(client_id=client.id, nit="900", name="ACME SAS", detail="Mayorista")
    assert same.name == "ACME SAS"
    assert len(dash.client_service.list()) == 1


# -------------------------- services --------------------------
def test_service_saved_with_images(dash):
    service = dash.catalog_service.save(
        type="Desarrollo",
        value="2500000.50",
        detail="Sitio web",
        image_urls=[PNG_DATA, "https://cdn.example.com/a.jpg", ""],
    )
    assert service.type is ServiceType.DEVELOPMENT
    assert service.value == 2500000.5
    assert service.image_urls == [PNG_DATA, "https://cdn.example.com/a.jpg"]
    assert dash.catalog_service.get(service.id) == service


def test_service_type_accepts_member_name(dash):
    service = dash.catalog_service.save(type="design", value=0, detail="Logo")
    assert service.type is ServiceType.DESIGN


@pytest.mark.parametrize("value, message", [("abc", "número válido"), ("-1", "negativo"), ("", "obligatorios")])
def test_service_value_validation(dash, value, message):
    with pytest.raises(ValidationError, match=message):
        dash.catalog_service.save(type="Soporte", value=value, detail="x")


def test_service_rejects_unknown_type(dash):
    with pytest.raises(ValidationError, match="Tipo de servicio"):
        dash.catalog_service.save(type="Catering", value=1, detail="x")


def test_service_image_limits(dash):
    with pytest.raises(ValidationError, match="Máximo 3"):
        dash.catalog_service.save(type="Soporte", value=1, detail="x", image_urls=["https://a.io/1", "https://a.io/2", "https://a.io/3", "https://a.io/4"])
    with pytest.raises(ValidationError, match="imagen"):
        dash.catalog_service.save(type="Soporte", value=1, detail="x", image_urls=["ftp://a.io/1"])


def test_delete_missing_entities_is_silent(dash):
    dash.client_service.delete("nope")
    dash.catalog_service.delete("nope")
    dash.user_service.delete("nope")
    dash.role_service.delete("nope")
