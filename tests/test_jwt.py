from datetime import datetime, timedelta, timezone

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from jose import jwt
import pytest

from backend.auth.jwt import (
    create_access_token,
    decode_token,
    get_current_role,
    require_feature,
    require_menu_access,
    require_permission,
    require_roles,
)
from backend.config import settings
from backend.constants import UserRole
from backend.core.errors import InvalidRoleError, register_exception_handlers


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/users")
    def manage_users(_: object = Depends(require_permission("settings.users"))):
        return {"ok": True}

    @app.get("/reports")
    def reports_page(_: object = Depends(require_menu_access("reports"))):
        return {"ok": True}

    @app.get("/tenants/all")
    def all_tenants(_: object = Depends(require_feature("canViewAllTenants"))):
        return {"ok": True}

    @app.get("/staff")
    def staff_only(_: object = Depends(require_roles("landlord", "caretaker"))):
        return {"ok": True}

    return app


def _as(role: UserRole):
    return lambda: role


def _in_one_hour() -> datetime:
    return datetime.now(timezone.utc) + timedelta(hours=1)


def test_token_carries_role():
    token = create_access_token("user-7", "caretaker")
    payload = decode_token(token)
    assert payload["sub"] == "user-7"
    assert payload["role"] == "caretaker"
    assert payload["type"] == "access"


def test_token_for_unknown_role_is_refused():
    with pytest.raises(InvalidRoleError):
        create_access_token("user-7", "owner")


def test_dependency_factories_reject_unknown_ids():
    with pytest.raises(ValueError):
        require_permission("payments.colect")
    with pytest.raises(ValueError):
        require_menu_access("billing")
    with pytest.raises(ValueError):
        require_feature("canDoAnything")
    with pytest.raises(InvalidRoleError):
        require_roles("admin")


def test_permission_route_requires_settings_users():
    app = _build_app()
    client = TestClient(app)

    app.dependency_overrides[get_current_role] = lambda: UserRole.CARETAKER
    response = client.get("/users")
    assert response.status_code == 403

    app.dependency_overrides[get_current_role] = lambda: UserRole.LANDLORD
    response = client.get("/users")
    assert response.status_code == 200


def test_menu_route_allows_landlord_only():
    app = _build_app()
    client = TestClient(app)

    for role, expected in ((UserRole.TENANT, 403), (UserRole.CARETAKER, 403), (UserRole.LANDLORD, 200)):
        app.dependency_overrides[get_current_role] = _as(role)
        assert client.get("/reports").status_code == expected


def test_feature_route_denies_tenant():
    app = _build_app()
    client = TestClient(app)

    app.dependency_overrides[get_current_role] = lambda: UserRole.TENANT
    assert client.get("/tenants/all").status_code == 403

    app.dependency_overrides[get_current_role] = lambda: UserRole.CARETAKER
    assert client.get("/tenants/all").status_code == 200


def test_role_route_allows_staff():
    app = _build_app()
    client = TestClient(app)

    app.dependency_overrides[get_current_role] = lambda: UserRole.TENANT
    assert client.get("/staff").status_code == 403

    app.dependency_overrides[get_current_role] = lambda: UserRole.CARETAKER
    assert client.get("/staff").status_code == 200


def test_missing_or_invalid_token_is_unauthorized():
    client = TestClient(_build_app())

    assert client.get("/users").status_code == 401
    response = client.get("/users", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_refresh_style_token_is_rejected():
    token = jwt.encode(
        {"sub": "user-1", "role": "landlord", "type": "refresh", "exp": _in_one_hour()},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    client = TestClient(_build_app())

    response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_with_unknown_role_is_forbidden():
    token = jwt.encode(
        {"sub": "user-1", "role": "superuser", "type": "access", "exp": _in_one_hour()},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    client = TestClient(_build_app())

    response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    assert response.json()["detail"] == "Operation not permitted for your role"


def test_session_cookie_is_accepted():
    client = TestClient(_build_app())
    client.cookies.set(settings.session_cookie_name, create_access_token("user-1", "landlord"))

    assert client.get("/users").status_code == 200


def test_token_without_expiry_is_rejected():
    token = jwt.encode({"sub": "user-1", "role": "landlord"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    client = TestClient(_build_app())

    response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_expired_token_is_rejected():
    token = create_access_token("user-1", "landlord", expires_minutes=-5)
    client = TestClient(_build_app())

    response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
