from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, bearer, make_settings
from main import create_app


def login(client, email=ADMIN_EMAIL, password=ADMIN_PASSWORD):
    return client.post("/api/admin/login", json={"email": email, "password": password})


def test_login_with_wrong_password_is_rejected(client):
    response = login(client, password="not-the-password")

    assert response.status_code == 401
    assert response.json() == {
        "error": "AuthenticationError",
        "message": "Invalid email or password",
    }


def test_login_with_unknown_email_is_rejected(client):
    response = login(client, email="nobody@kitchen.io")

    assert response.status_code == 401


def test_login_returns_a_token(client):
    response = login(client)

    assert response.status_code == 200
    body = response.json()
    assert body["tokens"]["access_token"]
    assert body["tokens"]["token_type"] == "bearer"
    assert body["tokens"]["expires_in"] == 30 * 60
    assert body["user"]["email"] == ADMIN_EMAIL
    assert body["user"]["role"] == "admin"
    assert "password_hash" not in body["user"]


def test_details_require_a_token(client):
    login(client)

    response = client.get("/api/admin/details")

    assert response.status_code == 401
    assert response.json()["error"] == "AuthenticationError"


def test_details_return_the_current_admin(client, admin_headers):
    response = client.get("/api/admin/details", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == ADMIN_EMAIL
    assert body["role"] == "admin"
    assert body["last_login_at"] is not None


def test_details_reject_non_admins(client, user_headers):
    response = client.get("/api/admin/details", headers=user_headers)

    assert response.status_code == 403
    assert response.json()["error"] == "AuthorizationError"


def test_tampered_token_is_rejected(client, admin_headers):
    token = admin_headers["Authorization"].split(" ", 1)[1]

    response = client.get("/api/admin/details", headers=bearer(token[:-4] + "abcd"))

    assert response.status_code == 401


def test_expired_token_is_rejected(client, admin_headers):
    admin = client.get("/api/admin/details", headers=admin_headers).json()
    token = client.app.state.auth_service.create_access_token(
        {"sub": admin["id"], "role": "admin"}, expires_delta=timedelta(minutes=-1)
    )

    response = client.get("/api/admin/details", headers=bearer(token))

    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


def test_token_for_deleted_account_is_rejected(client):
    token = client.app.state.auth_service.create_access_token({"sub": "no-such-user"})

    response = client.get("/api/admin/details", headers=bearer(token))

    assert response.status_code == 401


def test_admin_is_seeded_once(run_in_session, client):
    auth_service = client.app.state.auth_service

    first = run_in_session(lambda s: auth_service.ensure_admin(s, ADMIN_EMAIL, "ignored"))
    second = run_in_session(lambda s: auth_service.ensure_admin(s, ADMIN_EMAIL, "ignored"))

    assert first.id == second.id
    assert first.is_admin


def test_password_is_stored_hashed(run_in_session, client):
    auth_service = client.app.state.auth_service

    admin = run_in_session(lambda s: auth_service.get_user_by_email(s, ADMIN_EMAIL))

    assert admin.password_hash != ADMIN_PASSWORD
    assert auth_service.verify_password(ADMIN_PASSWORD, admin.password_hash)


def test_unreachable_database_aborts_startup():
    app = create_app(make_settings(DATABASE_URL="sqlite+aiosqlite:////nonexistent-dir/recipes.db"))

    with pytest.raises(Exception):
        with TestClient(app):
            pass


def test_health_and_root(client):
    assert client.get("/").json()["message"] == "Welcome to the Recipe App!"
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/health/ready").json()["database"] == "connected"


def test_unknown_route_uses_error_shape(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json()["error"] == "NotFoundError"
    assert "X-Request-ID" in response.headers
