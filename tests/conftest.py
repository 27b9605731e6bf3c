from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app
from models.users import UserRole

ADMIN_EMAIL = "admin@kitchen.io"
ADMIN_PASSWORD = "Sup3rSecret"
COOK_EMAIL = "cook@kitchen.io"
COOK_PASSWORD = "CookPass1"


def make_settings(**overrides) -> Settings:
    values = dict(
        ENVIRONMENT="test",
        DATABASE_URL="sqlite+aiosqlite://",
        JWT_SECRET_KEY="test-secret",
        PASSWORD_HASH_ROUNDS=4,
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        LOG_LEVEL="WARNING",
        REQUEST_TIMEOUT=0,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client():
    app = create_app(make_settings())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run_in_session(client):
    """Run ``func(session)`` on the application's event loop and return its result"""

    def runner(func):
        async def _call():
            async with client.app.state.db.session() as session:
                return await func(session)

        return client.portal.call(_call)

    return runner


@pytest.fixture
def admin_headers(client):
    response = client.post(
        "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return bearer(response.json()["tokens"]["access_token"])


@pytest.fixture
def user_headers(client, run_in_session):
    auth_service = client.app.state.auth_service
    run_in_session(
        lambda session: auth_service.create_user(
            session, COOK_EMAIL, COOK_PASSWORD, role=UserRole.USER
        )
    )

    response = client.post(
        "/api/admin/login", json={"email": COOK_EMAIL, "password": COOK_PASSWORD}
    )
    assert response.status_code == 200
    return bearer(response.json()["tokens"]["access_token"])


@pytest.fixture
def desserts(client, admin_headers):
    response = client.post(
        "/api/categories",
        json={"name": "Desserts", "description": "Sweet things"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def mains(client, admin_headers):
    response = client.post("/api/categories", json={"name": "Mains"}, headers=admin_headers)
    assert response.status_code == 201
    return response.json()
