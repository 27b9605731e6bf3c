from __future__ import annotations

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from conftest import make_settings
from core.exceptions import NotFoundError, ValidationError
from main import create_app
from middleware.timeout import TimeoutMiddleware
from schemas.recipe_schemas import CategoryCreate, RecipeCreate, RecipeUpdate
from services.category_service import category_service
from services.recipe_service import recipe_service


def recipe_data(**fields):
    values = dict(title="Cake", ingredients=["flour"], instructions="Bake", category="Desserts")
    values.update(fields)
    return RecipeCreate(**values)


@pytest.fixture
def category(run_in_session):
    return run_in_session(
        lambda s: category_service.create_category(s, CategoryCreate(name="Desserts"))
    )


def test_create_with_missing_category_raises_validation_error(run_in_session):
    with pytest.raises(ValidationError):
        run_in_session(lambda s: recipe_service.create_recipe(s, recipe_data()))


def test_create_accepts_empty_ingredients(run_in_session, category):
    recipe = run_in_session(
        lambda s: recipe_service.create_recipe(s, recipe_data(ingredients=[]))
    )

    assert recipe.id
    assert recipe.ingredients == []
    assert recipe.category_id == category.id


def test_update_unknown_recipe_raises_not_found(run_in_session):
    with pytest.raises(NotFoundError):
        run_in_session(
            lambda s: recipe_service.update_recipe(s, "missing", RecipeUpdate(title="New"))
        )


def test_delete_then_get_raises_not_found(run_in_session, category):
    recipe = run_in_session(lambda s: recipe_service.create_recipe(s, recipe_data()))
    run_in_session(lambda s: recipe_service.delete_recipe(s, recipe.id))

    with pytest.raises(NotFoundError):
        run_in_session(lambda s: recipe_service.get_recipe(s, recipe.id))


@pytest.mark.parametrize("value", [0, 6, -1, True])
def test_rate_rejects_values_outside_range(run_in_session, category, value):
    recipe = run_in_session(lambda s: recipe_service.create_recipe(s, recipe_data()))

    with pytest.raises(ValidationError):
        run_in_session(lambda s: recipe_service.rate_recipe(s, recipe.id, value))


def test_list_filtered_by_category_name(run_in_session, category):
    run_in_session(lambda s: recipe_service.create_recipe(s, recipe_data(title="Pie")))

    recipes = run_in_session(lambda s: recipe_service.list_recipes(s, category="Desserts"))

    assert [recipe.title for recipe in recipes] == ["Pie"]


def test_slow_requests_time_out():
    app = FastAPI()
    app.add_middleware(TimeoutMiddleware, timeout=0.05)

    @app.get("/slow")
    async def slow():
        await asyncio.sleep(0.5)
        return {"done": True}

    @app.get("/fast")
    async def fast():
        return {"done": True}

    with TestClient(app) as client:
        slow_response = client.get("/slow")
        fast_response = client.get("/fast")

    assert slow_response.status_code == 504
    assert slow_response.json()["error"] == "TimeoutError"
    assert fast_response.json() == {"done": True}


def test_completed_requests_log_the_user_and_mask_credentials(client, admin_headers):
    with capture_logs() as logs:
        response = client.put(
            "/api/recipes/missing", json={"title": "Ghost"}, headers=admin_headers
        )

    assert response.status_code == 404
    completed = [entry for entry in logs if entry["event"] == "Request completed"]
    assert len(completed) == 1
    assert completed[0]["status_code"] == 404
    assert completed[0]["user_id"]
    assert completed[0]["headers"]["authorization"] == "***MASKED***"


def test_unexpected_errors_use_the_server_error_shape():
    app = create_app(make_settings())

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "error": "ServerError",
        "message": "An unexpected error occurred",
    }
