"""
Integration tests for the shopping list API.
"""

import pytest
from decimal import Decimal

from smartlist.config import Settings
from smartlist.services.shopping import ShoppingListService, get_shopping_list_service


PASTA = {
    "title": "Tomato Pasta",
    "servings": 4,
    "ingredients": [
        {"name": "Onion", "quantity": "2", "unit": "piece"},
        {"name": "Spaghetti", "quantity": "500", "unit": "g"},
    ],
}

SOUP = {
    "title": "Onion Soup",
    "servings": 2,
    "ingredients": [
        {"name": "onion", "quantity": "3", "unit": "pieces"},
        {"name": "Beef broth", "quantity": "1", "unit": "l"},
    ],
}


@pytest.fixture
def export_dir(app, tmp_path):
    """Route exports to a temp directory for the duration of a test."""
    target = tmp_path / "exports"
    service = ShoppingListService(settings=Settings(export_dir=str(target)))
    app.dependency_overrides[get_shopping_list_service] = lambda: service
    yield target
    app.dependency_overrides.pop(get_shopping_list_service, None)


@pytest.fixture
def generated(client, test_user_id):
    response = client.post(
        "/api/shopping/generate",
        json={"user_id": test_user_id, "recipes": [PASTA, SOUP]},
    )
    assert response.status_code == 200
    return response.json()


class TestGenerateEndpoints:
    """Tests for list generation."""

    @pytest.mark.integration
    def test_generate(self, generated):
        """Should consolidate onions across recipes."""
        onion = next(i for i in generated["items"] if i["name"] == "Onion")
        assert Decimal(onion["quantity"]) == 5
        assert onion["recipe_count"] == 2
        assert generated["total_items"] == 3
        assert generated["recipe_names"] == ["Tomato Pasta", "Onion Soup"]
        assert not generated["is_optimized"]

    @pytest.mark.integration
    def test_generate_cost_matches_items(self, generated):
        """Estimated cost should equal the sum of item prices."""
        total = sum(Decimal(i["estimated_price"]) for i in generated["items"])
        assert Decimal(generated["estimated_cost"]) == total

    @pytest.mark.integration
    def test_categories_reference_items(self, generated):
        """Category indices should point into the item list."""
        indices = sorted(i for c in generated["categories"] for i in c["item_indices"])
        assert indices == list(range(len(generated["items"])))
        assert all(c["item_count"] == len(c["item_indices"]) for c in generated["categories"])

    @pytest.mark.integration
    def test_generate_empty_is_400(self, client, test_user_id):
        """An empty recipe list is a bad request."""
        response = client.post(
            "/api/shopping/generate",
            json={"user_id": test_user_id, "recipes": []},
        )
        assert response.status_code == 400

    @pytest.mark.integration
    def test_generate_invalid_body_is_422(self, client):
        """Missing fields fail validation."""
        response = client.post("/api/shopping/generate", json={"recipes": [PASTA]})
        assert response.status_code == 422

    @pytest.mark.integration
    def test_from_ingredients(self, client, test_user_id):
        """Should build a list from names."""
        response = client.post(
            "/api/shopping/from-ingredients",
            json={"user_id": test_user_id, "ingredient_names": ["Milk", "Bread", "milk"]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total_items"] == 2

    @pytest.mark.integration
    def test_from_ingredients_blank_is_400(self, client, test_user_id):
        """Blank names are a bad request."""
        response = client.post(
            "/api/shopping/from-ingredients",
            json={"user_id": test_user_id, "ingredient_names": ["  "]},
        )
        assert response.status_code == 400

    @pytest.mark.integration
    def test_from_meal_plan(self, client, test_user_id):
        """Should scale the soup to the planned servings."""
        response = client.post(
            "/api/shopping/from-meal-plan",
            json={
                "user_id": test_user_id,
                "meal_plan_items": [
                    {"recipe": PASTA, "planned_date": "2026-10-19"},
                    {"recipe": SOUP, "planned_date": "2026-10-20", "servings": 4, "meal_type": "lunch"},
                ],
            },
        )
        assert response.status_code == 200
        onion = next(i for i in response.json()["items"] if i["name"] == "Onion")
        assert Decimal(onion["quantity"]) == 8


class TestCategoriesEndpoint:
    """Tests for the category catalog."""

    @pytest.mark.integration
    def test_categories(self, client):
        """Should list every category in route order."""
        response = client.get("/api/shopping/categories")
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 9
        assert data[0]["name"] == "Produce"
        assert data[-1]["name"] == "Other"


class TestOptimizeRenderExport:
    """Tests for operations on an existing list."""

    @pytest.mark.integration
    def test_optimize_round_trip(self, client, generated):
        """A posted-back list should come back optimized with the same cost."""
        response = client.post("/api/shopping/optimize", json=generated)
        assert response.status_code == 200
        data = response.json()
        assert data["is_optimized"]
        assert Decimal(data["estimated_cost"]) == Decimal(generated["estimated_cost"])

        again = client.post("/api/shopping/optimize", json=data).json()
        assert [i["name"] for i in again["items"]] == [i["name"] for i in data["items"]]

    @pytest.mark.integration
    def test_render(self, client, generated):
        """Should return the note as plain text."""
        response = client.post("/api/shopping/render", json=generated)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text.startswith("=== Smart Shopping List ===")

    @pytest.mark.integration
    def test_export(self, client, generated, export_dir):
        """Should write a note and return its file name."""
        response = client.post(
            "/api/shopping/export",
            json={"shopping_list": generated, "list_name": "Weekend"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["list_name"] == "Weekend"
        assert (export_dir / data["filename"]).exists()

    @pytest.mark.integration
    def test_export_failure_is_500(self, client, generated, export_dir):
        """I/O failures map to a server error."""
        export_dir.parent.mkdir(parents=True, exist_ok=True)
        export_dir.write_text("not a directory")

        response = client.post("/api/shopping/export", json={"shopping_list": generated})
        assert response.status_code == 500

    @pytest.mark.integration
    def test_render_uncategorized_items_is_422(self, client, generated):
        """Items no category points at would vanish from the note, so the body is refused."""
        body = {**generated, "categories": []}
        response = client.post("/api/shopping/render", json=body)
        assert response.status_code == 422

    @pytest.mark.integration
    def test_render_stale_indices_is_422(self, client, generated):
        """Indices past the end of the item list are a client error, not a crash."""
        body = {**generated, "items": []}
        response = client.post("/api/shopping/render", json=body)
        assert response.status_code == 422

    @pytest.mark.integration
    def test_export_stale_indices_is_422(self, client, generated, export_dir):
        """Export refuses an inconsistent list and writes nothing."""
        body = {**generated, "items": generated["items"][:1]}
        response = client.post("/api/shopping/export", json={"shopping_list": body})
        assert response.status_code == 422
        assert not export_dir.exists() or not any(export_dir.iterdir())
