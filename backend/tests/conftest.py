"""
Pytest configuration and shared fixtures.

Fixtures defined here are available to all tests.
"""

import os
import sys
import pytest
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add backend to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Set test environment
os.environ["TESTING"] = "true"


# =============================================================================
# App Fixtures
# =============================================================================


@pytest.fixture
def app():
    """FastAPI test application."""
    from smartlist.main import app
    return app


@pytest.fixture
def client(app):
    """Sync test client for API tests (runs the lifespan)."""
    from fastapi.testclient import TestClient
    with TestClient(app) as client:
        yield client


@pytest.fixture
async def async_client(app):
    """Async test client for API tests."""
    from httpx import AsyncClient, ASGITransport
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def catalog():
    """Shared read-only catalog."""
    from smartlist.services.catalog import get_catalog
    return get_catalog()


@pytest.fixture
def settings(tmp_path):
    """Settings with exports going to a temp directory."""
    from smartlist.config import Settings
    return Settings(export_dir=str(tmp_path / "exports"))


@pytest.fixture
def service(catalog, settings):
    """Shopping list service wired to test settings."""
    from smartlist.services.shopping import ShoppingListService
    return ShoppingListService(catalog=catalog, settings=settings)


@pytest.fixture
def test_user_id():
    """Test user ID."""
    return "test-user-00000000-0000-0000-0000-000000000000"


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def pasta_recipe():
    """Pasta with onion, garlic and tomatoes."""
    from smartlist.models import Recipe, RecipeIngredient
    return Recipe(
        id=1,
        title="Tomato Pasta",
        servings=4,
        ingredients=[
            RecipeIngredient(name="Onion", quantity=Decimal("2"), unit="piece"),
            RecipeIngredient(name="Garlic", quantity=Decimal("3"), unit="clove"),
            RecipeIngredient(name="Spaghetti", quantity=Decimal("500"), unit="g"),
            RecipeIngredient(name="Tomatoes", quantity=Decimal("400"), unit="g"),
        ],
    )


@pytest.fixture
def soup_recipe():
    """Onion soup sharing onions with the pasta."""
    from smartlist.models import Recipe, RecipeIngredient
    return Recipe(
        id=2,
        title="Onion Soup",
        servings=2,
        ingredients=[
            RecipeIngredient(name="onion", quantity=Decimal("3"), unit="pieces"),
            RecipeIngredient(name="Butter", quantity=Decimal("50"), unit="g"),
            RecipeIngredient(name="Beef broth", quantity=Decimal("1"), unit="l"),
        ],
    )


@pytest.fixture
def sample_meal_plan(pasta_recipe, soup_recipe):
    """Two planned meals, the soup doubled."""
    from smartlist.models import MealPlanItem, MealType
    return [
        MealPlanItem(recipe=pasta_recipe, planned_date=date(2026, 10, 19)),
        MealPlanItem(
            recipe=soup_recipe,
            planned_date=date(2026, 10, 20),
            servings=4,
            meal_type=MealType.LUNCH,
        ),
    ]
