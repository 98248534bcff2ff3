"""Pydantic models for the smartlist API."""

from .recipes import (
    MealType,
    RecipeIngredient,
    Recipe,
    MealPlanItem,
    PantryItem,
)
from .shopping import (
    ShoppingItem,
    ShoppingCategory,
    ShoppingListResult,
    SmartShoppingListRequest,
    IngredientShoppingListRequest,
    MealPlanShoppingListRequest,
    ExportShoppingListRequest,
    ExportShoppingListResponse,
)

__all__ = [
    # Recipes
    "MealType",
    "RecipeIngredient",
    "Recipe",
    "MealPlanItem",
    "PantryItem",
    # Shopping
    "ShoppingItem",
    "ShoppingCategory",
    "ShoppingListResult",
    "SmartShoppingListRequest",
    "IngredientShoppingListRequest",
    "MealPlanShoppingListRequest",
    "ExportShoppingListRequest",
    "ExportShoppingListResponse",
]
