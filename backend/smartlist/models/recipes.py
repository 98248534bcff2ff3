"""Recipe input models consumed by the shopping-list pipeline."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MealType(str, Enum):
    """Meal slot within a planned day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class RecipeIngredient(BaseModel):
    """A single ingredient line of a recipe."""

    name: str
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit: str = "piece"
    notes: Optional[str] = None


class Recipe(BaseModel):
    """An already-loaded recipe with its ingredient lines."""

    id: Optional[int] = None
    title: str
    servings: int = Field(default=4, ge=1)  # Base serving count the quantities are written for
    ingredients: list[RecipeIngredient] = Field(default_factory=list)


class MealPlanItem(BaseModel):
    """A recipe planned for a specific day and meal."""

    recipe: Recipe
    planned_date: date
    servings: Optional[int] = Field(default=None, ge=1)  # None = cook the recipe as written
    meal_type: MealType = MealType.DINNER


class PantryItem(BaseModel):
    """Stock the user already has at home."""

    name: str
    quantity: Decimal = Field(default=Decimal("0"), ge=0)
    unit: str = "piece"
