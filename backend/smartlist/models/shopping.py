"""Shopping list Pydantic models."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from smartlist.models.recipes import MealPlanItem, PantryItem, Recipe


class ShoppingItem(BaseModel):
    """One consolidated purchasable entry."""

    # Identification
    name: str
    quantity: Decimal = Field(default=Decimal("0"), ge=0)
    unit: str = "piece"

    # Categorization
    category: str = "Other"
    store_section: str = ""
    priority: int = 2  # 1 = essential, 2 = normal, 3 = optional
    is_essential: bool = False
    is_optional: bool = False

    # Price estimate
    estimated_price: Decimal = Field(default=Decimal("0"), ge=0)

    # Advisory
    notes: str = ""
    substitutions: list[str] = Field(default_factory=list)
    nutritional_info: str = ""
    is_bulk_purchase: bool = False
    bulk_savings: Decimal = Field(default=Decimal("0"), ge=0)

    # Which recipes need this
    recipe_count: int = Field(default=1, ge=1)

    # Mutable by the shopper after generation
    is_checked: bool = False


class ShoppingCategory(BaseModel):
    """A store section grouping items of the same category.

    Items are referenced by their position in the owning
    ``ShoppingListResult.items`` list, so a checked item is seen the same
    way through the flat list and through its category.
    """

    name: str
    icon: str = ""
    color: str = ""
    store_section: str = ""
    shopping_order: str = ""  # Navigation hint for this stop on the route
    priority: int = 3  # Lower = visited first

    item_indices: list[int] = Field(default_factory=list)
    category_total: Decimal = Decimal("0")

    @computed_field
    @property
    def item_count(self) -> int:
        return len(self.item_indices)


class ShoppingListResult(BaseModel):
    """Complete generated shopping list."""

    # Items
    items: list[ShoppingItem] = Field(default_factory=list)
    total_items: int = 0

    # Organized by store route
    categories: list[ShoppingCategory] = Field(default_factory=list)

    # Summary
    estimated_cost: Decimal = Decimal("0")
    potential_savings: Decimal = Decimal("0")
    estimated_shopping_time: timedelta = timedelta(0)

    # Advisory
    store_suggestions: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)

    # Generation info
    recipe_names: list[str] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    list_name: str = ""
    is_optimized: bool = False

    @model_validator(mode="after")
    def _categories_cover_items(self) -> "ShoppingListResult":
        # Every item sits in exactly one category bucket
        indices = sorted(i for category in self.categories for i in category.item_indices)
        if indices != list(range(len(self.items))):
            raise ValueError(
                f"Category item_indices must reference each of the {len(self.items)} items exactly once"
            )
        return self

    def items_in(self, category: ShoppingCategory) -> list[ShoppingItem]:
        """Resolve a category's item references against this list."""
        return [self.items[i] for i in category.item_indices]

    def check_item(self, index: int, checked: bool = True) -> ShoppingItem:
        """Tick an item off (or back on). Totals are unaffected."""
        item = self.items[index]
        item.is_checked = checked
        return item


# ============================================================================
# API Request / Response Models
# ============================================================================


class SmartShoppingListRequest(BaseModel):
    """Request to build a list from a set of recipes."""

    user_id: str
    recipes: list[Recipe]
    pantry: Optional[list[PantryItem]] = None


class IngredientShoppingListRequest(BaseModel):
    """Request to build a list from bare ingredient names."""

    user_id: str
    ingredient_names: list[str]


class MealPlanShoppingListRequest(BaseModel):
    """Request to build a list from a meal plan."""

    user_id: str
    meal_plan_items: list[MealPlanItem]
    pantry: Optional[list[PantryItem]] = None


class ExportShoppingListRequest(BaseModel):
    """Request to export a list as a plain-text note."""

    shopping_list: ShoppingListResult
    list_name: Optional[str] = None


class ExportShoppingListResponse(BaseModel):
    """Result of a successful export."""

    filename: str
    list_name: str
