"""
Smart shopping list service.

Generates consolidated, categorized and priced shopping lists from recipes,
meal plans or plain ingredient names:
- Aggregates ingredients across recipes with unit normalization
- Optionally subtracts pantry stock
- Classifies items into store categories and orders them by route
- Estimates prices, bulk savings and time in store
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from smartlist.config import Settings, get_settings
from smartlist.exceptions import InvalidShoppingInput
from smartlist.models.recipes import MealPlanItem, PantryItem, Recipe
from smartlist.models.shopping import ShoppingCategory, ShoppingItem, ShoppingListResult
from smartlist.services.advisor import advise
from smartlist.services.aggregation import (
    AggregatedIngredient,
    IngredientSource,
    aggregate,
    sources_from_meal_plan,
    sources_from_names,
    sources_from_recipes,
    subtract_pantry,
)
from smartlist.services.assembly import assemble
from smartlist.services.catalog import ShoppingCatalog, get_catalog
from smartlist.services.categories import (
    catalog_categories,
    classify,
    is_essential,
    is_optional,
    item_priority,
)
from smartlist.services.export import export_to_notes
from smartlist.services.optimizer import optimize
from smartlist.services.pricing import estimate_price

logger = logging.getLogger(__name__)


def _distinct_titles(titles: Iterable[Optional[str]]) -> list[str]:
    names = []
    for title in titles:
        title = (title or "").strip()
        if title and title not in names:
            names.append(title)
    return names


class ShoppingListService:
    """Builds, optimizes and exports shopping lists."""

    def __init__(
        self,
        catalog: Optional[ShoppingCatalog] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.catalog = catalog or get_catalog()

    # =========================================================================
    # Generation
    # =========================================================================

    async def generate_smart_shopping_list(
        self,
        recipes: list[Recipe],
        user_id: str,
        pantry: Optional[list[PantryItem]] = None,
    ) -> ShoppingListResult:
        """Consolidated list for a set of recipes."""
        if not recipes:
            raise InvalidShoppingInput("Select at least one recipe to build a shopping list")

        logger.info(f"Generating shopping list for user {str(user_id)[:8]} from {len(recipes)} recipes")

        result = self.build(
            sources_from_recipes(recipes),
            recipe_names=_distinct_titles(r.title for r in recipes),
            pantry=pantry,
        )

        logger.info(
            f"Generated shopping list: {result.total_items} items in "
            f"{len(result.categories)} categories, est. ${result.estimated_cost}"
        )
        return result

    async def generate_shopping_list_from_ingredients(
        self,
        ingredient_names: list[str],
        user_id: str,
    ) -> ShoppingListResult:
        """List from bare ingredient names, one piece each."""
        if not ingredient_names:
            raise InvalidShoppingInput("Provide at least one ingredient name")

        logger.info(f"Generating shopping list for user {str(user_id)[:8]} from {len(ingredient_names)} ingredients")
        return self.build(sources_from_names(ingredient_names), recipe_names=[])

    async def generate_shopping_list_from_meal_plan(
        self,
        meal_plan_items: list[MealPlanItem],
        user_id: str,
        pantry: Optional[list[PantryItem]] = None,
    ) -> ShoppingListResult:
        """List for a meal plan, with each recipe scaled to its planned servings."""
        if not meal_plan_items:
            raise InvalidShoppingInput("The meal plan has no entries")

        logger.info(f"Generating shopping list for user {str(user_id)[:8]} from {len(meal_plan_items)} planned meals")

        return self.build(
            sources_from_meal_plan(meal_plan_items),
            recipe_names=_distinct_titles(entry.recipe.title for entry in meal_plan_items),
            pantry=pantry,
        )

    def build(
        self,
        sources: list[IngredientSource],
        recipe_names: list[str],
        pantry: Optional[list[PantryItem]] = None,
        list_name: Optional[str] = None,
    ) -> ShoppingListResult:
        """Run the pipeline: aggregate, subtract pantry, classify, price, advise, assemble."""
        aggregated = aggregate(sources, self.catalog)
        if pantry:
            aggregated = subtract_pantry(aggregated, pantry, self.catalog)

        items = [self._to_item(line) for lines in aggregated.values() for line in lines]

        return assemble(
            items,
            recipe_names=recipe_names,
            list_name=list_name or self.settings.default_list_name,
            generated_at=datetime.utcnow(),
            catalog=self.catalog,
        )

    def _to_item(self, line: AggregatedIngredient) -> ShoppingItem:
        classification = classify(line.name, self.catalog)
        essential = is_essential(line.name, self.catalog)
        optional = is_optional(line.name, self.catalog)

        price = estimate_price(line.quantity, line.unit, classification.category, self.catalog)
        advice = advise(line.name, line.quantity, line.unit, classification.category, price, self.catalog)

        notes = [line.notes] if line.notes else []
        notes.extend(advice.notes)

        return ShoppingItem(
            name=line.name,
            quantity=line.quantity,
            unit=line.unit,
            category=classification.category,
            store_section=classification.store_section,
            priority=item_priority(classification.priority, essential, optional),
            is_essential=essential,
            is_optional=optional,
            estimated_price=price,
            notes="; ".join(notes),
            substitutions=advice.substitutions,
            nutritional_info=advice.nutritional_info,
            is_bulk_purchase=advice.is_bulk_purchase,
            bulk_savings=advice.bulk_savings,
            recipe_count=line.recipe_count,
        )

    # =========================================================================
    # Categories, Optimization, Export
    # =========================================================================

    async def get_shopping_categories(self) -> list[ShoppingCategory]:
        """Every known store category in route order."""
        return catalog_categories(self.catalog)

    async def optimize_shopping_list(self, shopping_list: ShoppingListResult) -> ShoppingListResult:
        return optimize(shopping_list, self.catalog)

    async def export_shopping_list_to_notes(
        self,
        shopping_list: ShoppingListResult,
        list_name: Optional[str] = None,
    ) -> str:
        """Write the list as a plain-text note; returns the file name."""
        return await export_to_notes(shopping_list, list_name, Path(self.settings.export_dir))


# Singleton
_shopping_list_service: Optional[ShoppingListService] = None


def get_shopping_list_service() -> ShoppingListService:
    """Get shopping list service singleton."""
    global _shopping_list_service
    if _shopping_list_service is None:
        _shopping_list_service = ShoppingListService()
    return _shopping_list_service
