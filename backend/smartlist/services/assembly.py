"""
Shopping list assembly.

Turns an ordered item list into a complete ``ShoppingListResult``: route
categories, cost and savings totals, time estimate, store suggestions and
tips. Everything derived here is a pure function of the items, so
assembling the same items twice gives equal results.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from smartlist.models.shopping import ShoppingCategory, ShoppingItem, ShoppingListResult
from smartlist.services.advisor import potential_savings
from smartlist.services.catalog import ShoppingCatalog, get_catalog
from smartlist.services.categories import build_categories
from smartlist.services.pricing import estimate_time

logger = logging.getLogger(__name__)

LARGE_LIST_ITEMS = 10


def build_store_suggestions(
    categories: list[ShoppingCategory],
    catalog: Optional[ShoppingCatalog] = None,
) -> list[str]:
    """Route advice for the sections this list actually visits."""
    catalog = catalog or get_catalog()
    if not categories:
        return []

    suggestions = ["Suggested route: " + " -> ".join(c.name for c in categories)]
    for category in categories:
        hint = catalog.store_suggestions.get(category.name)
        if hint:
            suggestions.append(hint)
    suggestions.append("Don't forget to check expiration dates")
    return suggestions


def build_tips(
    items: list[ShoppingItem],
    recipe_count: int,
    savings: Decimal,
) -> list[str]:
    """General shopping tips for this list."""
    tips = []
    if recipe_count > 0:
        tips.append(f"Shopping for {recipe_count} recipe{'s' if recipe_count != 1 else ''}")

    tips.append("Shop early in the morning for the best selection")
    tips.append("Compare unit prices and look for store brands")

    categories = {item.category for item in items}
    if "Protein" in categories:
        tips.append("Pick up meat and fish last so they stay cold")
    if "Produce" in categories:
        tips.append("Choose seasonal produce for better taste and price")
    if len(items) > LARGE_LIST_ITEMS:
        tips.append("Grab a cart, this is a big trip")
    if savings > 0:
        tips.append(f"Buying in bulk could save about ${savings:.2f}")
    return tips


def assemble(
    items: list[ShoppingItem],
    recipe_names: list[str],
    list_name: str,
    generated_at: datetime,
    is_optimized: bool = False,
    catalog: Optional[ShoppingCatalog] = None,
) -> ShoppingListResult:
    """Build the full result around an already ordered item list."""
    catalog = catalog or get_catalog()

    categories = build_categories(items, catalog)
    savings = potential_savings(items)
    logger.debug(f"Assembled '{list_name}': {len(items)} items in {len(categories)} categories")

    return ShoppingListResult(
        items=items,
        total_items=len(items),
        categories=categories,
        estimated_cost=sum((item.estimated_price for item in items), Decimal("0")),
        potential_savings=savings,
        estimated_shopping_time=estimate_time(len(items), len(categories), catalog),
        store_suggestions=build_store_suggestions(categories, catalog),
        tips=build_tips(items, len(recipe_names), savings),
        recipe_names=list(recipe_names),
        generated_at=generated_at,
        list_name=list_name,
        is_optimized=is_optimized,
    )
