"""
Ingredient aggregation.

Merges ingredient occurrences from recipes, meal plans or bare name lists
into one line per ingredient name and canonical unit:
- Groups by case-insensitive, trimmed name
- Sums quantities that normalize to the same unit
- Keeps incompatible units as parallel lines (nothing is dropped or coerced)
- Counts distinct contributing recipes per name
- Rounds summed quantities to six decimal places
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Iterable, Optional

from smartlist.exceptions import InvalidShoppingInput
from smartlist.models.recipes import MealPlanItem, PantryItem, Recipe
from smartlist.services.catalog import ShoppingCatalog, get_catalog
from smartlist.services.units import normalize, tidy_quantity, to_decimal

logger = logging.getLogger(__name__)


# ============================================================================
# Data Structures
# ============================================================================

@dataclass(frozen=True)
class IngredientSource:
    """One raw ingredient occurrence fed into the aggregator."""
    name: str
    quantity: Decimal
    unit: str
    recipe_title: Optional[str] = None


@dataclass
class AggregatedIngredient:
    """A merged line: one name in one canonical unit."""
    key: str
    name: str
    quantity: Decimal
    unit: str
    family: Optional[str]
    convertible: bool = True
    recipe_titles: list[str] = field(default_factory=list)
    notes: str = ""

    @property
    def merge_key(self) -> str:
        return self.unit if self.family is None else f"{self.family}:{self.unit}"

    @property
    def recipe_count(self) -> int:
        return max(1, len(self.recipe_titles))


# ============================================================================
# Names
# ============================================================================

def name_key(name: Optional[str]) -> str:
    """Identity key for an ingredient name: trimmed, collapsed, case-folded."""
    if name is None or not name.strip():
        raise InvalidShoppingInput("Ingredient name must not be empty")
    return " ".join(name.split()).casefold()


def display_name(name: str) -> str:
    """First-seen spelling with the first letter capitalised."""
    cleaned = " ".join(name.split())
    return cleaned[:1].upper() + cleaned[1:]


# ============================================================================
# Source Adapters
# ============================================================================

def sources_from_recipes(recipes: Iterable[Recipe]) -> list[IngredientSource]:
    """Flatten recipes into ingredient occurrences."""
    sources = []
    for recipe in recipes:
        for ing in recipe.ingredients:
            sources.append(IngredientSource(ing.name, ing.quantity, ing.unit, recipe.title))
    return sources


def sources_from_meal_plan(entries: Iterable[MealPlanItem]) -> list[IngredientSource]:
    """Flatten meal plan entries, scaling each recipe to the planned servings."""
    sources = []
    for entry in entries:
        recipe = entry.recipe
        base = Decimal(recipe.servings)
        planned = Decimal(entry.servings if entry.servings is not None else recipe.servings)
        for ing in recipe.ingredients:
            sources.append(IngredientSource(
                ing.name,
                to_decimal(ing.quantity) * planned / base,
                ing.unit,
                recipe.title,
            ))
    return sources


def sources_from_names(names: Iterable[Optional[str]]) -> list[IngredientSource]:
    """Bare names become one piece each."""
    sources = []
    for name in names:
        if name is None or not name.strip():
            raise InvalidShoppingInput("Ingredient names must not be empty")
        sources.append(IngredientSource(name, Decimal("1"), "piece"))
    return sources


def flatten(aggregated: dict[str, list[AggregatedIngredient]]) -> list[IngredientSource]:
    """Turn aggregated lines back into sources.

    Each line yields its full quantity under its first recipe and a zero
    quantity for every other recipe, so re-aggregating keeps both the totals
    and the recipe counts.
    """
    sources = []
    for lines in aggregated.values():
        for line in lines:
            titles = line.recipe_titles or [None]
            sources.append(IngredientSource(line.name, line.quantity, line.unit, titles[0]))
            for title in titles[1:]:
                sources.append(IngredientSource(line.name, Decimal("0"), line.unit, title))
    return sources


# ============================================================================
# Aggregation
# ============================================================================

def aggregate(
    sources: Iterable[IngredientSource],
    catalog: Optional[ShoppingCatalog] = None,
) -> dict[str, list[AggregatedIngredient]]:
    """Merge ingredient occurrences by name and canonical unit.

    Returns name key -> lines, in first-seen order of names and, within a
    name, first-seen order of units.
    """
    catalog = catalog or get_catalog()

    grouped: dict[str, list[AggregatedIngredient]] = {}
    titles: dict[str, list[str]] = {}

    for source in sources:
        key = name_key(source.name)
        amount = to_decimal(source.quantity)
        if amount < 0:
            raise InvalidShoppingInput(f"Quantity for '{source.name}' must not be negative")

        normalized = normalize(amount, source.unit, source.name, catalog)
        lines = grouped.setdefault(key, [])
        recipe_titles = titles.setdefault(key, [])

        for line in lines:
            if line.merge_key == normalized.merge_key:
                line.quantity += normalized.quantity
                break
        else:
            lines.append(AggregatedIngredient(
                key=key,
                name=display_name(source.name),
                quantity=normalized.quantity,
                unit=normalized.unit,
                family=normalized.family,
                convertible=normalized.convertible,
            ))

        title = (source.recipe_title or "").strip()
        if title and title not in recipe_titles:
            recipe_titles.append(title)

    for key, lines in grouped.items():
        for line in lines:
            line.quantity = tidy_quantity(line.quantity)
            line.recipe_titles = list(titles[key])

        if len(lines) > 1:
            units = ", ".join(line.unit for line in lines)
            logger.info(f"'{lines[0].name}' uses incompatible units ({units}), keeping separate lines")
            for line in lines:
                line.notes = f"Measured in {line.unit}"

    return grouped


def subtract_pantry(
    aggregated: dict[str, list[AggregatedIngredient]],
    pantry: Iterable[PantryItem],
    catalog: Optional[ShoppingCatalog] = None,
) -> dict[str, list[AggregatedIngredient]]:
    """Remove stock already at home.

    Stock only offsets a line in the same canonical unit. Lines that end up
    fully covered are dropped. The input mapping is left untouched.
    """
    catalog = catalog or get_catalog()

    remaining = {
        key: [replace(line, recipe_titles=list(line.recipe_titles)) for line in lines]
        for key, lines in aggregated.items()
    }

    covered: set[tuple[str, str]] = set()

    for stock in pantry:
        key = name_key(stock.name)
        lines = remaining.get(key)
        if not lines:
            continue

        normalized = normalize(stock.quantity, stock.unit, stock.name, catalog)
        for line in lines:
            if line.merge_key == normalized.merge_key:
                line.quantity = tidy_quantity(max(Decimal("0"), line.quantity - normalized.quantity))
                if line.quantity == 0:
                    covered.add((key, line.merge_key))
                break
        else:
            logger.info(f"Pantry stock of '{stock.name}' is in {normalized.unit}, cannot offset")

    result: dict[str, list[AggregatedIngredient]] = {}
    for key, lines in remaining.items():
        needed = [line for line in lines if (key, line.merge_key) not in covered]
        if not needed:
            logger.info(f"'{lines[0].name}' is fully covered by pantry stock")
            continue
        result[key] = needed

    return result
