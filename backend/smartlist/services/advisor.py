"""Bulk-purchase, substitution and shopping-note advice for aggregated items."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_DOWN, Decimal
from typing import Iterable, Optional

from smartlist.models.shopping import ShoppingItem
from smartlist.services.catalog import ShoppingCatalog, get_catalog
from smartlist.services.categories import contains_keyword, matching_keyword
from smartlist.services.pricing import CENT

logger = logging.getLogger(__name__)

BULK_NOTE = "Bulk purchase recommended"


@dataclass(frozen=True)
class Advice:
    """Advisory fields attached to a shopping item."""
    is_bulk_purchase: bool = False
    bulk_savings: Decimal = Decimal("0")
    substitutions: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    nutritional_info: str = ""


def qualifies_for_bulk(
    quantity: Decimal,
    unit: str,
    category: str,
    catalog: Optional[ShoppingCatalog] = None,
) -> bool:
    """Whether the quantity crosses the staple category's bulk threshold."""
    catalog = catalog or get_catalog()

    rule = catalog.bulk_rules.get(category)
    if rule is None:
        return False

    threshold = rule.thresholds.get(unit)
    return threshold is not None and quantity > threshold


def bulk_savings(
    quantity: Decimal,
    unit: str,
    category: str,
    estimated_price: Decimal,
    catalog: Optional[ShoppingCatalog] = None,
) -> Decimal:
    """Savings from buying a larger pack, or zero when the item doesn't qualify.

    Rounded down to cents and capped at the item price.
    """
    catalog = catalog or get_catalog()

    if not qualifies_for_bulk(quantity, unit, category, catalog):
        return Decimal("0")

    rate = catalog.bulk_rules[category].discount_rate
    savings = (estimated_price * rate).quantize(CENT, rounding=ROUND_DOWN)
    return max(Decimal("0"), min(savings, estimated_price))


def substitutions_for(name: str, catalog: Optional[ShoppingCatalog] = None) -> list[str]:
    """Alternatives for an ingredient; exact name first, then the longest keyword."""
    catalog = catalog or get_catalog()
    key = " ".join(name.split()).casefold()

    alternatives = catalog.substitutions.get(key)
    if alternatives is None:
        keyword = matching_keyword(key, catalog.substitutions.keys())
        alternatives = catalog.substitutions[keyword] if keyword else ()
    return list(alternatives)


def shopping_hints(name: str, catalog: Optional[ShoppingCatalog] = None) -> list[str]:
    catalog = catalog or get_catalog()
    return [hint for keyword, hint in catalog.shopping_hints if contains_keyword(name, (keyword,))]


def nutrition_highlight(name: str, catalog: Optional[ShoppingCatalog] = None) -> str:
    catalog = catalog or get_catalog()
    keyword = matching_keyword(name, catalog.nutrition_highlights.keys())
    return catalog.nutrition_highlights[keyword] if keyword else ""


def advise(
    name: str,
    quantity: Decimal,
    unit: str,
    category: str,
    estimated_price: Decimal,
    catalog: Optional[ShoppingCatalog] = None,
) -> Advice:
    """Everything the advisor has to say about one aggregated item."""
    catalog = catalog or get_catalog()

    bulk = qualifies_for_bulk(quantity, unit, category, catalog)
    savings = bulk_savings(quantity, unit, category, estimated_price, catalog)
    alternatives = substitutions_for(name, catalog)

    notes = shopping_hints(name, catalog)
    if bulk:
        notes.append(BULK_NOTE)
    if estimated_price > catalog.expensive_item_price and alternatives:
        notes.append(f"Consider: {', '.join(alternatives[:2])}")

    return Advice(
        is_bulk_purchase=bulk,
        bulk_savings=savings,
        substitutions=alternatives,
        notes=notes,
        nutritional_info=nutrition_highlight(name, catalog),
    )


def potential_savings(items: Iterable[ShoppingItem]) -> Decimal:
    return sum((item.bulk_savings for item in items), Decimal("0"))
