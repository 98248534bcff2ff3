"""
Price and shopping-time estimates.

Prices come from a static per-(category, canonical unit) rate table. Items
without a rate get a fixed default price, never zero, so totals and savings
stay meaningful.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from smartlist.services.catalog import ShoppingCatalog, get_catalog

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def estimate_price(
    quantity: Decimal,
    unit: str,
    category: str,
    catalog: Optional[ShoppingCatalog] = None,
) -> Decimal:
    """Estimated shelf price for ``quantity`` of ``unit`` in ``category``."""
    catalog = catalog or get_catalog()

    rate = catalog.price_rates.get((category, unit))
    if rate is None:
        logger.debug(f"No price rate for {category}/{unit}, using default price")
        return to_cents(catalog.default_item_price)

    return to_cents(max(rate * quantity, catalog.minimum_item_price))


def estimate_time(
    item_count: int,
    category_count: int,
    catalog: Optional[ShoppingCatalog] = None,
) -> timedelta:
    """Time in store: a base, a little per item and a walk per store section.

    Never below the configured minimum trip length.
    """
    if item_count < 0 or category_count < 0:
        raise ValueError("Item and category counts must not be negative")

    catalog = catalog or get_catalog()

    minutes = (
        catalog.base_shopping_minutes
        + item_count * catalog.minutes_per_item
        + category_count * catalog.minutes_per_section
    )
    return timedelta(minutes=max(catalog.minimum_shopping_minutes, minutes))
