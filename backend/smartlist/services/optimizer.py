"""
Shopping list optimization.

Re-merges items that ended up as duplicates (same name and unit, e.g. after
a client edited a list) and reorders everything along the store route.
Optimizing an optimized list changes nothing.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from smartlist.models.shopping import ShoppingItem, ShoppingListResult
from smartlist.services.advisor import BULK_NOTE, bulk_savings, qualifies_for_bulk
from smartlist.services.aggregation import name_key
from smartlist.services.assembly import assemble
from smartlist.services.catalog import ShoppingCatalog, get_catalog
from smartlist.services.categories import route_key

logger = logging.getLogger(__name__)

NOTE_SEPARATOR = "; "


def _union(first: Iterable[str], second: Iterable[str]) -> list[str]:
    merged = []
    for value in [*first, *second]:
        if value and value not in merged:
            merged.append(value)
    return merged


def _merge_into(target: ShoppingItem, other: ShoppingItem) -> None:
    target.quantity += other.quantity
    target.estimated_price += other.estimated_price
    target.substitutions = _union(target.substitutions, other.substitutions)
    target.notes = NOTE_SEPARATOR.join(
        _union(target.notes.split(NOTE_SEPARATOR), other.notes.split(NOTE_SEPARATOR))
    )
    target.nutritional_info = target.nutritional_info or other.nutritional_info
    target.recipe_count = max(target.recipe_count, other.recipe_count)
    target.priority = min(target.priority, other.priority)
    target.is_essential = target.is_essential or other.is_essential
    target.is_optional = target.is_optional or other.is_optional
    target.is_checked = target.is_checked and other.is_checked


def _refresh_bulk(item: ShoppingItem, catalog: ShoppingCatalog) -> None:
    """Re-decide bulk advice from the item's current quantity and price."""
    item.is_bulk_purchase = qualifies_for_bulk(item.quantity, item.unit, item.category, catalog)
    item.bulk_savings = bulk_savings(item.quantity, item.unit, item.category, item.estimated_price, catalog)

    notes = [note for note in item.notes.split(NOTE_SEPARATOR) if note]
    if not item.is_bulk_purchase:
        notes = [note for note in notes if note != BULK_NOTE]
    elif BULK_NOTE not in notes:
        notes.append(BULK_NOTE)
    item.notes = NOTE_SEPARATOR.join(notes)


def merge_duplicates(
    items: Iterable[ShoppingItem],
    catalog: Optional[ShoppingCatalog] = None,
) -> list[ShoppingItem]:
    """Fold items sharing a name and unit into the first one seen.

    Bulk advice is decided again on the merged quantity, so two small packs
    can add up to a bulk buy (and a stale flag is cleared). Returns copies;
    the input items are not modified.
    """
    catalog = catalog or get_catalog()
    merged: dict[tuple[str, str], ShoppingItem] = {}
    for item in items:
        key = (name_key(item.name), item.unit)
        existing = merged.get(key)
        if existing is None:
            merged[key] = item.model_copy(deep=True)
        else:
            logger.debug(f"Merging duplicate '{item.name}' ({item.unit})")
            _merge_into(existing, item)

    for item in merged.values():
        _refresh_bulk(item, catalog)
    return list(merged.values())


def optimize(
    result: ShoppingListResult,
    catalog: Optional[ShoppingCatalog] = None,
) -> ShoppingListResult:
    """Return a new, route-ordered list. ``result`` is left untouched."""
    catalog = catalog or get_catalog()

    items = merge_duplicates(result.items, catalog)
    items.sort(key=lambda item: (
        route_key(catalog.category_info(item.category)),
        item.priority,
        item.name.casefold(),
        item.unit,
    ))

    if len(items) < len(result.items):
        logger.info(f"Optimizer merged {len(result.items) - len(items)} duplicate items")

    return assemble(
        items,
        recipe_names=result.recipe_names,
        list_name=result.list_name,
        generated_at=result.generated_at,
        is_optimized=True,
        catalog=catalog,
    )
