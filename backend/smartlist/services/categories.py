"""
Category classification and store-route grouping.

Ingredient names are matched against a priority-ordered keyword rule list;
keywords match whole words with an optional plural ending ("salt" matches
"sea salt" but not "unsalted butter", "egg" matches "eggs" but not
"eggplant"). The first matching rule wins and unmatched names land
in the catch-all category at the end of the route.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Iterable, Optional

from smartlist.models.shopping import ShoppingCategory, ShoppingItem
from smartlist.services.catalog import CategoryInfo, ShoppingCatalog, get_catalog

logger = logging.getLogger(__name__)

ESSENTIAL_PRIORITY = 1
OPTIONAL_PRIORITY = 3


@dataclass(frozen=True)
class Classification:
    """Where an ingredient is bought and how early on the route."""
    category: str
    store_section: str
    priority: int


@lru_cache(maxsize=512)
def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(keyword) + r"(?:e?s)?\b")


def contains_keyword(name: str, keywords: Iterable[str]) -> bool:
    """Whether any keyword appears as a word in the (normalized) name."""
    text = " ".join(name.split()).casefold()
    return any(_keyword_pattern(keyword).search(text) for keyword in keywords)


def matching_keyword(name: str, keywords: Iterable[str]) -> Optional[str]:
    """The longest keyword found in the name, if any."""
    text = " ".join(name.split()).casefold()
    found = [k for k in keywords if _keyword_pattern(k).search(text)]
    return max(found, key=len) if found else None


def classify(name: str, catalog: Optional[ShoppingCatalog] = None) -> Classification:
    """Assign a category, store section and route priority to an ingredient."""
    catalog = catalog or get_catalog()

    category = catalog.catch_all_category
    for rule_category, keywords in catalog.category_rules:
        if contains_keyword(name, keywords):
            category = rule_category
            break
    else:
        logger.info(f"No category rule matches '{name}', filing under {category}")

    info = catalog.category_info(category)
    return Classification(category=info.name, store_section=info.store_section, priority=info.priority)


def category_for(name: str, catalog: Optional[ShoppingCatalog] = None) -> CategoryInfo:
    """Full category metadata for an ingredient name."""
    catalog = catalog or get_catalog()
    return catalog.category_info(classify(name, catalog).category)


def is_essential(name: str, catalog: Optional[ShoppingCatalog] = None) -> bool:
    catalog = catalog or get_catalog()
    return contains_keyword(name, catalog.essential_keywords)


def is_optional(name: str, catalog: Optional[ShoppingCatalog] = None) -> bool:
    catalog = catalog or get_catalog()
    return contains_keyword(name, catalog.optional_keywords)


def item_priority(category_priority: int, essential: bool, optional: bool) -> int:
    """Essential items are urgent, optional ones can wait; otherwise follow the category.

    The two flags are independent; when both are set the item stays essential.
    """
    if essential:
        return ESSENTIAL_PRIORITY
    if optional:
        return OPTIONAL_PRIORITY
    return category_priority


def route_key(info: CategoryInfo) -> tuple[int, str]:
    """Categories are visited by priority, then name."""
    return (info.priority, info.name.casefold())


def catalog_categories(catalog: Optional[ShoppingCatalog] = None) -> list[ShoppingCategory]:
    """All known categories in route order, without items."""
    catalog = catalog or get_catalog()
    infos = sorted(catalog.categories.values(), key=route_key)
    return [_empty_category(info) for info in infos]


def build_categories(
    items: list[ShoppingItem],
    catalog: Optional[ShoppingCatalog] = None,
) -> list[ShoppingCategory]:
    """Bucket item positions by category, in route order.

    Each item index lands in exactly one bucket; within a bucket indices keep
    the order of ``items``.
    """
    catalog = catalog or get_catalog()

    buckets: dict[str, ShoppingCategory] = {}
    for index, item in enumerate(items):
        bucket = buckets.get(item.category)
        if bucket is None:
            bucket = _empty_category(catalog.category_info(item.category))
            buckets[item.category] = bucket
        bucket.item_indices.append(index)
        bucket.category_total += item.estimated_price

    return sorted(buckets.values(), key=lambda c: (c.priority, c.name.casefold()))


def _empty_category(info: CategoryInfo) -> ShoppingCategory:
    return ShoppingCategory(
        name=info.name,
        icon=info.icon,
        color=info.color,
        store_section=info.store_section,
        shopping_order=info.shopping_order,
        priority=info.priority,
        category_total=Decimal("0"),
    )
