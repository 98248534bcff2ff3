"""
Plain-text rendering and note export for shopping lists.
"""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Optional

from smartlist.exceptions import ShoppingListExportError
from smartlist.models.shopping import ShoppingItem, ShoppingListResult
from smartlist.services.categories import ESSENTIAL_PRIORITY, OPTIONAL_PRIORITY
from smartlist.services.pricing import to_cents

logger = logging.getLogger(__name__)

MAX_NAME_ATTEMPTS = 100


# ============================================================================
# Formatting
# ============================================================================

def format_money(amount: Decimal) -> str:
    return f"${to_cents(amount):.2f}"


def format_quantity(quantity: Decimal) -> str:
    """At most two decimals, no trailing zeros ("1.50" -> "1.5", "500" -> "500")."""
    rounded = quantity.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP).normalize()
    return format(rounded, "f")


def format_minutes(duration: timedelta) -> str:
    minutes = (Decimal(str(duration.total_seconds())) / 60).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return f"{minutes} min"


def _priority_marker(item: ShoppingItem) -> str:
    if item.priority <= ESSENTIAL_PRIORITY:
        return "!"
    if item.priority >= OPTIONAL_PRIORITY:
        return "?"
    return " "


def _render_item(item: ShoppingItem) -> list[str]:
    box = "[x]" if item.is_checked else "[ ]"
    lines = [
        f"  {box} {_priority_marker(item)} {item.name} - "
        f"{format_quantity(item.quantity)} {item.unit} - {format_money(item.estimated_price)}"
    ]
    if item.notes:
        lines.append(f"        Notes: {item.notes}")
    if item.substitutions:
        lines.append(f"        Substitutes: {', '.join(item.substitutions)}")
    if item.nutritional_info:
        lines.append(f"        Nutrition: {item.nutritional_info}")
    return lines


def render(result: ShoppingListResult) -> str:
    """Render a list as a plain-text note, grouped along the store route."""
    lines = [
        f"=== {result.list_name or 'Shopping List'} ===",
        f"Generated: {result.generated_at:%Y-%m-%d %H:%M}",
    ]
    if result.recipe_names:
        lines.append(f"Recipes: {', '.join(result.recipe_names)}")
    lines.append(
        f"Items: {result.total_items} | "
        f"Estimated cost: {format_money(result.estimated_cost)} | "
        f"Estimated time: {format_minutes(result.estimated_shopping_time)}"
    )
    if result.is_optimized:
        lines.append("Optimized for store route")

    for category in result.categories:
        lines.append("")
        lines.append(f"{category.icon} {category.name} - {category.store_section}".strip())
        lines.append(
            f"   {format_money(category.category_total)} | {category.item_count} items"
            + (f" | {category.shopping_order}" if category.shopping_order else "")
        )
        for item in result.items_in(category):
            lines.extend(_render_item(item))

    if result.store_suggestions:
        lines.append("")
        lines.append("Store suggestions:")
        lines.extend(f"  - {s}" for s in result.store_suggestions)

    if result.tips:
        lines.append("")
        lines.append("Tips:")
        lines.extend(f"  - {t}" for t in result.tips)

    if result.potential_savings > 0:
        lines.append("")
        lines.append(f"Potential savings: {format_money(result.potential_savings)}")

    return "\n".join(lines) + "\n"


# ============================================================================
# Export
# ============================================================================

def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "shopping-list"


def _write_new_file(directory: Path, stem: str, text: str) -> Path:
    """Create a new file, never overwriting an earlier export."""
    directory.mkdir(parents=True, exist_ok=True)

    for attempt in range(MAX_NAME_ATTEMPTS):
        suffix = "" if attempt == 0 else f"_{attempt + 1}"
        path = directory / f"{stem}{suffix}.txt"
        try:
            with open(path, "x", encoding="utf-8") as f:
                f.write(text)
            return path
        except FileExistsError:
            continue

    raise FileExistsError(f"No free file name for {stem} in {directory}")


async def export_to_notes(
    result: ShoppingListResult,
    list_name: Optional[str],
    export_dir: Path,
) -> str:
    """Write the rendered list to ``export_dir`` and return the file name."""
    name = (list_name or result.list_name or "Shopping List").strip() or "Shopping List"
    text = render(result.model_copy(update={"list_name": name}))
    stem = f"{slugify(name)}_{result.generated_at:%Y%m%d_%H%M%S}"

    try:
        path = await asyncio.to_thread(_write_new_file, Path(export_dir), stem, text)
    except OSError as e:
        logger.error(f"Failed to export shopping list '{name}': {e}")
        raise ShoppingListExportError(f"Could not export shopping list: {e}") from e

    logger.info(f"Exported shopping list '{name}' to {path}")
    return path.name
