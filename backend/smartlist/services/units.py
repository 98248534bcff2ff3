"""
Unit normalization.

Maps unit spellings onto one canonical unit per measurement family
(mass -> gram, volume -> milliliter, count -> piece). Quantities are
converted within a family only; there is no density table, so grams and
cups of the same ingredient stay apart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from smartlist.services.catalog import COUNT, ShoppingCatalog, get_catalog

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

# Aggregated quantities are kept to six decimal places
QUANTITY_STEP = Decimal("0.000001")


@dataclass(frozen=True)
class NormalizedQuantity:
    """A quantity expressed in its canonical unit.

    ``convertible`` is False when the unit is not in the synonym table; the
    unit is then passed through untouched (trimmed and lower-cased) and
    ``family`` is None.
    """
    quantity: Decimal
    unit: str
    family: Optional[str]
    convertible: bool = True

    @property
    def merge_key(self) -> str:
        """Entries with equal merge keys may be summed."""
        return self.unit if self.family is None else f"{self.family}:{self.unit}"


def to_decimal(value: Optional[Number]) -> Decimal:
    """Coerce a quantity to Decimal without float noise."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def tidy_quantity(value: Decimal) -> Decimal:
    """Round off division noise and drop trailing zeros (1.000000 -> 1)."""
    rounded = value.quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP)
    if rounded == rounded.to_integral_value():
        return rounded.quantize(Decimal("1"))
    return rounded.normalize()


def clean_unit(unit: Optional[str]) -> str:
    """Lower-case, trim and collapse a unit spelling ("Tbsp." -> "tbsp")."""
    if not unit:
        return ""
    return " ".join(unit.strip().lower().rstrip(".").split())


def normalize(
    quantity: Optional[Number],
    unit: Optional[str],
    ingredient_name: str = "",
    catalog: Optional[ShoppingCatalog] = None,
) -> NormalizedQuantity:
    """Convert ``quantity unit`` into its family's canonical unit.

    A blank unit counts as pieces, matching the recipe data default.
    """
    catalog = catalog or get_catalog()
    amount = to_decimal(quantity)
    token = clean_unit(unit)

    if not token:
        return NormalizedQuantity(amount, catalog.canonical_units[COUNT], COUNT)

    entry = catalog.unit_synonyms.get(token)
    if entry is None:
        logger.debug(f"Unit '{token}' for '{ingredient_name}' is not convertible, keeping as-is")
        return NormalizedQuantity(amount, token, None, convertible=False)

    family, factor = entry
    return NormalizedQuantity(amount * factor, catalog.canonical_units[family], family)


def compatible(a: NormalizedQuantity, b: NormalizedQuantity) -> bool:
    """Whether two normalized quantities can be summed into one line."""
    return a.merge_key == b.merge_key
