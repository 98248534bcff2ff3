"""
Static lookup tables for the shopping-list pipeline.

Unit synonyms, category rules, price rates, bulk thresholds, substitutions
and shopping hints. Everything here is read-only: ``get_catalog()`` freezes
the tables into a ``ShoppingCatalog`` once per process and the same instance
is handed to every pipeline stage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from smartlist.config import Settings, get_settings

logger = logging.getLogger(__name__)


# ============================================================================
# Units
# ============================================================================

MASS = "mass"
VOLUME = "volume"
COUNT = "count"

CANONICAL_UNITS: dict[str, str] = {
    MASS: "gram",
    VOLUME: "milliliter",
    COUNT: "piece",
}

# spelling -> (family, factor to the family's canonical unit)
UNIT_SYNONYMS: dict[str, tuple[str, Decimal]] = {
    # Mass -> gram
    "g": (MASS, Decimal("1")),
    "gr": (MASS, Decimal("1")),
    "gram": (MASS, Decimal("1")),
    "grams": (MASS, Decimal("1")),
    "gramme": (MASS, Decimal("1")),
    "grammes": (MASS, Decimal("1")),
    "kg": (MASS, Decimal("1000")),
    "kilo": (MASS, Decimal("1000")),
    "kilos": (MASS, Decimal("1000")),
    "kilogram": (MASS, Decimal("1000")),
    "kilograms": (MASS, Decimal("1000")),
    "mg": (MASS, Decimal("0.001")),
    "milligram": (MASS, Decimal("0.001")),
    "milligrams": (MASS, Decimal("0.001")),
    "oz": (MASS, Decimal("28.349523125")),
    "ounce": (MASS, Decimal("28.349523125")),
    "ounces": (MASS, Decimal("28.349523125")),
    "lb": (MASS, Decimal("453.59237")),
    "lbs": (MASS, Decimal("453.59237")),
    "pound": (MASS, Decimal("453.59237")),
    "pounds": (MASS, Decimal("453.59237")),
    # Volume -> milliliter
    "ml": (VOLUME, Decimal("1")),
    "milliliter": (VOLUME, Decimal("1")),
    "milliliters": (VOLUME, Decimal("1")),
    "millilitre": (VOLUME, Decimal("1")),
    "millilitres": (VOLUME, Decimal("1")),
    "cl": (VOLUME, Decimal("10")),
    "dl": (VOLUME, Decimal("100")),
    "l": (VOLUME, Decimal("1000")),
    "liter": (VOLUME, Decimal("1000")),
    "liters": (VOLUME, Decimal("1000")),
    "litre": (VOLUME, Decimal("1000")),
    "litres": (VOLUME, Decimal("1000")),
    "tsp": (VOLUME, Decimal("4.92892159375")),
    "teaspoon": (VOLUME, Decimal("4.92892159375")),
    "teaspoons": (VOLUME, Decimal("4.92892159375")),
    "tbsp": (VOLUME, Decimal("14.78676478125")),
    "tablespoon": (VOLUME, Decimal("14.78676478125")),
    "tablespoons": (VOLUME, Decimal("14.78676478125")),
    "cup": (VOLUME, Decimal("236.5882365")),
    "cups": (VOLUME, Decimal("236.5882365")),
    "fl oz": (VOLUME, Decimal("29.5735295625")),
    "fluid ounce": (VOLUME, Decimal("29.5735295625")),
    "fluid ounces": (VOLUME, Decimal("29.5735295625")),
    "pint": (VOLUME, Decimal("473.176473")),
    "pints": (VOLUME, Decimal("473.176473")),
    "quart": (VOLUME, Decimal("946.352946")),
    "quarts": (VOLUME, Decimal("946.352946")),
    "gallon": (VOLUME, Decimal("3785.411784")),
    "gallons": (VOLUME, Decimal("3785.411784")),
    # Count -> piece
    "piece": (COUNT, Decimal("1")),
    "pieces": (COUNT, Decimal("1")),
    "pc": (COUNT, Decimal("1")),
    "pcs": (COUNT, Decimal("1")),
    "ea": (COUNT, Decimal("1")),
    "each": (COUNT, Decimal("1")),
    "whole": (COUNT, Decimal("1")),
    "unit": (COUNT, Decimal("1")),
    "units": (COUNT, Decimal("1")),
    "item": (COUNT, Decimal("1")),
    "items": (COUNT, Decimal("1")),
    "pair": (COUNT, Decimal("2")),
    "pairs": (COUNT, Decimal("2")),
    "dozen": (COUNT, Decimal("12")),
}


# ============================================================================
# Categories
# ============================================================================

CATCH_ALL_CATEGORY = "Other"


@dataclass(frozen=True)
class CategoryInfo:
    """Display and routing metadata for one shopping category."""
    name: str
    icon: str
    color: str
    store_section: str
    shopping_order: str
    priority: int


CATEGORY_INFO: dict[str, CategoryInfo] = {
    info.name: info
    for info in (
        CategoryInfo("Produce", "🥬", "#4CAF50", "Fresh Produce",
                     "Start at the entrance with fruit and vegetables", 1),
        CategoryInfo("Protein", "🥩", "#F44336", "Meat & Seafood Counter",
                     "Visit the meat and fish counter along the back wall", 1),
        CategoryInfo("Dairy", "🥛", "#FFC107", "Dairy & Eggs Cooler",
                     "Pick up dairy and eggs from the refrigerated wall", 2),
        CategoryInfo("Bakery", "🍞", "#795548", "Bakery",
                     "Grab bread from the bakery corner", 2),
        CategoryInfo("Pantry", "🥫", "#FF9800", "Center Aisles",
                     "Work through the center aisles for dry goods", 2),
        CategoryInfo("Spices & Seasonings", "🧂", "#8D6E63", "Baking & Spice Aisle",
                     "Check the spice aisle while in the center aisles", 2),
        CategoryInfo("Beverages", "🥤", "#9C27B0", "Beverage Aisle",
                     "Pick up drinks near the end of the route", 3),
        CategoryInfo("Frozen", "🧊", "#2196F3", "Frozen Foods",
                     "Finish with frozen foods so they stay cold", 3),
        CategoryInfo(CATCH_ALL_CATEGORY, "📦", "#607D8B", "Miscellaneous",
                     "Look for anything left before checkout", 3),
    )
}

# First matching rule wins, so more specific rules come first.
CATEGORY_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("Frozen", ("frozen", "ice cream", "sorbet")),
    ("Spices & Seasonings", (
        "salt", "black pepper", "peppercorn", "powder", "spice", "seasoning",
        "cumin", "paprika", "cinnamon", "oregano", "nutmeg", "turmeric",
        "chili flakes", "bay leaf", "bay leaves", "vanilla", "dried herb",
    )),
    ("Pantry", (
        "broth", "stock", "sauce", "oil", "vinegar", "rice", "pasta", "noodle",
        "spaghetti", "flour", "sugar", "honey", "syrup", "lentil", "chickpea",
        "bean", "peanut", "oat", "oatmeal", "cereal", "canned", "baking soda", "yeast", "cornstarch",
    )),
    ("Protein", (
        "chicken", "beef", "steak", "pork", "bacon", "ham", "sausage", "lamb",
        "turkey", "fish", "salmon", "tuna", "cod", "shrimp", "prawn", "tofu",
        "tempeh",
    )),
    ("Produce", (
        "tomato", "onion", "garlic", "carrot", "potato", "bell pepper",
        "chili pepper", "jalapeno", "spinach", "broccoli", "lettuce", "cucumber",
        "zucchini", "eggplant", "mushroom", "celery", "cabbage", "kale",
        "squash", "avocado", "lemon", "lime", "apple", "banana", "orange",
        "berry", "berries", "blueberry", "blueberries", "strawberry", "strawberries",
        "raspberry", "raspberries", "melon", "watermelon", "ginger", "cilantro", "parsley", "basil",
        "mint", "scallion", "leek", "shallot", "pea", "corn",
    )),
    # Plain "pepper" once bell and chili peppers have been ruled out
    ("Spices & Seasonings", ("pepper",)),
    ("Dairy", ("milk", "cheese", "yogurt", "yoghurt", "butter", "cream", "egg")),
    ("Bakery", ("bread", "baguette", "bun", "roll", "bagel", "tortilla", "pita", "croissant")),
    ("Beverages", ("juice", "coffee", "tea", "wine", "beer", "soda", "water")),
]

ESSENTIAL_KEYWORDS: tuple[str, ...] = ("salt", "pepper", "oil", "onion", "garlic", "butter")
OPTIONAL_KEYWORDS: tuple[str, ...] = ("garnish", "decoration", "optional", "to serve")


# ============================================================================
# Pricing
# ============================================================================

# (category, canonical unit) -> price per canonical unit (USD)
PRICE_RATES: dict[tuple[str, str], Decimal] = {
    ("Produce", "gram"): Decimal("0.004"),
    ("Produce", "milliliter"): Decimal("0.004"),
    ("Produce", "piece"): Decimal("0.60"),
    ("Protein", "gram"): Decimal("0.012"),
    ("Protein", "milliliter"): Decimal("0.010"),
    ("Protein", "piece"): Decimal("4.50"),
    ("Dairy", "gram"): Decimal("0.010"),
    ("Dairy", "milliliter"): Decimal("0.0015"),
    ("Dairy", "piece"): Decimal("0.40"),
    ("Bakery", "gram"): Decimal("0.006"),
    ("Bakery", "piece"): Decimal("2.50"),
    ("Pantry", "gram"): Decimal("0.004"),
    ("Pantry", "milliliter"): Decimal("0.008"),
    ("Pantry", "piece"): Decimal("2.00"),
    ("Spices & Seasonings", "gram"): Decimal("0.030"),
    ("Spices & Seasonings", "milliliter"): Decimal("0.030"),
    ("Spices & Seasonings", "piece"): Decimal("3.50"),
    ("Beverages", "gram"): Decimal("0.010"),
    ("Beverages", "milliliter"): Decimal("0.002"),
    ("Beverages", "piece"): Decimal("1.50"),
    ("Frozen", "gram"): Decimal("0.008"),
    ("Frozen", "piece"): Decimal("3.99"),
}


# ============================================================================
# Bulk purchases
# ============================================================================


@dataclass(frozen=True)
class BulkRule:
    """Bulk thresholds (per canonical unit) and discount for a staple category."""
    discount_rate: Decimal
    thresholds: Mapping[str, Decimal]


BULK_RULES: dict[str, BulkRule] = {
    "Produce": BulkRule(Decimal("0.10"), {"gram": Decimal("2000"), "piece": Decimal("10")}),
    "Protein": BulkRule(Decimal("0.15"), {"gram": Decimal("1500"), "piece": Decimal("8")}),
    "Dairy": BulkRule(Decimal("0.10"), {
        "gram": Decimal("1000"), "milliliter": Decimal("2000"), "piece": Decimal("12"),
    }),
    "Pantry": BulkRule(Decimal("0.20"), {
        "gram": Decimal("2000"), "milliliter": Decimal("1000"), "piece": Decimal("6"),
    }),
    "Spices & Seasonings": BulkRule(Decimal("0.20"), {
        "gram": Decimal("250"), "milliliter": Decimal("250"), "piece": Decimal("4"),
    }),
}


# ============================================================================
# Substitutions, hints, nutrition
# ============================================================================

SUBSTITUTIONS: dict[str, tuple[str, ...]] = {
    "butter": ("margarine", "coconut oil", "olive oil"),
    "peanut butter": ("almond butter", "sunflower seed butter"),
    "milk": ("almond milk", "soy milk", "oat milk"),
    "chicken": ("turkey", "tofu", "tempeh"),
    "beef": ("lamb", "pork", "mushrooms"),
    "onion": ("shallots", "leeks", "onion powder"),
    "garlic": ("garlic powder", "shallots"),
    "sour cream": ("greek yogurt", "creme fraiche"),
    "heavy cream": ("half and half", "evaporated milk"),
    "egg": ("flax egg", "chia egg", "applesauce"),
    "rice": ("quinoa", "cauliflower rice", "couscous"),
    "pasta": ("zucchini noodles", "rice noodles"),
    "sugar": ("honey", "maple syrup"),
    "salmon": ("trout", "arctic char"),
    "shrimp": ("scallops", "firm white fish"),
}

# (keyword, hint) pairs; every matching hint is used, in table order
SHOPPING_HINTS: tuple[tuple[str, str], ...] = (
    ("chicken", "Look for organic, free-range"),
    ("fish", "Check for freshness, clear eyes"),
    ("salmon", "Check for firm flesh and a fresh smell"),
    ("vegetable", "Choose firm, vibrant colors"),
    ("spice", "Check expiration date"),
    ("oil", "Extra virgin recommended"),
    ("avocado", "Pick a mix of ripe and firm"),
    ("egg", "Open the carton and check for cracks"),
)

# Route advice per category present on the list
STORE_SUGGESTIONS: dict[str, str] = {
    "Produce": "Start with the produce section for fresh vegetables",
    "Protein": "Visit the meat counter for quality proteins",
    "Dairy": "Check the dairy section for milk, cheese and eggs",
    "Pantry": "Browse the pantry aisles for dry goods",
    "Spices & Seasonings": "Compare spice jar sizes, bulk bins are often cheaper",
    "Frozen": "End with frozen foods to keep them cold",
}

NUTRITION_HIGHLIGHTS: dict[str, str] = {
    "chicken": "High protein, about 165 kcal per 100 g",
    "beef": "Rich in protein, iron and B12",
    "salmon": "Omega-3 fatty acids and high-quality protein",
    "egg": "Complete protein, about 70 kcal each",
    "spinach": "Iron, folate and vitamin K",
    "broccoli": "Vitamin C and fiber",
    "milk": "Calcium and vitamin D",
    "yogurt": "Probiotics and calcium",
    "lentil": "Plant protein and fiber",
    "rice": "Mostly carbohydrate, about 130 kcal per 100 g cooked",
    "avocado": "Healthy fats and potassium",
    "tomato": "Vitamin C and lycopene",
}


# ============================================================================
# Frozen catalog
# ============================================================================


@dataclass(frozen=True)
class ShoppingCatalog:
    """Read-only configuration shared by every pipeline stage."""
    unit_synonyms: Mapping[str, tuple[str, Decimal]]
    canonical_units: Mapping[str, str]
    categories: Mapping[str, CategoryInfo]
    category_rules: tuple[tuple[str, tuple[str, ...]], ...]
    catch_all_category: str
    essential_keywords: tuple[str, ...]
    optional_keywords: tuple[str, ...]
    price_rates: Mapping[tuple[str, str], Decimal]
    bulk_rules: Mapping[str, BulkRule]
    substitutions: Mapping[str, tuple[str, ...]]
    shopping_hints: tuple[tuple[str, str], ...]
    nutrition_highlights: Mapping[str, str]
    store_suggestions: Mapping[str, str]

    # Scalars from settings
    default_item_price: Decimal
    minimum_item_price: Decimal
    expensive_item_price: Decimal
    base_shopping_minutes: float
    minutes_per_item: float
    minutes_per_section: float
    minimum_shopping_minutes: float

    def category_info(self, name: str) -> CategoryInfo:
        """Metadata for a category; unknown names get catch-all routing."""
        info = self.categories.get(name)
        if info is not None:
            return info
        fallback = self.categories[self.catch_all_category]
        return CategoryInfo(
            name=name,
            icon=fallback.icon,
            color=fallback.color,
            store_section=fallback.store_section,
            shopping_order=fallback.shopping_order,
            priority=fallback.priority,
        )


def build_catalog(settings: Optional[Settings] = None) -> ShoppingCatalog:
    """Freeze the module tables together with the settings scalars."""
    settings = settings or get_settings()

    catalog = ShoppingCatalog(
        unit_synonyms=MappingProxyType(dict(UNIT_SYNONYMS)),
        canonical_units=MappingProxyType(dict(CANONICAL_UNITS)),
        categories=MappingProxyType(dict(CATEGORY_INFO)),
        category_rules=tuple(CATEGORY_RULES),
        catch_all_category=CATCH_ALL_CATEGORY,
        essential_keywords=ESSENTIAL_KEYWORDS,
        optional_keywords=OPTIONAL_KEYWORDS,
        price_rates=MappingProxyType(dict(PRICE_RATES)),
        bulk_rules=MappingProxyType({
            name: BulkRule(rule.discount_rate, MappingProxyType(dict(rule.thresholds)))
            for name, rule in BULK_RULES.items()
        }),
        substitutions=MappingProxyType(dict(SUBSTITUTIONS)),
        shopping_hints=SHOPPING_HINTS,
        nutrition_highlights=MappingProxyType(dict(NUTRITION_HIGHLIGHTS)),
        store_suggestions=MappingProxyType(dict(STORE_SUGGESTIONS)),
        default_item_price=settings.default_item_price,
        minimum_item_price=settings.minimum_item_price,
        expensive_item_price=settings.expensive_item_price,
        base_shopping_minutes=settings.base_shopping_minutes,
        minutes_per_item=settings.minutes_per_item,
        minutes_per_section=settings.minutes_per_section,
        minimum_shopping_minutes=settings.minimum_shopping_minutes,
    )

    logger.info(
        f"Shopping catalog loaded: {len(catalog.unit_synonyms)} unit spellings, "
        f"{len(catalog.categories)} categories, {len(catalog.price_rates)} price rates"
    )
    return catalog


@lru_cache
def get_catalog() -> ShoppingCatalog:
    """Get the process-wide catalog instance."""
    return build_catalog()
