"""smartlist: consolidated, categorized shopping lists from recipes and meal plans."""

__version__ = "0.1.0"
