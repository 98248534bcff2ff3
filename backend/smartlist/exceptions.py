"""Errors raised by the shopping-list services."""


class ShoppingListError(Exception):
    """Base class for shopping-list failures."""


class InvalidShoppingInput(ShoppingListError, ValueError):
    """The request cannot produce a list (no recipes, blank names, negative amounts)."""


class ShoppingListExportError(ShoppingListError):
    """Writing the exported list failed. The in-memory list is still valid."""
