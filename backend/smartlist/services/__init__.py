"""Shopping list pipeline services."""
