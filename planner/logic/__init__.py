"""Core business logic layer.

Subpackages:
- shopping: aggregating planned meals and reconciling the shopping list
- units: converting recipe quantities to shopping units and formatting them
- catalog: fuzzy article matching helpers
"""
__all__ = ["shopping", "units", "catalog"]
