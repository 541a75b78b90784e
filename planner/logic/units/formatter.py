"""Quantity formatting for the shopping list (culinary fractions, one decimal otherwise)."""
from typing import Optional

from planner.domain.Article import Article
from planner.domain.ShoppingListItem import ShoppingListItem
from planner.logic.units.converter import convert_item
from planner.utilities.constants import DECIMAL_UNITS

FRACTIONS = {0.5: "½", 0.25: "¼", 0.75: "¾"}
# matched after rounding to two decimals
APPROX_FRACTIONS = {0.33: "⅓", 0.67: "⅔"}


def format_number(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    if quantity in FRACTIONS:
        return FRACTIONS[quantity]
    approx = APPROX_FRACTIONS.get(round(quantity, 2))
    if approx:
        return approx
    return f"{quantity:.1f}"


def format_quantity(quantity: float, unit: str) -> str:
    """'2 kg', '½ L', '⅓ pot', '0.1 L'..."""
    return f"{format_number(quantity)} {unit}".strip()


def format_item(item: ShoppingListItem, article: Optional[Article]) -> str:
    quantity, unit = convert_item(item, article)
    return format_quantity(quantity, unit)


def is_decimal_unit(unit: str) -> bool:
    return (unit or "").lower() in DECIMAL_UNITS


def step_for_unit(unit: str) -> float:
    """Increment used by quantity editors: 0.1 for kg and l, 1 otherwise."""
    return 0.1 if is_decimal_unit(unit) else 1.0


__all__ = ['format_number', 'format_quantity', 'format_item', 'is_decimal_unit', 'step_for_unit']
