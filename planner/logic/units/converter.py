"""Shopping unit conversion.

Turns a recipe-side quantity (grams, pieces, spoons...) into what one actually
buys (kg, L, a bottle, a pack). Rules are keyed by article name and recipe
unit; any pair without a rule is returned unchanged. Applied at display time
only, never persisted.
"""
import logging
import math
from typing import Optional, Tuple

from planner.domain.Article import Article
from planner.domain.ShoppingListItem import ShoppingListItem
from planner.utilities.constants import (
    UNIT_GRAM, UNIT_MILLILITER, UNIT_CENTILITER, UNIT_PIECES, UNIT_PINCH,
    UNIT_TABLESPOON, UNIT_TEASPOON, UNIT_SPRIG, UNIT_LEAF,
    TABLESPOON_LITERS, BUTTER_PLAQUETTE_GRAMS, LEMON_JUICE_TEASPOONS,
)

logger = logging.getLogger(__name__)

# Articles bought by weight: shown in kg from 1000 g
WEIGHT_ARTICLES = {
    "Farine", "Farine de sarrasin", "Pomme de terre", "Viande de bœuf hachée",
    "Veau pour blanquette", "Poulet",
}
EGG_ARTICLES = {"Œuf", "Œuf (pour la garniture)", "Jaune d'œuf"}

# (article names, recipe units) -> fixed purchase unit, whatever the quantity
FIXED_PACKAGES = [
    ({"Sel", "Poivre"}, {UNIT_PINCH}, "paquet"),
    ({"Herbes de Provence", "Paprika", "Curry"}, {UNIT_TEASPOON}, "sachet"),
    ({"Muscade"}, {UNIT_PINCH}, "sachet"),
    ({"Miel", "Moutarde"}, {UNIT_TEASPOON, UNIT_TABLESPOON}, "pot"),
    ({"Vinaigrette", "Vinaigre balsamique"}, {UNIT_TABLESPOON}, "bouteille"),
    ({"Thym", "Romarin", "Persil"}, {UNIT_SPRIG}, "bouquet"),
    ({"Laurier"}, {UNIT_LEAF}, "sachet"),
    ({"Salade verte"}, {UNIT_GRAM}, "pièce"),
    ({"Tomates cerises"}, {UNIT_PIECES}, "barquette"),
]

WINE_BOTTLE_THRESHOLD_ML = 200
BUTTER_GRAMS_THRESHOLD = 100


def _ceil_to(value: float, steps_per_unit: int) -> float:
    # 9 decimals absorbs float noise such as 0.3 * 20 == 6.000000000000001
    return math.ceil(round(value * steps_per_unit, 9)) / steps_per_unit


def round_liquid(liters: float) -> float:
    """Round a volume in liters up to a step that grows with the volume.

    < 0.1 L: 25 ml, < 0.5 L: 50 ml, < 1 L: 100 ml, otherwise 250 ml.
    """
    if liters < 0.1:
        return _ceil_to(liters, 40)
    if liters < 0.5:
        return _ceil_to(liters, 20)
    if liters < 1:
        return _ceil_to(liters, 10)
    return _ceil_to(liters, 4)


def round_weight(kg: float) -> float:
    """Same stepping as round_liquid, for weights in kg."""
    return round_liquid(kg)


def _to_liters(article_name: str, recipe_unit: str, quantity: float) -> Optional[float]:
    if article_name == "Huile d'olive":
        if recipe_unit == UNIT_TABLESPOON:
            return quantity * TABLESPOON_LITERS
        if recipe_unit == UNIT_MILLILITER:
            return quantity / 1000
    if article_name == "Lait":
        if recipe_unit == UNIT_CENTILITER:
            return quantity / 100
        if recipe_unit == UNIT_MILLILITER:
            return quantity / 1000
    if article_name == "Eau" and recipe_unit == UNIT_CENTILITER:
        return quantity / 100
    return None


def to_display_unit(article_name: str, recipe_unit: str, quantity: float) -> Tuple[float, str]:
    """Convert a raw recipe quantity into a (quantity, unit) pair suited to shopping."""
    liters = _to_liters(article_name, recipe_unit, quantity)
    if liters is not None:
        return round_liquid(liters), "L"

    if article_name in WEIGHT_ARTICLES and recipe_unit == UNIT_GRAM:
        if quantity < 1000:
            return quantity, UNIT_GRAM
        return round_weight(quantity / 1000), "kg"

    if article_name in EGG_ARTICLES and recipe_unit == UNIT_PIECES:
        return quantity, UNIT_PIECES

    if article_name == "Crème fraîche" and recipe_unit == UNIT_CENTILITER:
        return quantity, UNIT_CENTILITER
    if article_name == "Lait de coco" and recipe_unit == UNIT_MILLILITER:
        return quantity / 10, UNIT_CENTILITER

    if article_name == "Vin blanc" and recipe_unit == UNIT_MILLILITER:
        if quantity <= WINE_BOTTLE_THRESHOLD_ML:
            return quantity, UNIT_MILLILITER
        return 1, "bouteille"

    if article_name == "Beurre" and recipe_unit == UNIT_GRAM:
        if quantity <= BUTTER_GRAMS_THRESHOLD:
            return quantity, UNIT_GRAM
        plaquettes = quantity / BUTTER_PLAQUETTE_GRAMS
        if plaquettes < 0.5:
            return quantity, UNIT_GRAM
        return _ceil_to(plaquettes, 2), "plaquette(s)"

    if article_name == "Jus de citron" and recipe_unit == UNIT_TEASPOON:
        return math.ceil(round(quantity / LEMON_JUICE_TEASPOONS, 9)), "citron(s)"

    for names, units, package in FIXED_PACKAGES:
        if article_name in names and recipe_unit in units:
            return 1, package

    return quantity, recipe_unit


def convert_item(item: ShoppingListItem, article: Optional[Article]) -> Tuple[float, str]:
    """Display pair for a shopping list item; raw quantity and no unit if its article is gone."""
    if article is None:
        return item.quantity, ""
    return to_display_unit(article.name, article.unit, item.quantity)


__all__ = ['to_display_unit', 'convert_item', 'round_liquid', 'round_weight']
