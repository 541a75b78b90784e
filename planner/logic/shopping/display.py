"""Shopping list presentation: items grouped by aisle category with shopping units."""
from typing import Any, Callable, Dict, List, Optional

from planner.domain.Article import Article
from planner.domain.ShoppingList import ShoppingList
from planner.domain.ShoppingListItem import ShoppingListItem
from planner.logic.catalog.matching import normalize
from planner.logic.units.converter import convert_item
from planner.logic.units.formatter import format_quantity, step_for_unit
from planner.utilities.constants import DEFAULT_CATEGORY, UNKNOWN_ARTICLE_NAME

ArticleLookup = Callable[[str], Optional[Article]]


def item_row(item: ShoppingListItem, article: Optional[Article]) -> Dict[str, Any]:
    display_qty, display_unit = convert_item(item, article)
    recipe_unit = article.unit if article else ""
    return {
        'id': item.id,
        'article_id': item.article_id,
        'name': article.name if article else UNKNOWN_ARTICLE_NAME,
        'category': (article.category if article else "") or DEFAULT_CATEGORY,
        'quantity': item.quantity,
        'unit': recipe_unit,
        'manual_quantity': item.manual_quantity,
        'recipe_quantity': item.recipe_quantity,
        'is_manually_added': item.is_manually_added,
        'is_checked': item.is_checked,
        'display_quantity': display_qty,
        'display_unit': display_unit,
        'display': format_quantity(display_qty, display_unit),
        'step': step_for_unit(recipe_unit),
    }


def group_by_category(shopping_list: ShoppingList, article_lookup: ArticleLookup) -> List[Dict[str, Any]]:
    """Return [{category, items: [row, ...]}, ...], categories and rows in accent-insensitive order."""
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for item in shopping_list.items:
        row = item_row(item, article_lookup(item.article_id))
        groups.setdefault(row['category'], []).append(row)
    return [
        {'category': category, 'items': sorted(rows, key=lambda r: normalize(r['name']))}
        for category, rows in sorted(groups.items(), key=lambda kv: normalize(kv[0]))
    ]


__all__ = ['item_row', 'group_by_category']
