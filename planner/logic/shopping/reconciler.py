"""Shopping list reconciliation.

Merges recipe demand (see aggregator.aggregate) into a persistent shopping list
while keeping what the user changed by hand. Each item carries two layers:

    quantity == max(0, recipe demand + manual_quantity)

The recipe layer is recomputed from scratch on every call, the manual layer is
only ever changed by user actions (apply_manual_edit, add_manual_item,
merge_article_items), so calling reconcile twice with the same demand is a
no-op the second time.
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, NamedTuple, Optional

from planner.domain.ShoppingList import ShoppingList
from planner.domain.ShoppingListItem import ShoppingListItem

logger = logging.getLogger(__name__)


class ReconcileResult(NamedTuple):
    inserted: List[ShoppingListItem]
    updated: List[ShoppingListItem]
    deleted: List[ShoppingListItem]


def reconcile(shopping_list: ShoppingList, demand: Dict[str, float],
              now: Optional[datetime] = None) -> ReconcileResult:
    """Recompute every item of `shopping_list` from `demand` (article id -> recipe quantity).

    Mutates the list in place; persisting it is the caller's job.
    """
    existing = shopping_list.items_by_article()
    processed = set()
    inserted: List[ShoppingListItem] = []
    updated: List[ShoppingListItem] = []
    deleted: List[ShoppingListItem] = []

    for article_id, recipe_qty in demand.items():
        item = existing.get(article_id)
        if item is not None:
            item.recipe_quantity = recipe_qty
            item.quantity = max(0.0, recipe_qty + item.manual_quantity)
            updated.append(item)
        else:
            item = ShoppingListItem(article_id=article_id, quantity=recipe_qty,
                                    is_manually_added=False, manual_quantity=0.0,
                                    recipe_quantity=recipe_qty)
            shopping_list.add_item(item)
            inserted.append(item)
        processed.add(article_id)

    for item in list(shopping_list.items):
        if item.article_id in processed:
            continue
        if item.is_manually_added:
            # recipe contribution is gone, only the user's part remains
            item.recipe_quantity = 0.0
            item.quantity = max(0.0, item.manual_quantity)
            updated.append(item)
        else:
            shopping_list.remove_item(item)
            deleted.append(item)

    shopping_list.touch(now)
    logger.debug("Reconciled list %s: %d inserted, %d updated, %d deleted",
                 shopping_list.id, len(inserted), len(updated), len(deleted))
    return ReconcileResult(inserted, updated, deleted)


def apply_manual_edit(item: ShoppingListItem, new_quantity: float) -> ShoppingListItem:
    """Set the displayed quantity of an item, attributing the difference to the manual layer.

    The manual layer may go negative ("less than the recipes imply"). The recipe
    portion is the demand recorded by the last reconciliation, not
    quantity - manual_quantity, which is wrong once quantity has been clamped.
    """
    new_quantity = max(0.0, float(new_quantity))
    item.manual_quantity = new_quantity - item.recipe_quantity
    item.quantity = new_quantity
    item.is_manually_added = True
    return item


def add_manual_item(shopping_list: ShoppingList, article_id: str, quantity: float,
                    now: Optional[datetime] = None) -> ShoppingListItem:
    """Add `quantity` of an article by hand, merging into an existing line if there is one."""
    if quantity <= 0:
        raise ValueError(f"Quantity must be positive: {quantity}")
    item = shopping_list.items_by_article().get(article_id)
    if item is None:
        item = ShoppingListItem(article_id=article_id, quantity=quantity,
                                is_manually_added=True, manual_quantity=quantity)
        shopping_list.add_item(item)
    else:
        item.quantity += quantity
        item.manual_quantity += quantity
        item.is_manually_added = True
    shopping_list.touch(now)
    return item


def toggle_checked(item: ShoppingListItem) -> ShoppingListItem:
    item.is_checked = not item.is_checked
    return item


def remove_item(shopping_list: ShoppingList, item_id: str,
                now: Optional[datetime] = None) -> Optional[ShoppingListItem]:
    '''
    Removes an item on explicit user request. A recipe-derived article comes
    back on the next reconciliation while it is still planned.
    '''
    item = shopping_list.get_item(item_id)
    if item is None:
        return None
    shopping_list.remove_item(item)
    shopping_list.touch(now)
    return item


def merge_article_items(shopping_list: ShoppingList, keep_id: str, remove_id: str,
                        now: Optional[datetime] = None) -> Optional[ShoppingListItem]:
    '''
    Folds the line of a duplicate article into the line of the kept one.
    Both layers are summed and the manual flag survives; the next
    reconciliation recomputes the recipe part from the merged catalog.
    '''
    index = shopping_list.items_by_article()
    removed = index.get(remove_id)
    if removed is None:
        return index.get(keep_id)
    kept = index.get(keep_id)
    if kept is None:
        removed.article_id = keep_id
        shopping_list.touch(now)
        return removed
    kept.quantity += removed.quantity
    kept.manual_quantity += removed.manual_quantity
    kept.recipe_quantity += removed.recipe_quantity
    kept.is_manually_added = kept.is_manually_added or removed.is_manually_added
    kept.is_checked = kept.is_checked and removed.is_checked
    shopping_list.remove_item(removed)
    shopping_list.touch(now)
    return kept


def get_or_create_current(shopping_lists: Iterable[ShoppingList],
                          now: Optional[datetime] = None) -> ShoppingList:
    """Most recently modified list, or a fresh one when there is none."""
    lists = sorted(shopping_lists, key=lambda sl: sl.modification_date, reverse=True)
    if lists:
        return lists[0]
    return ShoppingList(creation_date=now, modification_date=now)


__all__ = [
    'ReconcileResult', 'reconcile', 'apply_manual_edit', 'add_manual_item',
    'toggle_checked', 'remove_item', 'merge_article_items', 'get_or_create_current',
]
