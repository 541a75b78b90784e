"""Shopping list repository helpers (file persistence).

Lists are kept in memory and written to one JSON file. Mutations done inside
`transaction()` are committed together, or rolled back if the block raises.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from threading import RLock
from typing import Dict, Iterator, List, Optional, Union

from planner.domain.ShoppingList import ShoppingList
from planner.domain.ShoppingListItem import ShoppingListItem
from planner.infra.json_files import load_json, atomic_write_json
from planner.logic.shopping.reconciler import get_or_create_current, merge_article_items

logger = logging.getLogger(__name__)


class ShoppingListRepository:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = RLock()
        self._depth = 0
        self._lists: Dict[str, ShoppingList] = {}
        self._load()

    # --- Queries -----------------------------------------------------------
    def all_lists(self) -> List[ShoppingList]:
        """All lists, most recently modified first."""
        return sorted(self._lists.values(), key=lambda sl: sl.modification_date, reverse=True)

    def get(self, list_id: str) -> Optional[ShoppingList]:
        return self._lists.get(list_id)

    def current(self) -> Optional[ShoppingList]:
        lists = self.all_lists()
        return lists[0] if lists else None

    def find_item(self, item_id: str) -> Optional[ShoppingListItem]:
        for shopping_list in self._lists.values():
            item = shopping_list.get_item(item_id)
            if item is not None:
                return item
        return None

    # --- Persistence operations -------------------------------------------
    def save(self, shopping_list: ShoppingList):
        with self._lock:
            self._lists[shopping_list.id] = shopping_list
            self._flush()

    def insert(self, item: ShoppingListItem):
        with self._lock:
            owner = self._lists.get(item.shopping_list_id or "")
            if owner is None:
                raise ValueError(f"Item {item.id} does not belong to a stored shopping list")
            if owner.get_item(item.id) is None:
                owner.add_item(item)
            self._flush()

    def delete(self, item: ShoppingListItem):
        with self._lock:
            owner = self._lists.get(item.shopping_list_id or "")
            if owner is not None:
                owner.remove_item(item)
            self._flush()

    def delete_list(self, list_id: str) -> Optional[ShoppingList]:
        with self._lock:
            removed = self._lists.pop(list_id, None)
            if removed is not None:
                self._flush()
            return removed

    @contextmanager
    def transaction(self) -> Iterator["ShoppingListRepository"]:
        '''
        Scoped unit of work: holds the repository lock, commits on success,
        restores the previous state and re-raises on failure.
        '''
        with self._lock:
            snapshot = {list_id: sl.to_dict() for list_id, sl in self._lists.items()}
            self._depth += 1
            try:
                yield self
            except Exception:
                self._lists = {list_id: ShoppingList.from_dict(d) for list_id, d in snapshot.items()}
                logger.warning("Shopping list transaction rolled back")
                raise
            finally:
                self._depth -= 1
            self._flush()

    def merge_article(self, keep_id: str, remove_id: str) -> int:
        '''
        Re-keys the lines of a merged-away article in every stored list.
        Returns the number of lists touched.
        '''
        with self._lock:
            touched = 0
            for shopping_list in self._lists.values():
                if remove_id in shopping_list.items_by_article():
                    merge_article_items(shopping_list, keep_id, remove_id)
                    touched += 1
            if touched:
                self._flush()
            return touched

    def get_or_create_current(self, now: Optional[datetime] = None) -> ShoppingList:
        with self._lock:
            current = get_or_create_current(self._lists.values(), now)
            if current.id not in self._lists:
                self.save(current)
            return current

    # --- File I/O ----------------------------------------------------------
    def _flush(self):
        if self._depth > 0:
            return  # committed when the outermost transaction ends
        atomic_write_json(self.path, [sl.to_dict() for sl in self._lists.values()])

    def _load(self):
        data = load_json(self.path, [])
        if not isinstance(data, list):
            logger.error("Shopping list file %s does not hold a list; starting empty", self.path)
            return
        for entry in data:
            try:
                shopping_list = ShoppingList.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable shopping list: %s", e)
                continue
            self._lists[shopping_list.id] = shopping_list


__all__ = ['ShoppingListRepository']
