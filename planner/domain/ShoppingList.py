"""ShoppingList aggregate: dated, ordered collection of ShoppingListItem."""
from datetime import datetime
from typing import Dict, List, Optional
from uuid import uuid4

from planner.domain.ShoppingListItem import ShoppingListItem
from planner.utilities.constants import DATE_FORMAT


class ShoppingList:
    def __init__(self, creation_date: Optional[datetime] = None, modification_date: Optional[datetime] = None,
                 items: Optional[List[ShoppingListItem]] = None, id: Optional[str] = None):
        now = datetime.now()
        self.id = id or uuid4().hex
        self.creation_date = creation_date or now
        self.modification_date = modification_date or self.creation_date
        self.items: List[ShoppingListItem] = []
        for item in items or []:
            self.add_item(item)

    def add_item(self, item: ShoppingListItem):
        '''
        Appends an item and attaches it to this list.
        '''
        item.shopping_list_id = self.id
        self.items.append(item)

    def remove_item(self, item: ShoppingListItem):
        '''
        Removes an item from the list (matched by id).
        '''
        self.items = [i for i in self.items if i.id != item.id]
        item.shopping_list_id = None

    def get_item(self, item_id: str) -> Optional[ShoppingListItem]:
        return next((i for i in self.items if i.id == item_id), None)

    def items_by_article(self) -> Dict[str, ShoppingListItem]:
        '''
        Index of the items keyed by article id (first item wins).
        '''
        index: Dict[str, ShoppingListItem] = {}
        for item in self.items:
            index.setdefault(item.article_id, item)
        return index

    def touch(self, now: Optional[datetime] = None):
        self.modification_date = now or datetime.now()

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Shopping List {self.modification_date.strftime(DATE_FORMAT)}\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return ShoppingList(
            creation_date=_parse_date(d.get("creation_date")),
            modification_date=_parse_date(d.get("modification_date")),
            items=[ShoppingListItem.from_dict(i) for i in d.get("items", [])],
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "creation_date": self.creation_date.isoformat(),
            "modification_date": self.modification_date.isoformat(),
            "items": [item.to_dict() for item in self.items],
        }


def _parse_date(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
