"""ShoppingListItem: one article line of a shopping list.

`quantity` is what the shopper sees; `manual_quantity` is the signed part of it
that comes from the user rather than from the planned recipes.
"""
from typing import Optional
from uuid import uuid4


class ShoppingListItem:
    def __init__(self, article_id: str, quantity: float = 0.0, is_checked: bool = False,
                 is_manually_added: bool = False, manual_quantity: float = 0.0,
                 shopping_list_id: Optional[str] = None, id: Optional[str] = None,
                 recipe_quantity: Optional[float] = None):
        self.id = id or uuid4().hex
        self.article_id = article_id
        self.shopping_list_id = shopping_list_id
        self.quantity = max(0.0, float(quantity))
        self.is_checked = is_checked
        self.is_manually_added = is_manually_added
        self.manual_quantity = float(manual_quantity)
        # recipe demand of the last reconciliation; stays exact when quantity was clamped to 0
        if recipe_quantity is None:
            recipe_quantity = self.quantity - self.manual_quantity
        self.recipe_quantity = max(0.0, float(recipe_quantity))

    def __str__(self) -> str:
        parts = [f"{self.article_id} - {self.quantity}"]
        if self.is_manually_added:
            parts.append(f"manual {self.manual_quantity:+}")
        if self.is_checked:
            parts.append("checked")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return ShoppingListItem(
            article_id=d["article_id"],
            quantity=d.get("quantity", 0.0) or 0.0,
            is_checked=bool(d.get("is_checked", False)),
            is_manually_added=bool(d.get("is_manually_added", False)),
            manual_quantity=d.get("manual_quantity", 0.0) or 0.0,
            shopping_list_id=d.get("shopping_list_id"),
            id=d.get("id"),
            recipe_quantity=d.get("recipe_quantity"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "article_id": self.article_id,
            "shopping_list_id": self.shopping_list_id,
            "quantity": self.quantity,
            "is_checked": self.is_checked,
            "is_manually_added": self.is_manually_added,
            "manual_quantity": self.manual_quantity,
            "recipe_quantity": self.recipe_quantity,
        }
