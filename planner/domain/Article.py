"""Article domain entity: a purchasable item (ingredient or household good) of the catalog."""
from typing import Optional
from uuid import uuid4


class Article:
    def __init__(self, name: str = "", category: str = "", unit: str = "", is_food: bool = True,
                 id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.name = name
        self.category = category  # aisle grouping in the shopping list
        self.unit = unit          # canonical recipe-side unit
        self.is_food = is_food

    def __str__(self) -> str:
        kind = "food" if self.is_food else "non-food"
        return f"{self.name} ({self.unit}) - {self.category} - {kind}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        return isinstance(other, Article) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    @staticmethod
    def from_dict(data):
        '''Creates an Article from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Article(
            name=d.get("name", ""),
            category=d.get("category", ""),
            unit=d.get("unit", ""),
            is_food=bool(d.get("is_food", True)),
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "is_food": self.is_food,
        }
