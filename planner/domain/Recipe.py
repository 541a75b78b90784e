"""Recipe domain entity: name, description, photo reference, per-person ingredients."""
from typing import List, Optional
from uuid import uuid4


class RecipeIngredient:
    '''How much of an article a recipe needs for one person.'''

    def __init__(self, article_id: str, quantity: float = 0.0, is_optional: bool = False):
        if quantity < 0:
            raise ValueError(f"Ingredient quantity cannot be negative: {quantity}")
        self.article_id = article_id
        self.quantity = float(quantity)
        self.is_optional = is_optional

    def __str__(self) -> str:
        suffix = " (optional)" if self.is_optional else ""
        return f"{self.article_id} x {self.quantity}{suffix}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return RecipeIngredient(
            article_id=d["article_id"],
            quantity=d.get("quantity", 0.0) or 0.0,
            is_optional=bool(d.get("is_optional", False)),
        )

    def to_dict(self):
        return {"article_id": self.article_id, "quantity": self.quantity, "is_optional": self.is_optional}


class Recipe:
    def __init__(self, name: str = "", description: Optional[str] = None, photo: Optional[str] = None,
                 ingredients: Optional[List[RecipeIngredient]] = None, id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.name = name
        self.description = description
        self.photo = photo
        self.ingredients = ingredients[:] if ingredients else []

    def __str__(self) -> str:
        return f"{self.name} - {len(self.ingredients)} ingredient(s)"

    __repr__ = __str__

    @property
    def is_complete(self) -> bool:
        """A recipe without ingredients cannot be planned."""
        return bool(self.ingredients)

    def add_ingredient(self, article_id: str, quantity: float, is_optional: bool = False) -> RecipeIngredient:
        ingredient = RecipeIngredient(article_id, quantity, is_optional)
        self.ingredients.append(ingredient)
        return ingredient

    def remove_ingredient(self, article_id: str) -> None:
        self.ingredients = [ing for ing in self.ingredients if ing.article_id != article_id]

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return Recipe(
            name=d.get("name", ""),
            description=d.get("description"),
            photo=d.get("photo"),
            ingredients=[RecipeIngredient.from_dict(ing) for ing in d.get("ingredients", [])],
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "photo": self.photo,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
        }
