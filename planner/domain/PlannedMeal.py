"""PlannedMeal: a recipe (by id) assigned to a day and meal slot with a headcount."""
from enum import Enum
from typing import Optional
from uuid import uuid4

from planner.utilities.constants import DAYS_OF_WEEK


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"

    @property
    def label(self) -> str:
        return _MEAL_LABELS[self]


_MEAL_LABELS = {
    MealType.BREAKFAST: "Petit-déjeuner",
    MealType.LUNCH: "Déjeuner",
    MealType.DINNER: "Dîner",
}


class PlannedMeal:
    def __init__(self, recipe_id: str, headcount: int, day: int, meal_type,
                 id: Optional[str] = None):
        if isinstance(headcount, bool) or not isinstance(headcount, int) or headcount < 1:
            raise ValueError(f"Headcount must be a positive integer: {headcount!r}")
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise ValueError(f"Day must be between 0 (Monday) and 6 (Sunday): {day!r}")
        self.id = id or uuid4().hex
        self.recipe_id = recipe_id
        self.headcount = headcount
        self.day = day
        self.meal_type = MealType(meal_type)

    def __str__(self) -> str:
        return f"{DAYS_OF_WEEK[self.day]} {self.meal_type.label}: {self.recipe_id} x {self.headcount}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlannedMeal):
            return NotImplemented
        return (self.id, self.recipe_id, self.headcount, self.day, self.meal_type) == \
            (other.id, other.recipe_id, other.headcount, other.day, other.meal_type)

    def __hash__(self) -> int:
        return hash(self.id)

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return PlannedMeal(
            recipe_id=d["recipe_id"],
            headcount=d["headcount"],
            day=d["day"],
            meal_type=d["meal_type"],
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "recipe_id": self.recipe_id,
            "headcount": self.headcount,
            "day": self.day,
            "meal_type": self.meal_type.value,
        }
