"""Planned meal store: observable list of meal assignments persisted in a key-value store.

The store is constructed once by the application and passed to whoever needs
it. Every mutation is written through to the key-value store and published on
the event bus, so views and the shopping list updater can react.
"""
import logging
from typing import Any, Callable, List, Optional

from planner.domain.PlannedMeal import PlannedMeal, MealType
from planner.events.Event_Bus import (
    EventBus, PLANNER_MEAL_ADDED, PLANNER_MEAL_REMOVED, PLANNER_CLEARED
)
from planner.events.event_helpers import (
    publish_meal_added, publish_meal_removed, publish_planner_cleared
)
from planner.infra.kv_store import JsonKeyValueStore
from planner.utilities.constants import PLANNED_MEALS_KEY

logger = logging.getLogger(__name__)


class PlannerStore:
    def __init__(self, kv_store: JsonKeyValueStore, event_bus: Optional[EventBus] = None):
        self._kv = kv_store
        self._event_bus = event_bus if event_bus is not None else EventBus()
        self.planned_meals: List[PlannedMeal] = []
        self._load_meals()

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def subscribe(self, callback: Callable[[str, Any], None]):
        '''
        Observe every planner change (add, remove, clear).
        '''
        for name in (PLANNER_MEAL_ADDED, PLANNER_MEAL_REMOVED, PLANNER_CLEARED):
            self._event_bus.subscribe(name, callback)
        return self

    def add_meal(self, meal: PlannedMeal) -> PlannedMeal:
        self.planned_meals.append(meal)
        self._save_meals()
        publish_meal_added(self._event_bus, meal)
        return meal

    def remove_meal(self, meal_or_id) -> Optional[PlannedMeal]:
        '''
        Removes a planned meal (object or id). Returns the removed meal, None if unknown.
        '''
        meal_id = meal_or_id.id if isinstance(meal_or_id, PlannedMeal) else meal_or_id
        removed = next((m for m in self.planned_meals if m.id == meal_id), None)
        if removed is None:
            return None
        self.planned_meals = [m for m in self.planned_meals if m.id != meal_id]
        self._save_meals()
        publish_meal_removed(self._event_bus, removed)
        return removed

    def remove_meals_for_recipe(self, recipe_id: str) -> List[PlannedMeal]:
        '''
        Drops every meal planning the given recipe (used when a recipe is deleted).
        '''
        removed = [m for m in self.planned_meals if m.recipe_id == recipe_id]
        if not removed:
            return []
        self.planned_meals = [m for m in self.planned_meals if m.recipe_id != recipe_id]
        self._save_meals()
        for meal in removed:
            publish_meal_removed(self._event_bus, meal)
        return removed

    def clear(self) -> int:
        count = len(self.planned_meals)
        self.planned_meals = []
        self._save_meals()
        publish_planner_cleared(self._event_bus, count)
        return count

    def get_meal(self, meal_id: str) -> Optional[PlannedMeal]:
        return next((m for m in self.planned_meals if m.id == meal_id), None)

    def meals_for_day(self, day: int) -> List[PlannedMeal]:
        return [m for m in self.planned_meals if m.day == day]

    def meals_for_slot(self, day: int, meal_type) -> List[PlannedMeal]:
        slot = MealType(meal_type)
        return [m for m in self.planned_meals if m.day == day and m.meal_type == slot]

    def get_all_meals(self) -> List[PlannedMeal]:
        return list(self.planned_meals)

    # --- Persistence -------------------------------------------------------
    def _save_meals(self):
        self._kv.set(PLANNED_MEALS_KEY, [m.to_dict() for m in self.planned_meals])

    def _load_meals(self):
        raw = self._kv.get(PLANNED_MEALS_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring planned meals stored as %s", type(raw).__name__)
            return
        for entry in raw:
            try:
                self.planned_meals.append(PlannedMeal.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable planned meal %r: %s", entry, e)

    def __len__(self) -> int:
        return len(self.planned_meals)

    def __str__(self) -> str:
        meals_str = ",\n\t".join(str(m) for m in self.planned_meals)
        return f"Planned meals:\n\t{meals_str}"

    __repr__ = __str__


__all__ = ['PlannerStore']
