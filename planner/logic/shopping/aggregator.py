"""Quantity aggregation: total article demand implied by the planned meals.

Provides aggregate(planned_meals, recipe_lookup) -> {article_id: quantity}.
"""
import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from planner.domain.PlannedMeal import PlannedMeal
from planner.domain.Recipe import Recipe

logger = logging.getLogger(__name__)

RecipeLookup = Callable[[str], Optional[Recipe]]


def resolve_meals(planned_meals: Iterable[PlannedMeal], recipe_lookup: RecipeLookup) -> List[Tuple[Recipe, int]]:
    """Pair each planned meal with its recipe; meals whose recipe is gone are dropped."""
    resolved: List[Tuple[Recipe, int]] = []
    for meal in planned_meals:
        recipe = recipe_lookup(meal.recipe_id)
        if recipe is None:
            logger.debug("Skipping meal %s: recipe %s not found", meal.id, meal.recipe_id)
            continue
        resolved.append((recipe, meal.headcount))
    return resolved


def aggregate(planned_meals: Iterable[PlannedMeal], recipe_lookup: RecipeLookup) -> Dict[str, float]:
    """Sum per-person ingredient quantities times headcount, keyed by article id.

    Optional ingredients are counted like required ones. No rounding is applied.
    """
    totals: Dict[str, float] = defaultdict(float)
    for recipe, headcount in resolve_meals(planned_meals, recipe_lookup):
        for ingredient in recipe.ingredients:
            totals[ingredient.article_id] += ingredient.quantity * headcount
    return dict(totals)


__all__ = ['aggregate', 'resolve_meals']
