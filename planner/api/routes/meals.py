import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from planner.api.context import AppContext, get_context
from planner.domain.PlannedMeal import PlannedMeal
from planner.utilities.constants import DAYS_OF_WEEK
from planner.utilities.validators import PlannedMealInput

router = APIRouter(prefix="/api/meals", tags=["planner"])
logger = logging.getLogger(__name__)


def _meal_dict(ctx: AppContext, meal: PlannedMeal):
    recipe = ctx.catalog.get_recipe(meal.recipe_id)
    return {
        **meal.to_dict(),
        'day_name': DAYS_OF_WEEK[meal.day],
        'meal_label': meal.meal_type.label,
        'recipe_name': recipe.name if recipe else None,
    }


@router.get("")
def list_meals(day: Optional[int] = Query(default=None, ge=0, le=6), ctx: AppContext = Depends(get_context)):
    meals = ctx.planner.get_all_meals() if day is None else ctx.planner.meals_for_day(day)
    meals = sorted(meals, key=lambda m: (m.day, list(type(m.meal_type)).index(m.meal_type)))
    return {"count": len(meals), "meals": [_meal_dict(ctx, m) for m in meals]}


@router.post("", status_code=201)
def add_meal(payload: PlannedMealInput, ctx: AppContext = Depends(get_context)):
    recipe = ctx.catalog.get_recipe(payload.recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    if not recipe.is_complete:
        raise HTTPException(status_code=400, detail="Recipe has no ingredients and cannot be planned")
    meal = ctx.planner.add_meal(PlannedMeal(
        recipe_id=recipe.id, headcount=payload.headcount, day=payload.day, meal_type=payload.meal_type
    ))
    logger.info("Planned %s for %d on day %d (%s)", recipe.name, meal.headcount, meal.day, meal.meal_type.value)
    return _meal_dict(ctx, meal)


@router.delete("/{meal_id}")
def remove_meal(meal_id: str, ctx: AppContext = Depends(get_context)):
    removed = ctx.planner.remove_meal(meal_id)
    if removed is None:
        raise HTTPException(status_code=404, detail="Planned meal not found")
    logger.info("Removed planned meal %s", meal_id)
    return {"removed": removed.to_dict()}


@router.delete("")
def clear_meals(ctx: AppContext = Depends(get_context)):
    return {"removed": ctx.planner.clear()}
