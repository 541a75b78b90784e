import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from planner.api.context import AppContext, get_context
from planner.domain.Recipe import Recipe, RecipeIngredient
from planner.logic.catalog.matching import search_articles, suggest_similar
from planner.utilities.validators import ArticleInput, MergeArticlesInput, RecipeInput

router = APIRouter(prefix="/api", tags=["catalog"])
logger = logging.getLogger(__name__)


@router.get("/articles")
def list_articles(q: str = Query(default=""), food_only: int = Query(default=0),
                  ctx: AppContext = Depends(get_context)):
    """Search articles; falls back to similar names when nothing contains the query."""
    articles = ctx.catalog.list_articles()
    results = search_articles(q, articles, food_only=bool(food_only))
    suggestions = [] if results else suggest_similar(q, articles, food_only=bool(food_only))
    return {
        "articles": [a.to_dict() for a in results],
        "suggestions": [a.to_dict() for a in suggestions],
    }


@router.get("/articles/similar")
def similar_articles(q: str = Query(..., min_length=1), ctx: AppContext = Depends(get_context)):
    return {"articles": [a.to_dict() for a in suggest_similar(q, ctx.catalog.list_articles())]}


@router.post("/articles", status_code=201)
def add_article(payload: ArticleInput, ctx: AppContext = Depends(get_context)):
    before = {a.id for a in ctx.catalog.list_articles()}
    article = ctx.catalog.add_article(payload.name, payload.category, payload.unit, payload.is_food)
    return {"article": article.to_dict(), "created": article.id not in before}


@router.delete("/articles/{article_id}")
def delete_article(article_id: str, ctx: AppContext = Depends(get_context)):
    try:
        removed = ctx.catalog.delete_article(article_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if removed is None:
        raise HTTPException(status_code=404, detail="Article not found")
    logger.info("Article '%s' deleted", removed.name)
    return {"removed": removed.to_dict()}


@router.post("/articles/merge")
def merge_articles(payload: MergeArticlesInput, ctx: AppContext = Depends(get_context)):
    """Fold a duplicate article into another one, in recipes and shopping lists."""
    try:
        kept = ctx.catalog.merge_articles(payload.keep_id, payload.remove_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if kept is None:
        raise HTTPException(status_code=404, detail="Article not found")
    lists = ctx.shopping.merge_article(kept.id, payload.remove_id)
    ctx.updater.update()
    return {"article": kept.to_dict(), "shopping_lists": lists}


@router.get("/recipes")
def list_recipes(plannable: Optional[int] = Query(default=None), ctx: AppContext = Depends(get_context)):
    recipes = ctx.catalog.plannable_recipes() if plannable else ctx.catalog.list_recipes()
    return {"count": len(recipes), "recipes": [{**r.to_dict(), "is_complete": r.is_complete} for r in recipes]}


@router.post("/recipes", status_code=201)
def add_recipe(payload: RecipeInput, ctx: AppContext = Depends(get_context)):
    recipe = Recipe(
        name=payload.name,
        description=payload.description,
        photo=payload.photo,
        ingredients=[RecipeIngredient(i.article_id, i.quantity, i.is_optional) for i in payload.ingredients],
    )
    try:
        ctx.catalog.save_recipe(recipe)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Recipe '%s' saved with %d ingredient(s)", recipe.name, len(recipe.ingredients))
    return {**recipe.to_dict(), "is_complete": recipe.is_complete}


@router.delete("/recipes/{recipe_id}")
def delete_recipe(recipe_id: str, ctx: AppContext = Depends(get_context)):
    removed = ctx.catalog.delete_recipe(recipe_id)
    if removed is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    meals = ctx.planner.remove_meals_for_recipe(recipe_id)
    logger.info("Recipe '%s' deleted with %d planned meal(s)", removed.name, len(meals))
    return {"removed": removed.to_dict(), "removed_meals": len(meals)}


@router.put("/recipes/{recipe_id}")
def update_recipe(recipe_id: str, payload: RecipeInput, ctx: AppContext = Depends(get_context)):
    """Replace a recipe's content, keeping its id so planned meals still point at it."""
    if ctx.catalog.get_recipe(recipe_id) is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    recipe = Recipe(
        name=payload.name,
        description=payload.description,
        photo=payload.photo,
        ingredients=[RecipeIngredient(i.article_id, i.quantity, i.is_optional) for i in payload.ingredients],
        id=recipe_id,
    )
    try:
        ctx.catalog.save_recipe(recipe)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    planned = [m for m in ctx.planner.get_all_meals() if m.recipe_id == recipe_id]
    if planned:
        ctx.updater.update()
    logger.info("Recipe '%s' updated (%d planned meal(s) refreshed)", recipe.name, len(planned))
    return {**recipe.to_dict(), "is_complete": recipe.is_complete}
