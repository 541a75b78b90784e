import logging

from fastapi import APIRouter, Depends, HTTPException

from planner.api.context import AppContext, get_context
from planner.domain.ShoppingList import ShoppingList
from planner.logic.shopping.display import group_by_category, item_row
from planner.logic.shopping.reconciler import (
    add_manual_item, apply_manual_edit, remove_item, toggle_checked
)
from planner.utilities.validators import ManualItemInput, ManualEditInput

router = APIRouter(prefix="/api/shopping-list", tags=["shopping"])
logger = logging.getLogger(__name__)


def _list_payload(ctx: AppContext, shopping_list: ShoppingList):
    categories = group_by_category(shopping_list, ctx.catalog.get_article)
    return {
        "id": shopping_list.id,
        "creation_date": shopping_list.creation_date.isoformat(),
        "modification_date": shopping_list.modification_date.isoformat(),
        "count": len(shopping_list.items),
        "categories": categories,
    }


def _item_or_404(shopping_list: ShoppingList, item_id: str):
    item = shopping_list.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Shopping list item not found")
    return item


@router.get("")
def current_list(ctx: AppContext = Depends(get_context)):
    return _list_payload(ctx, ctx.shopping.get_or_create_current())


@router.post("/refresh")
def refresh_list(ctx: AppContext = Depends(get_context)):
    return _list_payload(ctx, ctx.updater.update())


@router.post("/items", status_code=201)
def add_item(payload: ManualItemInput, ctx: AppContext = Depends(get_context)):
    article = ctx.catalog.get_article(payload.article_id)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    with ctx.shopping.transaction() as repo:
        shopping_list = repo.get_or_create_current()
        item = add_manual_item(shopping_list, article.id, payload.quantity)
        repo.save(shopping_list)
    logger.info("Added %s x %s by hand", article.name, payload.quantity)
    return item_row(item, article)


@router.patch("/items/{item_id}")
def edit_item(item_id: str, payload: ManualEditInput, ctx: AppContext = Depends(get_context)):
    with ctx.shopping.transaction() as repo:
        shopping_list = repo.get_or_create_current()
        item = _item_or_404(shopping_list, item_id)
        apply_manual_edit(item, payload.quantity)
        shopping_list.touch()
        repo.save(shopping_list)
    return item_row(item, ctx.catalog.get_article(item.article_id))


@router.post("/items/{item_id}/toggle")
def toggle_item(item_id: str, ctx: AppContext = Depends(get_context)):
    with ctx.shopping.transaction() as repo:
        shopping_list = repo.get_or_create_current()
        item = toggle_checked(_item_or_404(shopping_list, item_id))
        repo.save(shopping_list)
    return item_row(item, ctx.catalog.get_article(item.article_id))


@router.delete("/items/{item_id}")
def delete_item(item_id: str, ctx: AppContext = Depends(get_context)):
    with ctx.shopping.transaction() as repo:
        shopping_list = repo.get_or_create_current()
        removed = remove_item(shopping_list, item_id)
        if removed is None:
            raise HTTPException(status_code=404, detail="Shopping list item not found")
        repo.save(shopping_list)
    return {"removed": removed.to_dict()}


@router.delete("/{list_id}")
def delete_list(list_id: str, ctx: AppContext = Depends(get_context)):
    """Delete a shopping list; the current list is then rebuilt from the plan."""
    removed = ctx.shopping.delete_list(list_id)
    if removed is None:
        raise HTTPException(status_code=404, detail="Shopping list not found")
    logger.info("Shopping list %s deleted (%d item(s))", list_id, len(removed.items))
    return {"removed": list_id, "current": _list_payload(ctx, ctx.updater.update())}
