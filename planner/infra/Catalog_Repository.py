"""Catalog repository: articles and recipes persisted in one JSON file.

Provides the lookups the shopping engine consumes (`get_recipe`, `get_article`),
both returning None for unknown ids instead of raising.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from planner.domain.Article import Article
from planner.domain.Recipe import Recipe
from planner.infra.json_files import load_json, atomic_write_json
from planner.logic.catalog.matching import find_similar_article

logger = logging.getLogger(__name__)


class CatalogRepository:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._articles: Dict[str, Article] = {}
        self._recipes: Dict[str, Recipe] = {}
        self._load()

    # --- Lookups -----------------------------------------------------------
    def get_article(self, article_id: str) -> Optional[Article]:
        return self._articles.get(article_id)

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        return self._recipes.get(recipe_id)

    def list_articles(self, food_only: bool = False) -> List[Article]:
        articles = [a for a in self._articles.values() if a.is_food or not food_only]
        return sorted(articles, key=lambda a: a.name.lower())

    def list_recipes(self) -> List[Recipe]:
        return sorted(self._recipes.values(), key=lambda r: r.name.lower())

    def plannable_recipes(self) -> List[Recipe]:
        """Recipes that can be assigned to a meal slot (at least one ingredient)."""
        return [r for r in self.list_recipes() if r.is_complete]

    # --- Mutations ---------------------------------------------------------
    def add_article(self, name: str, category: str, unit: str, is_food: bool = True) -> Article:
        '''
        Creates an article unless a similar one already exists, in which case
        the existing article is returned unchanged.
        '''
        name = name.strip()
        if not name or not category.strip() or not unit.strip():
            raise ValueError("Article name, category and unit are required")
        candidates = self.list_articles(food_only=is_food)
        existing = find_similar_article(name, candidates)
        if existing is not None:
            logger.info("Article '%s' matches existing '%s'", name, existing.name)
            return existing
        article = Article(name=name, category=category.strip(), unit=unit.strip(), is_food=is_food)
        self.save_article(article)
        return article

    def save_article(self, article: Article) -> Article:
        self._articles[article.id] = article
        self._persist()
        return article

    def delete_article(self, article_id: str) -> Optional[Article]:
        '''
        Deletes an article. Refused while a recipe still uses it.
        '''
        users = [r.name for r in self._recipes.values()
                 if any(ing.article_id == article_id for ing in r.ingredients)]
        if users:
            raise ValueError(f"Article is used by recipe(s): {', '.join(sorted(users))}")
        removed = self._articles.pop(article_id, None)
        if removed is not None:
            self._persist()
        return removed

    def merge_articles(self, keep_id: str, remove_id: str) -> Optional[Article]:
        '''
        Merges a duplicate article into the one kept: every recipe ingredient
        pointing at `remove_id` is moved to `keep_id` (quantities summed when
        the recipe already uses both), then the duplicate is deleted.
        Returns the kept article, None if either id is unknown.
        '''
        if keep_id == remove_id:
            raise ValueError("Cannot merge an article into itself")
        keep = self._articles.get(keep_id)
        if keep is None or remove_id not in self._articles:
            return None
        for recipe in self._recipes.values():
            moved = [ing for ing in recipe.ingredients if ing.article_id == remove_id]
            if not moved:
                continue
            target = next((ing for ing in recipe.ingredients if ing.article_id == keep_id), None)
            for ing in moved:
                if target is None:
                    ing.article_id = keep_id
                    target = ing
                else:
                    target.quantity += ing.quantity
                    target.is_optional = target.is_optional and ing.is_optional
                    recipe.ingredients.remove(ing)
        removed = self._articles.pop(remove_id)
        self._persist()
        logger.info("Article '%s' merged into '%s'", removed.name, keep.name)
        return keep

    def save_recipe(self, recipe: Recipe) -> Recipe:
        unknown = [ing.article_id for ing in recipe.ingredients if ing.article_id not in self._articles]
        if unknown:
            raise ValueError(f"Unknown article id(s) in recipe '{recipe.name}': {', '.join(unknown)}")
        self._recipes[recipe.id] = recipe
        self._persist()
        return recipe

    def delete_recipe(self, recipe_id: str) -> Optional[Recipe]:
        removed = self._recipes.pop(recipe_id, None)
        if removed is not None:
            self._persist()
        return removed

    # --- Persistence -------------------------------------------------------
    def _load(self):
        data = load_json(self.path, {})
        if not isinstance(data, dict):
            logger.error("Catalog file %s does not hold an object; starting empty", self.path)
            return
        for entry in data.get('articles', []):
            try:
                article = Article.from_dict(entry)
            except (TypeError, ValueError) as e:
                logger.warning("Skipping unreadable article %r: %s", entry, e)
                continue
            self._articles[article.id] = article
        for entry in data.get('recipes', []):
            try:
                recipe = Recipe.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable recipe %r: %s", entry, e)
                continue
            self._recipes[recipe.id] = recipe

    def _persist(self):
        atomic_write_json(self.path, {
            'articles': [a.to_dict() for a in self._articles.values()],
            'recipes': [r.to_dict() for r in self._recipes.values()],
        })


__all__ = ['CatalogRepository']
