import os
import tempfile
import unittest
from datetime import datetime
from planner.domain.Article import Article
from planner.domain.Recipe import Recipe, RecipeIngredient
from planner.domain.ShoppingList import ShoppingList
from planner.domain.ShoppingListItem import ShoppingListItem
from planner.infra.Catalog_Repository import CatalogRepository
from planner.infra.Shopping_Repository import ShoppingListRepository


class TestCatalogRepository(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, 'catalog.json')
        self.catalog = CatalogRepository(self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_add_article_dedupes_similar_names(self):
        tomate = self.catalog.add_article("Tomate", "Fruits et légumes", "pièce(s)")
        self.assertIs(self.catalog.add_article("tomates", "Fruits et légumes", "pièce(s)"), tomate)
        self.assertIs(self.catalog.add_article("  Tomate ", "Autre", "g"), tomate)
        self.assertEqual(len(self.catalog.list_articles()), 1)

    def test_non_food_articles_are_separate(self):
        self.catalog.add_article("Sel", "Épicerie", "pincée(s)")
        self.catalog.add_article("Sac", "Maison", "pièce(s)", is_food=False)
        self.assertEqual([a.name for a in self.catalog.list_articles(food_only=True)], ["Sel"])
        self.assertEqual(len(self.catalog.list_articles()), 2)

    def test_recipes_persist_and_plannable(self):
        pates = self.catalog.add_article("Pâtes", "Épicerie", "g")
        full = self.catalog.save_recipe(Recipe("Carbonara", ingredients=[RecipeIngredient(pates.id, 100)]))
        self.catalog.save_recipe(Recipe("Brouillon"))
        reloaded = CatalogRepository(self.path)
        self.assertEqual(len(reloaded.list_recipes()), 2)
        self.assertEqual([r.id for r in reloaded.plannable_recipes()], [full.id])
        self.assertEqual(reloaded.get_recipe(full.id).ingredients[0].quantity, 100)

    def test_save_recipe_rejects_unknown_articles(self):
        with self.assertRaises(ValueError):
            self.catalog.save_recipe(Recipe("X", ingredients=[RecipeIngredient("nope", 1)]))

    def test_delete_article_refused_while_used(self):
        oeuf = self.catalog.add_article("Œuf", "Crèmerie", "pièce(s)")
        recipe = self.catalog.save_recipe(Recipe("Omelette", ingredients=[RecipeIngredient(oeuf.id, 2)]))
        with self.assertRaises(ValueError):
            self.catalog.delete_article(oeuf.id)
        self.catalog.delete_recipe(recipe.id)
        self.assertIs(self.catalog.delete_article(oeuf.id), oeuf)
        self.assertIsNone(self.catalog.get_article(oeuf.id))

    def test_merge_articles_moves_recipe_ingredients(self):
        tomate = self.catalog.add_article("Tomate", "Fruits et légumes", "pièce(s)")
        doublon = self.catalog.save_article(Article("Tomates rondes", "Fruits et légumes", "pièce(s)"))
        salade = self.catalog.save_recipe(Recipe("Salade", ingredients=[RecipeIngredient(doublon.id, 3)]))
        sauce = self.catalog.save_recipe(Recipe("Sauce", ingredients=[
            RecipeIngredient(tomate.id, 2), RecipeIngredient(doublon.id, 4, is_optional=True)
        ]))
        self.assertIs(self.catalog.merge_articles(tomate.id, doublon.id), tomate)

        reloaded = CatalogRepository(self.path)
        self.assertIsNone(reloaded.get_article(doublon.id))
        self.assertEqual([(i.article_id, i.quantity) for i in reloaded.get_recipe(salade.id).ingredients],
                         [(tomate.id, 3)])
        sauce_ingredients = reloaded.get_recipe(sauce.id).ingredients
        self.assertEqual([(i.article_id, i.quantity, i.is_optional) for i in sauce_ingredients],
                         [(tomate.id, 6, False)])

    def test_merge_articles_rejects_bad_ids(self):
        tomate = self.catalog.add_article("Tomate", "Fruits et légumes", "pièce(s)")
        with self.assertRaises(ValueError):
            self.catalog.merge_articles(tomate.id, tomate.id)
        self.assertIsNone(self.catalog.merge_articles(tomate.id, "missing"))
        self.assertIsNone(self.catalog.merge_articles("missing", tomate.id))

    def test_unknown_ids_return_none(self):
        self.assertIsNone(self.catalog.get_article("x"))
        self.assertIsNone(self.catalog.get_recipe("x"))
        self.assertIsNone(self.catalog.delete_recipe("x"))


class TestShoppingListRepository(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, 'shopping.json')
        self.repo = ShoppingListRepository(self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_get_or_create_current_is_stored_once(self):
        first = self.repo.get_or_create_current()
        self.assertIs(self.repo.get_or_create_current(), first)
        self.assertEqual(len(ShoppingListRepository(self.path).all_lists()), 1)

    def test_current_is_most_recently_modified(self):
        old = ShoppingList(modification_date=datetime(2024, 1, 1))
        recent = ShoppingList(modification_date=datetime(2024, 2, 1))
        self.repo.save(recent)
        self.repo.save(old)
        self.assertEqual(ShoppingListRepository(self.path).current().id, recent.id)

    def test_insert_and_delete_item(self):
        shopping_list = self.repo.get_or_create_current()
        item = ShoppingListItem("pain", quantity=1, shopping_list_id=shopping_list.id)
        self.repo.insert(item)
        self.assertIs(self.repo.find_item(item.id), item)
        self.repo.delete(item)
        self.assertIsNone(self.repo.find_item(item.id))
        with self.assertRaises(ValueError):
            self.repo.insert(ShoppingListItem("orphan"))

    def test_transaction_commits(self):
        with self.repo.transaction() as repo:
            shopping_list = repo.get_or_create_current()
            shopping_list.add_item(ShoppingListItem("lait", quantity=2))
            repo.save(shopping_list)
        stored = ShoppingListRepository(self.path).get(shopping_list.id)
        self.assertEqual([i.article_id for i in stored.items], ["lait"])

    def test_transaction_rolls_back(self):
        shopping_list = self.repo.get_or_create_current()
        shopping_list.add_item(ShoppingListItem("lait", quantity=2))
        self.repo.save(shopping_list)

        with self.assertRaises(RuntimeError):
            with self.repo.transaction() as repo:
                current = repo.get_or_create_current()
                current.items[0].quantity = 99
                current.add_item(ShoppingListItem("beurre", quantity=1))
                repo.save(current)
                raise RuntimeError("save failed")

        current = self.repo.current()
        self.assertEqual([(i.article_id, i.quantity) for i in current.items], [("lait", 2)])
        stored = ShoppingListRepository(self.path).current()
        self.assertEqual([(i.article_id, i.quantity) for i in stored.items], [("lait", 2)])

    def test_merge_article_in_every_list(self):
        older = ShoppingList(modification_date=datetime(2024, 1, 1), items=[
            ShoppingListItem("tomates", quantity=2, is_manually_added=True, manual_quantity=2)
        ])
        current = ShoppingList(modification_date=datetime(2024, 2, 1), items=[
            ShoppingListItem("tomate", quantity=4), ShoppingListItem("tomates", quantity=1)
        ])
        self.repo.save(older)
        self.repo.save(current)
        self.assertEqual(self.repo.merge_article("tomate", "tomates"), 2)
        stored = ShoppingListRepository(self.path)
        self.assertEqual([(i.article_id, i.quantity) for i in stored.get(current.id).items], [("tomate", 5)])
        self.assertEqual([i.article_id for i in stored.get(older.id).items], ["tomate"])
        self.assertEqual(self.repo.merge_article("tomate", "tomates"), 0)

    def test_delete_list(self):
        shopping_list = self.repo.get_or_create_current()
        self.assertIs(self.repo.delete_list(shopping_list.id), shopping_list)
        self.assertIsNone(self.repo.current())
