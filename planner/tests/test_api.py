import tempfile
import unittest
from fastapi.testclient import TestClient
from planner.api.api_run import create_app
from planner.api.context import AppContext


class TestPlannerAPI(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.client = TestClient(create_app(context=AppContext(self.tmp.name, auto_update=True)))
        self.tomates = self._article("Tomates", "Fruits et légumes", "pièce(s)")
        self.huile = self._article("Huile d'olive", "Épicerie", "cuillère(s) à soupe")
        resp = self.client.post('/api/recipes', json={
            'name': 'Salade de tomates',
            'ingredients': [
                {'article_id': self.tomates['id'], 'quantity': 3},
                {'article_id': self.huile['id'], 'quantity': 1},
            ],
        })
        self.assertEqual(resp.status_code, 201)
        self.recipe = resp.json()

    def tearDown(self):
        self.tmp.cleanup()

    def _article(self, name, category, unit):
        resp = self.client.post('/api/articles', json={'name': name, 'category': category, 'unit': unit})
        self.assertEqual(resp.status_code, 201)
        return resp.json()['article']

    def _rows(self):
        resp = self.client.get('/api/shopping-list')
        self.assertEqual(resp.status_code, 200)
        return {row['article_id']: row for group in resp.json()['categories'] for row in group['items']}

    def _plan(self, headcount=2, day=0, meal_type='lunch'):
        resp = self.client.post('/api/meals', json={
            'recipe_id': self.recipe['id'], 'headcount': headcount, 'day': day, 'meal_type': meal_type
        })
        self.assertEqual(resp.status_code, 201)
        return resp.json()

    def test_health(self):
        resp = self.client.get('/api/health')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['recipes'], 1)

    def test_planning_fills_shopping_list(self):
        meal = self._plan(headcount=3)
        self.assertEqual(meal['day_name'], 'Lundi')
        self.assertEqual(meal['recipe_name'], 'Salade de tomates')
        rows = self._rows()
        self.assertEqual(rows[self.tomates['id']]['quantity'], 9)
        self.assertEqual(rows[self.tomates['id']]['display'], '9 pièce(s)')
        self.assertEqual(rows[self.huile['id']]['display'], '0.1 L')

    def test_categories_are_grouped(self):
        self._plan()
        resp = self.client.get('/api/shopping-list')
        categories = [g['category'] for g in resp.json()['categories']]
        self.assertEqual(categories, ['Épicerie', 'Fruits et légumes'])

    def test_manual_edit_survives_meal_removal(self):
        meal = self._plan(headcount=2)
        item_id = self._rows()[self.tomates['id']]['id']
        resp = self.client.patch(f'/api/shopping-list/items/{item_id}', json={'quantity': 10})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['manual_quantity'], 4)

        resp = self.client.delete(f"/api/meals/{meal['id']}")
        self.assertEqual(resp.status_code, 200)
        rows = self._rows()
        self.assertEqual(rows[self.tomates['id']]['quantity'], 4)
        self.assertNotIn(self.huile['id'], rows)

    def test_add_toggle_delete_item(self):
        sel = self._article("Sel", "Épicerie", "pincée(s)")
        resp = self.client.post('/api/shopping-list/items', json={'article_id': sel['id'], 'quantity': 2})
        self.assertEqual(resp.status_code, 201)
        item = resp.json()
        self.assertTrue(item['is_manually_added'])
        self.assertEqual(item['display'], '1 paquet')

        resp = self.client.post(f"/api/shopping-list/items/{item['id']}/toggle")
        self.assertTrue(resp.json()['is_checked'])

        resp = self.client.delete(f"/api/shopping-list/items/{item['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertNotIn(sel['id'], self._rows())
        self.assertEqual(self.client.delete(f"/api/shopping-list/items/{item['id']}").status_code, 404)

    def test_errors(self):
        resp = self.client.post('/api/meals', json={'recipe_id': 'nope', 'day': 0})
        self.assertEqual(resp.status_code, 404)
        resp = self.client.post('/api/meals', json={'recipe_id': self.recipe['id'], 'day': 9})
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post('/api/meals', json={'recipe_id': self.recipe['id'], 'day': 0, 'headcount': 11})
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post('/api/shopping-list/items', json={'article_id': 'nope'})
        self.assertEqual(resp.status_code, 404)
        resp = self.client.patch('/api/shopping-list/items/nope', json={'quantity': 1})
        self.assertEqual(resp.status_code, 404)
        resp = self.client.post('/api/recipes', json={
            'name': 'Fantôme', 'ingredients': [{'article_id': 'nope', 'quantity': 1}]
        })
        self.assertEqual(resp.status_code, 400)

    def test_incomplete_recipe_cannot_be_planned(self):
        draft = self.client.post('/api/recipes', json={'name': 'Brouillon'}).json()
        self.assertFalse(draft['is_complete'])
        resp = self.client.post('/api/meals', json={'recipe_id': draft['id'], 'day': 1})
        self.assertEqual(resp.status_code, 400)
        plannable = self.client.get('/api/recipes', params={'plannable': 1}).json()
        self.assertEqual([r['id'] for r in plannable['recipes']], [self.recipe['id']])

    def test_delete_recipe_removes_meals(self):
        self._plan()
        resp = self.client.delete(f"/api/recipes/{self.recipe['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['removed_meals'], 1)
        self.assertEqual(self.client.get('/api/meals').json()['count'], 0)
        self.assertEqual(self._rows(), {})

    def test_clear_meals(self):
        self._plan(day=0)
        self._plan(day=3, meal_type='dinner')
        self.assertEqual(self.client.get('/api/meals', params={'day': 3}).json()['count'], 1)
        self.assertEqual(self.client.delete('/api/meals').json()['removed'], 2)
        self.assertEqual(self._rows(), {})

    def test_article_search_and_dedupe(self):
        resp = self.client.post('/api/articles', json={'name': 'tomate', 'category': 'X', 'unit': 'g'})
        self.assertFalse(resp.json()['created'])
        self.assertEqual(resp.json()['article']['id'], self.tomates['id'])
        data = self.client.get('/api/articles', params={'q': 'tomat'}).json()
        self.assertEqual([a['id'] for a in data['articles']], [self.tomates['id']])
        data = self.client.get('/api/articles', params={'q': 'tomtes'}).json()
        self.assertEqual(data['articles'], [])
        self.assertEqual([a['id'] for a in data['suggestions']], [self.tomates['id']])

    def test_merge_duplicate_articles_gives_one_line(self):
        doublon = self.client.post('/api/articles', json={
            'name': 'Tomate grappe', 'category': 'Fruits et légumes', 'unit': 'pièce(s)'
        }).json()
        self.assertTrue(doublon['created'])
        doublon = doublon['article']
        soupe = self.client.post('/api/recipes', json={
            'name': 'Soupe', 'ingredients': [{'article_id': doublon['id'], 'quantity': 2}]
        }).json()
        self._plan(headcount=2)
        self.client.post('/api/meals', json={'recipe_id': soupe['id'], 'headcount': 2, 'day': 1})
        self.client.post('/api/shopping-list/items', json={'article_id': doublon['id'], 'quantity': 1})
        self.assertEqual(self._rows()[doublon['id']]['quantity'], 5)

        resp = self.client.post('/api/articles/merge', json={
            'keep_id': self.tomates['id'], 'remove_id': doublon['id']
        })
        self.assertEqual(resp.status_code, 200)
        rows = self._rows()
        self.assertNotIn(doublon['id'], rows)
        self.assertEqual(rows[self.tomates['id']]['quantity'], 11)
        self.assertEqual(rows[self.tomates['id']]['manual_quantity'], 1)

        resp = self.client.post('/api/articles/merge', json={
            'keep_id': self.tomates['id'], 'remove_id': doublon['id']
        })
        self.assertEqual(resp.status_code, 404)
        resp = self.client.post('/api/articles/merge', json={
            'keep_id': self.tomates['id'], 'remove_id': self.tomates['id']
        })
        self.assertEqual(resp.status_code, 400)

    def test_edit_recipe_updates_planned_demand(self):
        self._plan(headcount=2)
        resp = self.client.put(f"/api/recipes/{self.recipe['id']}", json={
            'name': 'Salade de tomates',
            'ingredients': [{'article_id': self.tomates['id'], 'quantity': 5}],
        })
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['id'], self.recipe['id'])
        rows = self._rows()
        self.assertEqual(rows[self.tomates['id']]['quantity'], 10)
        self.assertNotIn(self.huile['id'], rows)
        self.assertEqual(self.client.get('/api/meals').json()['count'], 1)

        resp = self.client.put('/api/recipes/nope', json={'name': 'X'})
        self.assertEqual(resp.status_code, 404)
        resp = self.client.put(f"/api/recipes/{self.recipe['id']}", json={
            'name': 'X', 'ingredients': [{'article_id': 'nope', 'quantity': 1}]
        })
        self.assertEqual(resp.status_code, 400)

    def test_delete_article(self):
        resp = self.client.delete(f"/api/articles/{self.tomates['id']}")
        self.assertEqual(resp.status_code, 400)
        sel = self._article("Sel", "Épicerie", "pincée(s)")
        self.assertEqual(self.client.delete(f"/api/articles/{sel['id']}").status_code, 200)
        self.assertEqual(self.client.delete(f"/api/articles/{sel['id']}").status_code, 404)

    def test_delete_shopping_list_rebuilds_current(self):
        self._plan(headcount=2)
        current = self.client.get('/api/shopping-list').json()
        item_id = self._rows()[self.tomates['id']]['id']
        self.client.patch(f'/api/shopping-list/items/{item_id}', json={'quantity': 20})

        resp = self.client.delete(f"/api/shopping-list/{current['id']}")
        self.assertEqual(resp.status_code, 200)
        fresh = resp.json()['current']
        self.assertNotEqual(fresh['id'], current['id'])
        rows = self._rows()
        self.assertEqual(rows[self.tomates['id']]['quantity'], 6)
        self.assertEqual(rows[self.tomates['id']]['manual_quantity'], 0)
        self.assertEqual(self.client.delete(f"/api/shopping-list/{current['id']}").status_code, 404)
