"""Shopping list updater: planned meals -> aggregated demand -> reconciled current list.

Wires the planner store, the catalog and the shopping list repository around
aggregate() and reconcile(). Each update runs inside one repository
transaction, so a failed save leaves the stored list untouched and the call
can simply be retried.
"""
import logging
from datetime import datetime
from typing import Optional

from planner.domain.ShoppingList import ShoppingList
from planner.events.Event_Bus import EventBus
from planner.events.event_helpers import publish_reconciled
from planner.infra.Catalog_Repository import CatalogRepository
from planner.infra.Planner_Store import PlannerStore
from planner.infra.Shopping_Repository import ShoppingListRepository
from planner.logic.shopping.aggregator import aggregate
from planner.logic.shopping.reconciler import reconcile, ReconcileResult

logger = logging.getLogger(__name__)


class ShoppingListUpdater:
    def __init__(self, planner: PlannerStore, catalog: CatalogRepository,
                 repository: ShoppingListRepository, event_bus: Optional[EventBus] = None):
        self.planner = planner
        self.catalog = catalog
        self.repository = repository
        self._event_bus = event_bus if event_bus is not None else planner.event_bus

    def update(self, now: Optional[datetime] = None) -> ShoppingList:
        with self.repository.transaction() as repo:
            shopping_list = repo.get_or_create_current(now)
            demand = aggregate(self.planner.get_all_meals(), self.catalog.get_recipe)
            result: ReconcileResult = reconcile(shopping_list, demand, now)
            repo.save(shopping_list)
        logger.info("Shopping list %s updated from %d planned meal(s): +%d ~%d -%d",
                    shopping_list.id, len(self.planner), len(result.inserted),
                    len(result.updated), len(result.deleted))
        publish_reconciled(self._event_bus, shopping_list, result)
        return shopping_list


__all__ = ['ShoppingListUpdater']
