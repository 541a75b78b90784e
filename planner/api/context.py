"""Application context: the collaborators built once at startup and shared by the routes."""
import logging
from pathlib import Path
from typing import Any, Optional, Union

from fastapi import Request

from planner.events.Event_Bus import EventBus
from planner.infra.Catalog_Repository import CatalogRepository
from planner.infra.Planner_Store import PlannerStore
from planner.infra.Shopping_Repository import ShoppingListRepository
from planner.infra.kv_store import JsonKeyValueStore
from planner.infra.paths import data_files
from planner.logic.shopping.updater import ShoppingListUpdater
from planner.utilities.config import AUTO_UPDATE_SHOPPING_LIST

logger = logging.getLogger(__name__)


class AppContext:
    def __init__(self, data_dir: Optional[Union[str, Path]] = None, auto_update: bool = AUTO_UPDATE_SHOPPING_LIST):
        catalog_file, shopping_file, planner_file = data_files(data_dir)
        self.event_bus = EventBus()
        self.catalog = CatalogRepository(catalog_file)
        self.planner = PlannerStore(JsonKeyValueStore(planner_file), self.event_bus)
        self.shopping = ShoppingListRepository(shopping_file)
        self.updater = ShoppingListUpdater(self.planner, self.catalog, self.shopping, self.event_bus)
        self.auto_update = auto_update
        if auto_update:
            self.planner.subscribe(self._on_planner_change)

    def _on_planner_change(self, event_name: str, payload: Any):
        logger.debug("Planner changed (%s); updating shopping list", event_name)
        self.updater.update()


def get_context(request: Request) -> AppContext:
    return request.app.state.ctx
