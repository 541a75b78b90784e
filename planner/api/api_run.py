from fastapi import FastAPI

from pathlib import Path
from typing import Optional, Union
import logging

from planner.api.context import AppContext
from planner.api.routes import meals, shopping, catalog

# Logging
logger = logging.getLogger("planner_app")


def create_app(data_dir: Optional[Union[str, Path]] = None, context: Optional[AppContext] = None) -> FastAPI:
    """Build the API around one AppContext (created from data_dir unless given)."""
    app = FastAPI(title="Meal Planner & Shopping List API")
    app.state.ctx = context if context is not None else AppContext(data_dir)

    app.include_router(meals.router)
    app.include_router(shopping.router)
    app.include_router(catalog.router)

    @app.get("/api/health")
    def health():
        ctx = app.state.ctx
        return {
            "status": "ok",
            "planned_meals": len(ctx.planner),
            "recipes": len(ctx.catalog.list_recipes()),
            "auto_update": ctx.auto_update,
        }

    logger.info("Planner API ready (data: %s)", app.state.ctx.catalog.path.parent)
    return app
