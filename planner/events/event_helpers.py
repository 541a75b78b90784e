"""Event helper utilities.

Thin publishing helpers so the planner store and the shopping list updater
build payloads the same way.

Quick import:
    from planner.events.event_helpers import (
        publish_meal_added, publish_meal_removed, publish_planner_cleared, publish_reconciled
    )
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    EventBus,
    PLANNER_MEAL_ADDED, PLANNER_MEAL_REMOVED, PLANNER_CLEARED, SHOPPING_RECONCILED
)

__all__ = [
    'publish_meal_added', 'publish_meal_removed', 'publish_planner_cleared', 'publish_reconciled',
]


def publish_meal_added(bus: Optional[EventBus], meal: Any):
    """Publish a planner.meal_added event."""
    if bus is not None:
        bus.publish(PLANNER_MEAL_ADDED, {'meal': meal})


def publish_meal_removed(bus: Optional[EventBus], meal: Any):
    """Publish a planner.meal_removed event."""
    if bus is not None:
        bus.publish(PLANNER_MEAL_REMOVED, {'meal': meal})


def publish_planner_cleared(bus: Optional[EventBus], count: int):
    if bus is not None:
        bus.publish(PLANNER_CLEARED, {'count': count})


def publish_reconciled(bus: Optional[EventBus], shopping_list: Any, result: Any):
    """Publish a shopping.reconciled event.

    Payload structure:
        {
          'shopping_list': <ShoppingList>,
          'inserted': <int>, 'updated': <int>, 'deleted': <int>
        }
    """
    if bus is not None:
        bus.publish(SHOPPING_RECONCILED, {
            'shopping_list': shopping_list,
            'inserted': len(result.inserted),
            'updated': len(result.updated),
            'deleted': len(result.deleted),
        })
