"""Simple Event Bus / Observer implementation for planner and shopping list changes.

Event names used so far:
  planner.meal_added -> payload {"meal": PlannedMeal}
  planner.meal_removed -> payload {"meal": PlannedMeal}
  planner.cleared -> payload {"count": int}
  shopping.reconciled -> payload {"shopping_list": ShoppingList, "inserted": int, "updated": int, "deleted": int}

Subscribers are callables taking (event_name, payload). A bus is created by the
application and handed to whoever publishes or listens; there is no shared
module-level instance.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLANNER_MEAL_ADDED = "planner.meal_added"
PLANNER_MEAL_REMOVED = "planner.meal_removed"
PLANNER_CLEARED = "planner.cleared"
SHOPPING_RECONCILED = "shopping.reconciled"

ALL_EVENTS = "*"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		"""Register callback for event_name ('*' receives every event)."""
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		callbacks = list(self._subscribers.get(event_name, [])) + list(self._subscribers.get(ALL_EVENTS, []))
		for cb in callbacks:
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


__all__ = [
	'EventBus', 'ALL_EVENTS',
	'PLANNER_MEAL_ADDED', 'PLANNER_MEAL_REMOVED', 'PLANNER_CLEARED', 'SHOPPING_RECONCILED'
]
