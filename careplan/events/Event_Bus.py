"""Simple Event Bus / Observer implementation for care plan notifications.

Event names used so far:
  plan.service_assigned -> payload {"slot": str, "assignment": ServiceAssignment, "definition": ServiceDefinition}
  plan.service_removed -> payload {"slot": str, "instance_id": str}
  plan.monthly_duplicate_ignored -> payload {"definition_id": str, "assignment": ServiceAssignment, "owner": Any}
  plan.care_level_changed -> payload {"care_level": CareLevel}
  plan.loaded -> payload {"dropped": int}
  plan.over_limit -> payload {"total_units": int, "cap": int, "overage_units": int, "owner": Any}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_SERVICE_ASSIGNED = "plan.service_assigned"
PLAN_SERVICE_REMOVED = "plan.service_removed"
PLAN_MONTHLY_DUPLICATE_IGNORED = "plan.monthly_duplicate_ignored"
PLAN_CARE_LEVEL_CHANGED = "plan.care_level_changed"
PLAN_LOADED = "plan.loaded"
PLAN_OVER_LIMIT = "plan.over_limit"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()

__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'PLAN_SERVICE_ASSIGNED', 'PLAN_SERVICE_REMOVED', 'PLAN_MONTHLY_DUPLICATE_IGNORED',
	'PLAN_CARE_LEVEL_CHANGED', 'PLAN_LOADED', 'PLAN_OVER_LIMIT'
]
