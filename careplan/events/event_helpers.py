"""Event helper utilities.

Helpers that build the payloads of the care plan events and publish them,
on the global bus unless another bus is given.

Quick import:
    from careplan.events.event_helpers import (
        publish_service_assigned, publish_service_removed, publish_over_limit, ...
    )
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    PLAN_SERVICE_ASSIGNED, PLAN_SERVICE_REMOVED, PLAN_MONTHLY_DUPLICATE_IGNORED,
    PLAN_CARE_LEVEL_CHANGED, PLAN_LOADED, PLAN_OVER_LIMIT
)

__all__ = [
    'publish_service_assigned', 'publish_service_removed', 'publish_monthly_duplicate',
    'publish_care_level_changed', 'publish_plan_loaded', 'publish_over_limit'
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_service_assigned(slot: str, assignment: Any, definition: Any, bus: Optional[EventBus] = None):
    """Publish a plan.service_assigned event."""
    _bus(bus).publish(PLAN_SERVICE_ASSIGNED, {
        'slot': slot,
        'assignment': assignment,
        'definition': definition
    })


def publish_service_removed(slot: str, instance_id: str, bus: Optional[EventBus] = None):
    _bus(bus).publish(PLAN_SERVICE_REMOVED, {'slot': slot, 'instance_id': instance_id})


def publish_monthly_duplicate(definition_id: str, assignment: Any, owner: Any = None,
                              bus: Optional[EventBus] = None):
    """Publish a plan.monthly_duplicate_ignored event (re-adding a monthly service is a no-op)."""
    _bus(bus).publish(PLAN_MONTHLY_DUPLICATE_IGNORED, {
        'definition_id': definition_id,
        'assignment': assignment,
        'owner': owner
    })


def publish_care_level_changed(care_level: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(PLAN_CARE_LEVEL_CHANGED, {'care_level': care_level})


def publish_plan_loaded(dropped: int, bus: Optional[EventBus] = None):
    _bus(bus).publish(PLAN_LOADED, {'dropped': dropped})


def publish_over_limit(total_units: int, cap: int, overage_units: int, owner: Any = None,
                       bus: Optional[EventBus] = None):
    """Publish a plan.over_limit event."""
    _bus(bus).publish(PLAN_OVER_LIMIT, {
        'total_units': total_units,
        'cap': cap,
        'overage_units': overage_units,
        'owner': owner
    })
