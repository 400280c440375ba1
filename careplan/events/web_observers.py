"""Web-facing observers for care plan events.

This module subscribes to the GLOBAL_EVENT_BUS for:
  - plan.over_limit
  - plan.monthly_duplicate_ignored

and stores a lightweight in-memory ring buffer of recent notices that the
web layer can poll (GET /api/alerts?since=<cursor>) to warn the user that
the schedule exceeds the care level cap, or that a monthly service was
already present.

Each notice gets an auto-increment integer id so clients only fetch newer
ones. The buffer is per process and capped at MAX_EVENTS.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PLAN_OVER_LIMIT, PLAN_MONTHLY_DUPLICATE_IGNORED
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        }
        if isinstance(payload, dict):
            for k in ('owner', 'total_units', 'cap', 'overage_units', 'definition_id'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(PLAN_OVER_LIMIT, _record)
    GLOBAL_EVENT_BUS.subscribe(PLAN_MONTHLY_DUPLICATE_IGNORED, _record)
    _started = True


def get_events(since: int | None = None, owner: Any = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally only those of one owner.

    If since is None, returns the last N (up to MAX_EVENTS) events.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        if owner is not None:
            data = [e for e in data if e.get('owner') == owner]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
