"""Plan value: selected care level, seven weekday slots and the monthly bucket.

A Plan is a read-only snapshot. PlanStore owns the mutable state and hands
out Plans for persistence and for the unit/cost derivations.
"""
import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from careplan.domain.CareLevel import CareLevel
from careplan.domain.ServiceAssignment import ServiceAssignment
from careplan.domain.Errors import NotFound
from careplan.utilities.constants import MONTHLY_SLOT, WEEKDAYS

logger = logging.getLogger(__name__)


class Plan:
    def __init__(self, care_level: CareLevel,
                 weekday_slots: Optional[Mapping[str, Iterable[ServiceAssignment]]] = None,
                 monthly_bucket: Optional[Iterable[ServiceAssignment]] = None):
        slots = weekday_slots or {}
        unknown_days = set(slots) - set(WEEKDAYS)
        if unknown_days:
            raise ValueError(f"Unknown weekday slot(s): {sorted(unknown_days)}")
        self._care_level = care_level
        self._weekday_slots = MappingProxyType({day: tuple(slots.get(day, ())) for day in WEEKDAYS})
        self._monthly_bucket = tuple(monthly_bucket or ())

    @property
    def care_level(self) -> CareLevel:
        return self._care_level

    @property
    def weekday_slots(self) -> Mapping[str, tuple]:
        return self._weekday_slots

    @property
    def monthly_bucket(self) -> tuple:
        return self._monthly_bucket

    def assignments(self):
        """Yield (slot, assignment) pairs, weekdays first then the monthly bucket."""
        for day in WEEKDAYS:
            for assignment in self._weekday_slots[day]:
                yield day, assignment
        for assignment in self._monthly_bucket:
            yield MONTHLY_SLOT, assignment

    def is_empty(self) -> bool:
        return not self._monthly_bucket and not any(self._weekday_slots.values())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Plan):
            return NotImplemented
        return (self._care_level == other._care_level
                and dict(self._weekday_slots) == dict(other._weekday_slots)
                and self._monthly_bucket == other._monthly_bucket)

    def __str__(self) -> str:
        days = ", ".join(f"{d}: {len(a)}" for d, a in self._weekday_slots.items())
        return f"Plan({self._care_level.name} | {days} | monthly: {len(self._monthly_bucket)})"

    __repr__ = __str__

    def to_dict(self) -> Dict:
        '''Converts the Plan to the persisted snapshot shape.'''
        return {
            "care_level": self._care_level.level,
            "weekday_slots": {day: [a.to_dict() for a in assignments]
                              for day, assignments in self._weekday_slots.items()},
            "monthly_bucket": [a.to_dict() for a in self._monthly_bucket],
        }

    @staticmethod
    def from_dict(data, catalog) -> "Plan":
        '''Builds a Plan from a persisted snapshot.

        Unknown care levels fall back to the catalog default. Malformed
        assignment entries and unknown weekday keys are skipped with a
        warning. Unknown definition ids are kept here; PlanStore.load
        decides what to drop.
        '''
        d = dict(data) if isinstance(data, Mapping) else {}
        try:
            care_level = catalog.care_level_by_rank(int(d.get("care_level")))
        except (NotFound, TypeError, ValueError):
            care_level = catalog.default_care_level()
            logger.warning("Snapshot care level %r not recognised, using %s",
                           d.get("care_level"), care_level.name)

        slots: Dict[str, List[ServiceAssignment]] = {}
        raw_slots = d.get("weekday_slots") or {}
        if isinstance(raw_slots, Mapping):
            for day, entries in raw_slots.items():
                if day not in WEEKDAYS:
                    logger.warning("Skipping unknown weekday slot %r in snapshot", day)
                    continue
                slots[day] = _parse_assignments(entries, day)
        monthly = _parse_assignments(d.get("monthly_bucket") or [], MONTHLY_SLOT)
        return Plan(care_level, slots, monthly)


def _parse_assignments(entries, slot: str) -> List[ServiceAssignment]:
    parsed: List[ServiceAssignment] = []
    if not isinstance(entries, list):
        logger.warning("Slot %s in snapshot is not a list, ignoring it", slot)
        return parsed
    for entry in entries:
        try:
            parsed.append(ServiceAssignment.from_dict(entry))
        except (KeyError, TypeError) as e:
            logger.warning("Skipping malformed assignment %r in slot %s: %s", entry, slot, e)
    return parsed
