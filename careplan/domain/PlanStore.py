"""PlanStore aggregate: the mutable care plan of one user.

Holds the selected care level, seven weekday slots (ordered, duplicates
allowed) and the monthly bucket (one assignment per definition id). Every
mutation validates first and changes state second, so a raised error never
leaves a half-applied change behind.
"""
import logging
from typing import Dict, List, Optional, Union

from careplan.domain.CareLevel import CareLevel
from careplan.domain.Catalog import Catalog, DEFAULT_CATALOG
from careplan.domain.Errors import InvalidArgument, NotFound, UnknownDefinition, WrongRecurrence
from careplan.domain.Plan import Plan
from careplan.domain.ServiceAssignment import ServiceAssignment
from careplan.domain.ServiceDefinition import ServiceDefinition
from careplan.events.Event_Bus import GLOBAL_EVENT_BUS
from careplan.events.event_helpers import (
    publish_service_assigned, publish_service_removed, publish_monthly_duplicate,
    publish_care_level_changed, publish_plan_loaded, publish_over_limit
)
from careplan.logic.budget.aggregator import total_monthly_units
from careplan.logic.budget.evaluator import evaluate
from careplan.utilities.constants import MONTHLY_SLOT, WEEKDAYS

logger = logging.getLogger(__name__)


class PlanStore:
    def __init__(self, catalog: Catalog = DEFAULT_CATALOG, owner=None):
        self.catalog = catalog
        self.owner = owner  # opaque user handle, only echoed in events
        self._care_level: CareLevel = catalog.default_care_level()
        self._weekday_slots: Dict[str, List[ServiceAssignment]] = {day: [] for day in WEEKDAYS}
        self._monthly_bucket: Dict[str, ServiceAssignment] = {}
        self._event_bus = GLOBAL_EVENT_BUS
        self._over_limit = False

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    # --- Mutations ----------------------------------------------------------
    def assign(self, slot: str, definition_id: str) -> ServiceAssignment:
        '''
        Adds a service to a weekday slot or to the monthly bucket.

        Re-adding a definition already in the monthly bucket returns the
        existing assignment and changes nothing.
        '''
        self._check_slot(slot)
        definition = self._definition(definition_id)
        if definition.is_monthly != (slot == MONTHLY_SLOT):
            raise WrongRecurrence(definition_id, slot)

        if slot == MONTHLY_SLOT:
            existing = self._monthly_bucket.get(definition_id)
            if existing is not None:
                logger.debug("Monthly service %s already present, ignoring", definition_id)
                publish_monthly_duplicate(definition_id, existing, self.owner, bus=self._event_bus)
                return existing
            assignment = ServiceAssignment(definition_id)
            self._monthly_bucket[definition_id] = assignment
        else:
            assignment = ServiceAssignment(definition_id)
            self._weekday_slots[slot].append(assignment)

        logger.debug("Assigned %s to %s", assignment, slot)
        publish_service_assigned(slot, assignment, definition, bus=self._event_bus)
        self._evaluate_budget()
        return assignment

    def remove(self, slot: str, instance_id: str) -> None:
        '''
        Removes the assignment with the given token from a slot. Unknown tokens are ignored.
        '''
        self._check_slot(slot)
        if slot == MONTHLY_SLOT:
            match = next((k for k, a in self._monthly_bucket.items() if a.instance_id == instance_id), None)
            if match is None:
                return
            del self._monthly_bucket[match]
        else:
            assignments = self._weekday_slots[slot]
            kept = [a for a in assignments if a.instance_id != instance_id]
            if len(kept) == len(assignments):
                return
            self._weekday_slots[slot] = kept

        logger.debug("Removed %s from %s", instance_id, slot)
        publish_service_removed(slot, instance_id, bus=self._event_bus)
        self._evaluate_budget()

    def set_care_level(self, level: Union[CareLevel, int]) -> CareLevel:
        if isinstance(level, CareLevel):
            care_level = level
        else:
            care_level = self.catalog.care_level_by_rank(level)
        self._care_level = care_level
        logger.debug("Care level set to %s", care_level)
        publish_care_level_changed(care_level, bus=self._event_bus)
        self._evaluate_budget()
        return care_level

    def load(self, plan: Plan) -> List[ServiceAssignment]:
        '''
        Replaces the whole state with the given plan.

        Assignments that reference unknown definitions, sit in a slot that
        does not match their recurrence, or repeat a monthly definition are
        dropped. Returns the dropped assignments.
        '''
        dropped: List[ServiceAssignment] = []
        slots: Dict[str, List[ServiceAssignment]] = {day: [] for day in WEEKDAYS}
        bucket: Dict[str, ServiceAssignment] = {}

        for slot, assignment in plan.assignments():
            definition = self._definition_or_none(assignment.definition_id)
            if definition is None or definition.is_monthly != (slot == MONTHLY_SLOT):
                logger.warning("Dropping assignment %s in slot %s: %s", assignment, slot,
                               "unknown definition" if definition is None else "wrong recurrence")
                dropped.append(assignment)
            elif slot == MONTHLY_SLOT:
                if assignment.definition_id in bucket:
                    logger.warning("Dropping duplicate monthly assignment %s", assignment)
                    dropped.append(assignment)
                else:
                    bucket[assignment.definition_id] = assignment
            else:
                slots[slot].append(assignment)

        self._care_level = plan.care_level
        self._weekday_slots = slots
        self._monthly_bucket = bucket
        logger.debug("Loaded plan %s (%d dropped)", plan, len(dropped))
        publish_plan_loaded(len(dropped), bus=self._event_bus)
        self._evaluate_budget()
        return dropped

    # --- Read access --------------------------------------------------------
    @property
    def care_level(self) -> CareLevel:
        return self._care_level

    def snapshot(self) -> Plan:
        return Plan(self._care_level, self._weekday_slots, self._monthly_bucket.values())

    def get_slot(self, slot: str) -> List[ServiceAssignment]:
        self._check_slot(slot)
        if slot == MONTHLY_SLOT:
            return list(self._monthly_bucket.values())
        return list(self._weekday_slots[slot])

    def __str__(self) -> str:
        return f"PlanStore[{self.owner}] {self.snapshot()}"

    __repr__ = __str__

    # --- Internals ----------------------------------------------------------
    @staticmethod
    def _check_slot(slot: str):
        if slot != MONTHLY_SLOT and slot not in WEEKDAYS:
            raise InvalidArgument(f"Unknown slot '{slot}'")

    def _definition(self, definition_id: str) -> ServiceDefinition:
        try:
            return self.catalog.service_definition(definition_id)
        except NotFound:
            raise UnknownDefinition(definition_id) from None

    def _definition_or_none(self, definition_id: str) -> Optional[ServiceDefinition]:
        if not self.catalog.has_service(definition_id):
            return None
        return self.catalog.service_definition(definition_id)

    def _evaluate_budget(self):
        # notify only when the plan crosses from within its cap to over it
        total = total_monthly_units(self.snapshot(), self.catalog)
        verdict = evaluate(total, self._care_level.max_units)
        was_over, self._over_limit = self._over_limit, not verdict.within_limit
        if self._over_limit and not was_over:
            logger.warning("Plan of %s went over its cap: %d/%d units",
                           self.owner, total, self._care_level.max_units)
            publish_over_limit(total, self._care_level.max_units, verdict.overage_units,
                               self.owner, bus=self._event_bus)
