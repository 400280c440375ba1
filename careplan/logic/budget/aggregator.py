"""Monthly unit aggregation.

total = sum over weekdays of (daily units * WEEKS_PER_MONTH) + monthly bucket units
"""
from typing import Dict

from careplan.domain.Catalog import DEFAULT_CATALOG
from careplan.domain.Errors import NotFound, UnknownDefinition
from careplan.domain.Plan import Plan
from careplan.domain.ServiceDefinition import ServiceDefinition
from careplan.utilities.constants import WEEKS_PER_MONTH

__all__ = ["definition_of", "daily_units", "monthly_bucket_units", "total_monthly_units"]


def definition_of(assignment, catalog=DEFAULT_CATALOG) -> ServiceDefinition:
    """Catalog definition an assignment points at; UnknownDefinition if retired."""
    try:
        return catalog.service_definition(assignment.definition_id)
    except NotFound:
        raise UnknownDefinition(assignment.definition_id) from None


def daily_units(plan: Plan, catalog=DEFAULT_CATALOG) -> Dict[str, int]:
    """Un-weighted unit sum of each weekday slot (units for one such day)."""
    return {
        day: sum(definition_of(a, catalog).units_per_occurrence for a in assignments)
        for day, assignments in plan.weekday_slots.items()
    }


def monthly_bucket_units(plan: Plan, catalog=DEFAULT_CATALOG) -> int:
    return sum(definition_of(a, catalog).units_per_occurrence
               for a in plan.monthly_bucket)


def total_monthly_units(plan: Plan, catalog=DEFAULT_CATALOG, weeks_per_month: int = WEEKS_PER_MONTH) -> int:
    weekly = sum(units * weeks_per_month for units in daily_units(plan, catalog).values())
    return weekly + monthly_bucket_units(plan, catalog)
