"""Plan summary: the figures a schedule screen shows for one plan.

Everything is re-derived from the Plan snapshot on each call.
"""
from typing import Any, Dict, List

from careplan.domain.Catalog import DEFAULT_CATALOG
from careplan.domain.Plan import Plan
from careplan.logic.billing.cost import compute_cost
from careplan.logic.budget.aggregator import definition_of, daily_units, monthly_bucket_units, total_monthly_units
from careplan.logic.budget.evaluator import evaluate, usage_percent
from careplan.utilities.config import UNIT_PRICE, CO_PAY_RATIO
from careplan.utilities.constants import WEEKS_PER_MONTH


def _service_rows(assignments, catalog) -> List[Dict[str, Any]]:
    rows = []
    for a in assignments:
        d = definition_of(a, catalog)
        rows.append({
            'instance_id': a.instance_id,
            'definition_id': d.id,
            'name': d.name,
            'icon': d.icon,
            'units': d.units_per_occurrence,
        })
    return rows


def compute_plan_summary(plan: Plan, catalog=DEFAULT_CATALOG, *, unit_price=UNIT_PRICE,
                         co_pay_ratio=CO_PAY_RATIO) -> Dict[str, Any]:
    """Aggregate units, budget verdict and cost for the given plan.

    Returns structure:
    {
      'care_level': {'level': int, 'name': str, 'max_units': int},
      'days': {
         '月': {'services': [{instance_id, definition_id, name, icon, units}, ...],
                'units_per_day': int, 'monthly_units': int},
         ...
      },
      'monthly': {'services': [...], 'units': int},
      'total_units': int, 'cap': int, 'within_limit': bool, 'overage_units': int,
      'usage_percent': float, 'cost': int
    }
    """
    per_day = daily_units(plan, catalog)
    days = {}
    for day, assignments in plan.weekday_slots.items():
        days[day] = {
            'services': _service_rows(assignments, catalog),
            'units_per_day': per_day[day],
            'monthly_units': per_day[day] * WEEKS_PER_MONTH,
        }

    total = total_monthly_units(plan, catalog)
    cap = plan.care_level.max_units
    verdict = evaluate(total, cap)
    return {
        'care_level': plan.care_level.to_dict(),
        'days': days,
        'monthly': {
            'services': _service_rows(plan.monthly_bucket, catalog),
            'units': monthly_bucket_units(plan, catalog),
        },
        'total_units': total,
        'cap': cap,
        'within_limit': verdict.within_limit,
        'overage_units': verdict.overage_units,
        'usage_percent': round(usage_percent(total, cap), 1),
        'cost': compute_cost(total, cap, unit_price, co_pay_ratio),
    }

__all__ = ["compute_plan_summary"]
