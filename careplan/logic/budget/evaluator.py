"""Budget evaluation: compare monthly units against the care level cap."""
from __future__ import annotations

from typing import NamedTuple

from careplan.domain.Errors import InvalidArgument

__all__ = ["BudgetVerdict", "evaluate", "usage_percent"]


class BudgetVerdict(NamedTuple):
    within_limit: bool
    overage_units: int


def _check_non_negative(**values):
    for name, value in values.items():
        if value < 0:
            raise InvalidArgument(f"{name} cannot be negative: {value}")


def evaluate(total_units: int, cap: int) -> BudgetVerdict:
    _check_non_negative(total_units=total_units, cap=cap)
    return BudgetVerdict(total_units <= cap, max(0, total_units - cap))


def usage_percent(total_units: int, cap: int) -> float:
    """Share of the cap consumed, clamped to 100 (gauge value)."""
    _check_non_negative(total_units=total_units, cap=cap)
    if cap == 0:
        return 100.0 if total_units > 0 else 0.0
    return min(total_units / cap * 100, 100.0)
