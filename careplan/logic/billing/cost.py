"""Out-of-pocket cost for a month of care services.

Usage up to the cap is subsidised (the user pays ``co_pay_ratio`` of it);
usage beyond the cap is billed at the full unit price. Arithmetic is done
in Decimal so flooring never drops a yen to binary float error.
"""
from decimal import Decimal, ROUND_FLOOR
from typing import Union

from careplan.domain.Errors import InvalidArgument
from careplan.utilities.config import UNIT_PRICE, CO_PAY_RATIO

__all__ = ["compute_cost"]

Number = Union[int, float, Decimal, str]


def _to_decimal(name: str, value: Number) -> Decimal:
    d = value if isinstance(value, Decimal) else Decimal(str(value))
    if d < 0:
        raise InvalidArgument(f"{name} cannot be negative: {value}")
    return d


def compute_cost(total_units: int, cap: int, unit_price: Number = UNIT_PRICE,
                 co_pay_ratio: Number = CO_PAY_RATIO) -> int:
    total = _to_decimal("total_units", total_units)
    limit = _to_decimal("cap", cap)
    price = _to_decimal("unit_price", unit_price)
    ratio = _to_decimal("co_pay_ratio", co_pay_ratio)

    if total <= limit:
        cost = total * price * ratio
    else:
        cost = limit * price * ratio + (total - limit) * price
    return int(cost.to_integral_value(rounding=ROUND_FLOOR))
