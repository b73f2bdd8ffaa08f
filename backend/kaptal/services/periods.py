"""Month/year helpers shared by the aggregation services."""

import calendar
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")


def month_window(month: int, year: int) -> Tuple[datetime, datetime]:
    """Inclusive [first day 00:00:00, last day 23:59:59] bounds of a month."""
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime.combine(date(year, month, last_day), time(23, 59, 59))
    return start, end


def resolve_period(month: Optional[int], year: Optional[int]) -> Tuple[int, int]:
    """Fill a missing month or year with the current one."""
    today = date.today()
    return (month or today.month, year or today.year)


def round2(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def usage_percentage(spent: Decimal, budget: Decimal) -> Decimal:
    """spent/budget as a percentage with 2 decimals; 0 whenever budget <= 0."""
    if budget <= 0:
        return Decimal("0.00")
    return round2(spent / budget * HUNDRED)


def shift_month(month: int, year: int, offset: int) -> Tuple[int, int]:
    """Month `offset` months away from (month, year); negative goes back."""
    index = year * 12 + (month - 1) + offset
    return index % 12 + 1, index // 12
