"""
TREND SERIES BUILDER

Rolling daily revenue series ending at a reference date.
"""

from collections import Counter
from datetime import date, timedelta, tzinfo
from typing import Iterable, List

from shipperbook.domain.models import Order, TrendPoint
from shipperbook.utils.time import LOCAL_TZ, as_calendar_date, calendar_date_of

TREND_WINDOW_DAYS = 7


def build_trend(
    orders: Iterable[Order],
    reference_date: date,
    tz: tzinfo = LOCAL_TZ,
    days: int = TREND_WINDOW_DAYS,
) -> List[TrendPoint]:
    """
    Build the revenue trend, oldest day first.

    Every order counts regardless of shift or payment method. The last
    point is ``reference_date`` and is the only one flagged as such. The
    output depends on ``(orders, reference_date)`` alone.
    """
    if days < 1:
        raise ValueError("Trend window must cover at least one day")

    reference = as_calendar_date(reference_date, tz)
    window = [reference - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    wanted = set(window)

    totals: Counter = Counter()
    for order in orders:
        day = calendar_date_of(order.timestamp, tz)
        if day in wanted:
            totals[day] += order.amount

    return [
        TrendPoint(
            date=day,
            total=totals[day],
            is_reference_date=(day == reference),
        )
        for day in window
    ]
