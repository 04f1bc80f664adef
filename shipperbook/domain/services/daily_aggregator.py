"""
DAILY AGGREGATOR

Per calendar day (and optionally per shift) order totals.

RESPONSIBILITIES:
- Select the orders booked on one local calendar date
- Narrow them to a shift when asked
- Fold count, cash total and transfer total with exact integer sums

Pure: the caller hands in the order snapshot, nothing is cached.
"""

from datetime import date, tzinfo
from typing import Iterable, List

from shipperbook.domain.models import DailyStats, Order, PaymentMethod, ShiftFilter
from shipperbook.domain.services.shift_classifier import matches_filter
from shipperbook.utils.time import LOCAL_TZ, as_calendar_date, calendar_date_of


def _select(
    orders: Iterable[Order],
    target_date: date,
    shift_filter: ShiftFilter,
    tz: tzinfo,
) -> List[Order]:
    day = as_calendar_date(target_date, tz)
    return [
        order
        for order in orders
        if calendar_date_of(order.timestamp, tz) == day
        and matches_filter(order, shift_filter, tz)
    ]


def aggregate(
    orders: Iterable[Order],
    target_date: date,
    shift_filter: ShiftFilter = ShiftFilter.ALL,
    tz: tzinfo = LOCAL_TZ,
) -> DailyStats:
    """
    Compute DailyStats for ``target_date``.

    Args:
        orders: Full order collection (any iteration order)
        target_date: Calendar date to summarize
        shift_filter: ALL, DAY or NIGHT
        tz: Zone the calendar date and shift hour are read in

    Returns:
        DailyStats with cash_total + transfer_total == combined_total
    """
    count = 0
    cash_total = 0
    transfer_total = 0

    for order in _select(orders, target_date, shift_filter, tz):
        count += 1
        if order.payment_method == PaymentMethod.CASH:
            cash_total += order.amount
        else:
            transfer_total += order.amount

    return DailyStats(
        count=count,
        cash_total=cash_total,
        transfer_total=transfer_total,
    )


def orders_for_date(
    orders: Iterable[Order],
    target_date: date,
    shift_filter: ShiftFilter = ShiftFilter.ALL,
    tz: tzinfo = LOCAL_TZ,
) -> List[Order]:
    """Orders booked on ``target_date``, newest first"""
    selected = _select(orders, target_date, shift_filter, tz)
    # id breaks ties so equal timestamps list deterministically
    return sorted(selected, key=lambda o: (o.timestamp, o.id), reverse=True)
