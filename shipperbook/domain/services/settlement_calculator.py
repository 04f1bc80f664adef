"""
SETTLEMENT CALCULATOR

Cash the courier holds for a day and owes back to the shop owner.
Transfer payments settle electronically and are not handed over.

Confirming a settlement is a host-side acknowledgment; nothing is recorded here.
"""

from datetime import date, tzinfo
from typing import Iterable

from shipperbook.domain.models import Order, PaymentMethod, Settlement
from shipperbook.utils.formatting import format_vnd
from shipperbook.utils.time import LOCAL_TZ, as_calendar_date, is_same_calendar_day


def settle(
    orders: Iterable[Order],
    target_date: date,
    tz: tzinfo = LOCAL_TZ,
) -> Settlement:
    day = as_calendar_date(target_date, tz)
    total_revenue = 0
    cash_on_hand = 0

    for order in orders:
        if not is_same_calendar_day(order.timestamp, day, tz):
            continue
        total_revenue += order.amount
        if order.payment_method == PaymentMethod.CASH:
            cash_on_hand += order.amount

    return Settlement(
        date=day,
        total_revenue=total_revenue,
        cash_on_hand=cash_on_hand,
    )


def handover_message(settlement: Settlement) -> str:
    """Text shown when the courier confirms the settlement"""
    return f"Cash to hand over for {settlement.date:%d/%m}: {format_vnd(settlement.cash_on_hand)}"
