"""
Order admission.

Builds new Order records from form input. Invalid amounts are rejected
here so no aggregation ever sees amount <= 0.
"""

import uuid
from datetime import date, datetime, tzinfo
from typing import Callable, Optional

from shipperbook.domain.errors import ValidationError
from shipperbook.domain.models import MAX_AMOUNT, Order, PaymentMethod, Shift
from shipperbook.domain.services.shift_classifier import shift_for_timestamp
from shipperbook.utils.time import LOCAL_TZ, stamp_for_date


def new_order_id() -> str:
    return uuid.uuid4().hex


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def create_order(
    amount: int,
    payment_method: PaymentMethod,
    target_date: Optional[date] = None,
    description: Optional[str] = None,
    order_code: Optional[str] = None,
    shift: Optional[Shift] = None,
    now: Optional[datetime] = None,
    tz: tzinfo = LOCAL_TZ,
    id_factory: Callable[[], str] = new_order_id,
) -> Order:
    """
    Create an order booked on ``target_date`` (today when omitted).

    The timestamp takes the target's calendar date and the current time of
    day. The shift is stored explicitly: the given one, or the shift of
    the new timestamp.

    Raises:
        ValidationError: amount is not a positive integer or is too large
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError("Amount must be a positive integer")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT}")

    if now is None:
        now = datetime.now(tz)
    if target_date is None:
        target_date = now.astimezone(tz).date() if now.tzinfo else now.date()

    timestamp = stamp_for_date(target_date, now=now, tz=tz)

    return Order(
        id=id_factory(),
        amount=amount,
        payment_method=PaymentMethod(payment_method),
        timestamp=timestamp,
        description=_clean_text(description),
        order_code=_clean_text(order_code),
        shift=Shift(shift) if shift is not None else shift_for_timestamp(timestamp, tz),
    )
