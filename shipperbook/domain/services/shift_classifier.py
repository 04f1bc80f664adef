"""
SHIFT CLASSIFIER

Assigns a Day/Night shift to an order.

RULES:
✅ A stored shift is authoritative (covers manual overrides)
✅ Otherwise the local hour decides: [18, 24) -> NIGHT, [0, 18) -> DAY
❌ Never writes the inferred shift back into the record
"""

from datetime import tzinfo

from shipperbook.domain.models import Order, Shift, ShiftFilter
from shipperbook.utils.time import LOCAL_TZ, to_local

NIGHT_SHIFT_START_HOUR = 18


def shift_for_timestamp(timestamp_ms: int, tz: tzinfo = LOCAL_TZ) -> Shift:
    """Shift implied by the local hour of a timestamp"""
    hour = to_local(timestamp_ms, tz).hour
    return Shift.NIGHT if hour >= NIGHT_SHIFT_START_HOUR else Shift.DAY


def classify(order: Order, tz: tzinfo = LOCAL_TZ) -> Shift:
    """
    Resolve the shift of an order.

    Records created before shift tracking carry no shift; for those the
    shift is inferred from the timestamp on every read.
    """
    if order.shift is not None:
        return order.shift
    return shift_for_timestamp(order.timestamp, tz)


def matches_filter(order: Order, shift_filter: ShiftFilter, tz: tzinfo = LOCAL_TZ) -> bool:
    if shift_filter == ShiftFilter.ALL:
        return True
    return classify(order, tz).value == shift_filter.value
