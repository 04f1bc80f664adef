"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from shipperbook.domain.errors import ValidationError

# Largest amount the BIGINT amount column holds
MAX_AMOUNT = 2**63 - 1

# Width of the id and order_code columns
MAX_ID_LENGTH = 64
MAX_ORDER_CODE_LENGTH = 64

# Instants every timezone can render as a local datetime (one day of slack
# inside the datetime range on both ends)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MIN_TIMESTAMP_MS = (datetime(1, 1, 2, tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1)
MAX_TIMESTAMP_MS = (datetime(9999, 12, 30, tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1)


class PaymentMethod(str, Enum):
    """How the customer paid for an order"""
    CASH = "CASH"
    TRANSFER = "TRANSFER"


class Shift(str, Enum):
    """Work shift an order belongs to"""
    DAY = "DAY"
    NIGHT = "NIGHT"


class ShiftFilter(str, Enum):
    """Shift restriction for daily queries"""
    ALL = "ALL"
    DAY = "DAY"
    NIGHT = "NIGHT"


@dataclass(frozen=True)
class Order:
    """
    A delivered order - Immutable

    ``shift`` is None on records created before shift tracking existed.
    It is resolved at read time and never written back.
    """
    id: str
    amount: int
    payment_method: PaymentMethod
    timestamp: int
    description: Optional[str] = None
    order_code: Optional[str] = None
    shift: Optional[Shift] = None

    def __post_init__(self):
        if not self.id:
            raise ValidationError("Order id cannot be empty")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError("Order amount must be an integer")
        if self.amount <= 0:
            raise ValidationError("Order amount must be positive")
        if self.amount > MAX_AMOUNT:
            raise ValidationError(f"Order amount must not exceed {MAX_AMOUNT}")
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
            raise ValidationError("Order timestamp must be an integer")
        if not MIN_TIMESTAMP_MS <= self.timestamp <= MAX_TIMESTAMP_MS:
            raise ValidationError(f"Order timestamp {self.timestamp} is out of range")

    @property
    def is_cash(self) -> bool:
        return self.payment_method == PaymentMethod.CASH


@dataclass(frozen=True)
class DailyStats:
    """Totals for one calendar day - Immutable"""
    count: int = 0
    cash_total: int = 0
    transfer_total: int = 0

    @property
    def combined_total(self) -> int:
        return self.cash_total + self.transfer_total


@dataclass(frozen=True)
class TrendPoint:
    """One day of the rolling revenue series - Immutable"""
    date: date
    total: int
    is_reference_date: bool


@dataclass(frozen=True)
class Settlement:
    """Cash owed to the shop owner for one day - Immutable"""
    date: date
    total_revenue: int
    cash_on_hand: int

    @property
    def transfer_total(self) -> int:
        """Revenue that settles electronically"""
        return self.total_revenue - self.cash_on_hand
