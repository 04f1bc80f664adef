"""
Database Models (SQLAlchemy ORM)
Orders are immutable: rows are inserted and deleted, never updated
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column, DateTime, Enum as SQLEnum, String, Text

from shipperbook.domain.models import MAX_ID_LENGTH, MAX_ORDER_CODE_LENGTH, PaymentMethod, Shift
from shipperbook.infrastructure.db.database import Base


def _utcnow_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class OrderModel(Base):
    """A delivered order"""
    __tablename__ = "orders"

    id = Column(String(MAX_ID_LENGTH), primary_key=True)
    description = Column(Text, nullable=True)
    order_code = Column(String(MAX_ORDER_CODE_LENGTH), nullable=True)

    # Smallest currency unit, always > 0
    amount = Column(BigInteger, nullable=False)
    payment_method = Column(SQLEnum(PaymentMethod, name="payment_method"), nullable=False)

    # Epoch milliseconds; calendar bucketing happens in Python, in local time
    timestamp_ms = Column(BigInteger, nullable=False, index=True)

    # NULL for records created before shift tracking
    shift = Column(SQLEnum(Shift, name="shift"), nullable=True)

    created_at = Column(DateTime, nullable=False, default=_utcnow_naive)
