"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    PaymentMethod,
    Shift,
    ShiftFilter,

    # Entities
    DailyStats,
    Order,
    Settlement,
    TrendPoint,

    # Limits
    MAX_AMOUNT,
    MAX_ID_LENGTH,
    MAX_ORDER_CODE_LENGTH,
    MAX_TIMESTAMP_MS,
    MIN_TIMESTAMP_MS,
)

__all__ = [
    # Enums
    "PaymentMethod",
    "Shift",
    "ShiftFilter",

    # Entities
    "DailyStats",
    "Order",
    "Settlement",
    "TrendPoint",

    # Limits
    "MAX_AMOUNT",
    "MAX_ID_LENGTH",
    "MAX_ORDER_CODE_LENGTH",
    "MAX_TIMESTAMP_MS",
    "MIN_TIMESTAMP_MS",
]
