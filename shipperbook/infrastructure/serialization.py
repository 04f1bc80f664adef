"""
Order Record Codec
Durable flat representation of orders (export / import payloads)

Field names and enum values are a compatibility contract:
    id, description?, orderCode?, amount, paymentMethod ("CASH"|"TRANSFER"),
    timestamp (epoch ms), shift? ("DAY"|"NIGHT")

Records without ``shift`` predate shift tracking and must keep loading.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from shipperbook.domain.errors import MalformedRecordError, ValidationError
from shipperbook.domain.models import (
    MAX_AMOUNT,
    MAX_ID_LENGTH,
    MAX_ORDER_CODE_LENGTH,
    MAX_TIMESTAMP_MS,
    MIN_TIMESTAMP_MS,
    Order,
    PaymentMethod,
    Shift,
)

logger = logging.getLogger(__name__)


class OrderRecord(BaseModel):
    """Wire shape of one stored order"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: StrictStr = Field(..., min_length=1, max_length=MAX_ID_LENGTH)
    description: Optional[str] = None
    order_code: Optional[str] = Field(None, alias="orderCode", max_length=MAX_ORDER_CODE_LENGTH)
    amount: StrictInt = Field(..., gt=0, le=MAX_AMOUNT)
    payment_method: PaymentMethod = Field(..., alias="paymentMethod")
    timestamp: StrictInt = Field(..., ge=MIN_TIMESTAMP_MS, le=MAX_TIMESTAMP_MS)
    shift: Optional[Shift] = None


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a batch of stored records"""
    orders: Tuple[Order, ...] = ()
    skipped: Tuple[MalformedRecordError, ...] = ()


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def order_to_record(order: Order) -> Dict[str, Any]:
    """Serialize an order; absent optional fields are omitted, never inferred"""
    record = OrderRecord(
        id=order.id,
        description=order.description,
        order_code=order.order_code,
        amount=order.amount,
        payment_method=order.payment_method,
        timestamp=order.timestamp,
        shift=order.shift,
    )
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)


def order_from_record(raw: Any, index: Optional[int] = None) -> Order:
    """
    Parse one stored record.

    Raises:
        MalformedRecordError: missing required field or unparseable value
    """
    if not isinstance(raw, dict):
        raise MalformedRecordError(index, f"expected an object, got {type(raw).__name__}")

    try:
        record = OrderRecord.model_validate(raw)
    except PydanticValidationError as exc:
        raise MalformedRecordError(index, _describe(exc)) from exc

    try:
        return Order(
            id=record.id,
            amount=record.amount,
            payment_method=record.payment_method,
            timestamp=record.timestamp,
            description=record.description,
            order_code=record.order_code,
            shift=record.shift,
        )
    except ValidationError as exc:
        raise MalformedRecordError(index, str(exc)) from exc


def load_orders(raw_records: Any) -> LoadResult:
    """
    Load a stored collection, skipping malformed records.

    Each bad record is logged and reported in ``LoadResult.skipped``; the
    valid ones always survive. A payload that is not a list at all is
    rejected as a whole rather than read as an empty collection.
    """
    if not isinstance(raw_records, list):
        raise MalformedRecordError(None, "expected a list of order records")

    orders: List[Order] = []
    skipped: List[MalformedRecordError] = []
    seen_ids = set()

    for index, raw in enumerate(raw_records):
        try:
            order = order_from_record(raw, index=index)
        except MalformedRecordError as exc:
            logger.warning(f"Skipping stored order: {exc}")
            skipped.append(exc)
            continue

        if order.id in seen_ids:
            exc = MalformedRecordError(index, f"duplicate id {order.id!r}")
            logger.warning(f"Skipping stored order: {exc}")
            skipped.append(exc)
            continue

        seen_ids.add(order.id)
        orders.append(order)

    if skipped:
        logger.warning(f"Loaded {len(orders)} orders, skipped {len(skipped)} malformed records")

    return LoadResult(orders=tuple(orders), skipped=tuple(skipped))


def dump_orders(orders: Iterable[Order]) -> List[Dict[str, Any]]:
    return [order_to_record(order) for order in orders]
