"""
LEDGER SERVICE

Binds an order store to the pure derivations.

RESPONSIBILITIES:
- Admit new orders and deletions through the store
- Take one snapshot of the collection per query and derive from it
- Import / export the durable record format

RULES:
❌ No cached aggregates, every query re-reads the store
❌ No settlement state, confirmation lives in the caller
✅ Store errors (DuplicateId, NotFound) propagate unchanged
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any, Dict, List, Optional, Protocol

from shipperbook.domain.errors import DuplicateId
from shipperbook.domain.models import (
    DailyStats,
    Order,
    PaymentMethod,
    Settlement,
    Shift,
    ShiftFilter,
    TrendPoint,
)
from shipperbook.domain.services import daily_aggregator, settlement_calculator, trend_builder
from shipperbook.domain.services.order_factory import create_order
from shipperbook.infrastructure.serialization import dump_orders, load_orders
from shipperbook.utils.time import LOCAL_TZ

logger = logging.getLogger(__name__)


class OrderStore(Protocol):
    """Protocol for order persistence - ASYNC"""

    async def append(self, order: Order) -> None:
        """Store a new order, DuplicateId if the id is taken"""
        ...

    async def remove(self, order_id: str) -> None:
        """Delete an order, NotFound if the id is absent"""
        ...

    async def list(self) -> List[Order]:
        """Current full collection, iteration order not significant"""
        ...


@dataclass(frozen=True)
class ImportSummary:
    imported: int
    skipped: int
    duplicates: int
    errors: List[str]


class LedgerService:
    """Courier ledger backed by an OrderStore"""

    def __init__(self, store: OrderStore, tz: tzinfo = LOCAL_TZ):
        self.store = store
        self.tz = tz

    async def record_order(
        self,
        *,
        amount: int,
        payment_method: PaymentMethod,
        target_date: Optional[date] = None,
        description: Optional[str] = None,
        order_code: Optional[str] = None,
        shift: Optional[Shift] = None,
        now: Optional[datetime] = None,
    ) -> Order:
        """
        Create and store an order.

        Raises:
            ValidationError: amount is not positive
            DuplicateId: generated id already stored
        """
        order = create_order(
            amount=amount,
            payment_method=payment_method,
            target_date=target_date,
            description=description,
            order_code=order_code,
            shift=shift,
            now=now,
            tz=self.tz,
        )
        await self.store.append(order)
        logger.info(
            f"Recorded order {order.id}: {order.amount} {order.payment_method.value} "
            f"shift={order.shift.value if order.shift else '-'}"
        )
        return order

    async def delete_order(self, order_id: str) -> None:
        """
        Raises:
            NotFound: no order with this id
        """
        await self.store.remove(order_id)
        logger.info(f"Deleted order {order_id}")

    async def orders_for_date(
        self,
        target_date: date,
        shift_filter: ShiftFilter = ShiftFilter.ALL,
    ) -> List[Order]:
        orders = await self.store.list()
        return daily_aggregator.orders_for_date(orders, target_date, shift_filter, tz=self.tz)

    async def daily_stats(
        self,
        target_date: date,
        shift_filter: ShiftFilter = ShiftFilter.ALL,
    ) -> DailyStats:
        orders = await self.store.list()
        return daily_aggregator.aggregate(orders, target_date, shift_filter, tz=self.tz)

    async def trend(self, reference_date: date) -> List[TrendPoint]:
        orders = await self.store.list()
        return trend_builder.build_trend(orders, reference_date, tz=self.tz)

    async def settlement(self, target_date: date) -> Settlement:
        orders = await self.store.list()
        return settlement_calculator.settle(orders, target_date, tz=self.tz)

    async def export_records(self) -> List[Dict[str, Any]]:
        orders = await self.store.list()
        return dump_orders(sorted(orders, key=lambda o: (o.timestamp, o.id)))

    async def import_records(self, raw_records: Any) -> ImportSummary:
        """
        Load durable records into the store.

        Malformed records are skipped and logged. Ids already present in
        the store are left untouched and counted as duplicates.

        Raises:
            MalformedRecordError: payload is not a list of records
        """
        result = load_orders(raw_records)

        imported = 0
        duplicates = 0
        for order in result.orders:
            try:
                await self.store.append(order)
            except DuplicateId:
                logger.info(f"Import: order {order.id} already stored, keeping existing")
                duplicates += 1
                continue
            imported += 1

        logger.info(
            f"Import finished: imported={imported} skipped={len(result.skipped)} "
            f"duplicates={duplicates}"
        )
        return ImportSummary(
            imported=imported,
            skipped=len(result.skipped),
            duplicates=duplicates,
            errors=[str(exc) for exc in result.skipped],
        )
