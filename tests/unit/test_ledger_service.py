"""
Unit Tests for LedgerService

Uses an in-memory OrderStore so the service is tested without a database.
"""

from datetime import date, datetime
from typing import Dict, List
from zoneinfo import ZoneInfo

import pytest

from shipperbook.domain.errors import DuplicateId, MalformedRecordError, NotFound, ValidationError
from shipperbook.domain.models import DailyStats, Order, PaymentMethod, Shift, ShiftFilter
from shipperbook.domain.services.ledger_service import LedgerService
from conftest import local_ms, make_order

TZ = ZoneInfo("Asia/Ho_Chi_Minh")
DAY_X = date(2026, 10, 10)


# Mock store for testing
class MockOrderStore:
    """In-memory OrderStore"""

    def __init__(self):
        self.orders: Dict[str, Order] = {}
        self.list_calls = 0

    async def append(self, order: Order) -> None:
        if order.id in self.orders:
            raise DuplicateId(order.id)
        self.orders[order.id] = order

    async def remove(self, order_id: str) -> None:
        if order_id not in self.orders:
            raise NotFound(order_id)
        del self.orders[order_id]

    async def list(self) -> List[Order]:
        self.list_calls += 1
        return list(self.orders.values())


@pytest.fixture
def store():
    return MockOrderStore()


@pytest.fixture
def ledger(store):
    return LedgerService(store, tz=TZ)


@pytest.fixture
async def seeded(store):
    await store.append(make_order("cash", 100000, PaymentMethod.CASH, local_ms(2026, 10, 10, 8, tz=TZ)))
    await store.append(make_order("transfer", 50000, PaymentMethod.TRANSFER, local_ms(2026, 10, 10, 20, tz=TZ)))
    return store


class TestRecordOrder:

    @pytest.mark.asyncio
    async def test_records_into_store(self, ledger, store):
        order = await ledger.record_order(
            amount=25000,
            payment_method=PaymentMethod.CASH,
            target_date=DAY_X,
            now=datetime(2026, 10, 18, 19, 30, tzinfo=TZ),
        )

        assert store.orders[order.id] == order
        assert order.shift == Shift.NIGHT

    @pytest.mark.asyncio
    async def test_invalid_amount_never_reaches_store(self, ledger, store):
        with pytest.raises(ValidationError):
            await ledger.record_order(amount=0, payment_method=PaymentMethod.CASH)
        assert store.orders == {}


class TestDeleteOrder:

    @pytest.mark.asyncio
    async def test_delete_existing(self, ledger, seeded):
        await ledger.delete_order("cash")
        assert set(seeded.orders) == {"transfer"}

    @pytest.mark.asyncio
    async def test_delete_missing_reports_not_found(self, ledger, seeded):
        before = dict(seeded.orders)
        with pytest.raises(NotFound):
            await ledger.delete_order("does-not-exist")
        assert seeded.orders == before


class TestDerivations:

    @pytest.mark.asyncio
    async def test_daily_stats(self, ledger, seeded):
        assert await ledger.daily_stats(DAY_X) == DailyStats(2, 100000, 50000)
        assert await ledger.daily_stats(DAY_X, ShiftFilter.NIGHT) == DailyStats(1, 0, 50000)

    @pytest.mark.asyncio
    async def test_settlement(self, ledger, seeded):
        result = await ledger.settlement(DAY_X)
        assert (result.total_revenue, result.cash_on_hand) == (150000, 100000)

    @pytest.mark.asyncio
    async def test_trend(self, ledger, seeded):
        points = await ledger.trend(DAY_X)
        assert len(points) == 7
        assert points[-1].total == 150000

    @pytest.mark.asyncio
    async def test_orders_for_date(self, ledger, seeded):
        listed = await ledger.orders_for_date(DAY_X)
        assert [o.id for o in listed] == ["transfer", "cash"]

    @pytest.mark.asyncio
    async def test_every_query_reads_fresh_snapshot(self, ledger, seeded):
        before = await ledger.daily_stats(DAY_X)
        await seeded.append(make_order("late", 5000, PaymentMethod.CASH, local_ms(2026, 10, 10, 23, tz=TZ)))
        after = await ledger.daily_stats(DAY_X)

        assert after.count == before.count + 1
        assert seeded.list_calls == 2


class TestImportExport:

    @pytest.mark.asyncio
    async def test_export_then_import_into_empty_store(self, ledger, seeded):
        records = await ledger.export_records()

        target = LedgerService(MockOrderStore(), tz=TZ)
        summary = await target.import_records(records)

        assert summary.imported == 2
        assert summary.skipped == 0
        assert await target.daily_stats(DAY_X) == await ledger.daily_stats(DAY_X)

    @pytest.mark.asyncio
    async def test_import_skips_bad_and_existing(self, ledger, seeded):
        payload = [
            {"id": "cash", "amount": 100000, "paymentMethod": "CASH", "timestamp": local_ms(2026, 10, 10, 8, tz=TZ)},
            {"id": "new", "amount": 7000, "paymentMethod": "TRANSFER", "timestamp": local_ms(2026, 10, 10, 9, tz=TZ)},
            {"id": "bad", "amount": -1, "paymentMethod": "CASH", "timestamp": 0},
        ]
        summary = await ledger.import_records(payload)

        assert (summary.imported, summary.skipped, summary.duplicates) == (1, 1, 1)
        assert len(summary.errors) == 1
        assert set(seeded.orders) == {"cash", "transfer", "new"}

    @pytest.mark.asyncio
    async def test_import_rejects_non_list(self, ledger, seeded):
        with pytest.raises(MalformedRecordError):
            await ledger.import_records({"id": "x"})
        assert len(seeded.orders) == 2
