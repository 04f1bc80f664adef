"""
Unit Tests for the daily aggregator
"""

from datetime import date, datetime
from itertools import permutations
from zoneinfo import ZoneInfo

import pytest

from shipperbook.domain.models import DailyStats, PaymentMethod, Shift, ShiftFilter
from shipperbook.domain.services.daily_aggregator import aggregate, orders_for_date
from conftest import local_ms, make_order

TZ = ZoneInfo("Asia/Ho_Chi_Minh")
DAY_X = date(2026, 10, 10)


@pytest.fixture
def day_x_orders():
    """100k cash at 08:00 and 50k transfer at 20:00, no stored shift"""
    return [
        make_order("cash-morning", 100000, PaymentMethod.CASH, local_ms(2026, 10, 10, 8, tz=TZ)),
        make_order("transfer-evening", 50000, PaymentMethod.TRANSFER, local_ms(2026, 10, 10, 20, tz=TZ)),
    ]


class TestAggregate:

    def test_all_shifts(self, day_x_orders):
        stats = aggregate(day_x_orders, DAY_X, ShiftFilter.ALL, tz=TZ)
        assert stats == DailyStats(count=2, cash_total=100000, transfer_total=50000)
        assert stats.combined_total == 150000

    def test_night_shift(self, day_x_orders):
        stats = aggregate(day_x_orders, DAY_X, ShiftFilter.NIGHT, tz=TZ)
        assert stats == DailyStats(count=1, cash_total=0, transfer_total=50000)

    def test_day_shift(self, day_x_orders):
        stats = aggregate(day_x_orders, DAY_X, ShiftFilter.DAY, tz=TZ)
        assert stats == DailyStats(count=1, cash_total=100000, transfer_total=0)

    def test_empty_collection(self):
        stats = aggregate([], DAY_X, tz=TZ)
        assert stats == DailyStats(count=0, cash_total=0, transfer_total=0)

    def test_other_days_are_excluded(self, day_x_orders):
        others = [
            make_order("prev", 7000, PaymentMethod.CASH, local_ms(2026, 10, 9, 23, 59, 59, tz=TZ)),
            make_order("next", 9000, PaymentMethod.CASH, local_ms(2026, 10, 11, 0, 0, 0, tz=TZ)),
        ]
        stats = aggregate(day_x_orders + others, DAY_X, tz=TZ)
        assert stats.count == 2
        assert stats.combined_total == 150000

    def test_stored_shift_overrides_hour(self):
        orders = [
            make_order("late-but-day", 20000, PaymentMethod.CASH, local_ms(2026, 10, 10, 21, tz=TZ), shift=Shift.DAY),
        ]
        assert aggregate(orders, DAY_X, ShiftFilter.DAY, tz=TZ).count == 1
        assert aggregate(orders, DAY_X, ShiftFilter.NIGHT, tz=TZ).count == 0

    def test_day_and_night_partition_all(self, day_x_orders):
        all_stats = aggregate(day_x_orders, DAY_X, ShiftFilter.ALL, tz=TZ)
        day = aggregate(day_x_orders, DAY_X, ShiftFilter.DAY, tz=TZ)
        night = aggregate(day_x_orders, DAY_X, ShiftFilter.NIGHT, tz=TZ)
        assert day.count + night.count == all_stats.count
        assert day.combined_total + night.combined_total == all_stats.combined_total

    def test_order_independent(self, day_x_orders):
        extra = make_order("noon", 25000, PaymentMethod.CASH, local_ms(2026, 10, 10, 12, tz=TZ))
        collection = day_x_orders + [extra]
        results = {aggregate(list(p), DAY_X, tz=TZ) for p in permutations(collection)}
        assert len(results) == 1

    def test_accepts_datetime_target(self, day_x_orders):
        stats = aggregate(day_x_orders, datetime(2026, 10, 10, 23, 0, tzinfo=TZ), tz=TZ)
        assert stats.count == 2

    def test_large_amounts_sum_exactly(self):
        big = 9_007_199_254_740_993  # beyond float precision
        orders = [
            make_order("a", big, PaymentMethod.CASH, local_ms(2026, 10, 10, 9, tz=TZ)),
            make_order("b", 1, PaymentMethod.CASH, local_ms(2026, 10, 10, 10, tz=TZ)),
        ]
        assert aggregate(orders, DAY_X, tz=TZ).cash_total == big + 1


class TestCalendarBuckets:
    """Calendar-day matching across DST changes"""

    BERLIN = ZoneInfo("Europe/Berlin")

    def test_spring_forward_day(self):
        # 2026-03-29 has 23 hours in Berlin
        late = make_order("late", 1000, PaymentMethod.CASH, local_ms(2026, 3, 29, 23, 30, tz=self.BERLIN))
        after_midnight = make_order("next", 2000, PaymentMethod.CASH, local_ms(2026, 3, 30, 0, 30, tz=self.BERLIN))
        orders = [late, after_midnight]

        assert aggregate(orders, date(2026, 3, 29), tz=self.BERLIN).cash_total == 1000
        assert aggregate(orders, date(2026, 3, 30), tz=self.BERLIN).cash_total == 2000

    def test_fall_back_day(self):
        # 2026-10-25 has 25 hours in Berlin
        early = make_order("early", 1000, PaymentMethod.CASH, local_ms(2026, 10, 25, 0, 15, tz=self.BERLIN))
        late = make_order("late", 2000, PaymentMethod.CASH, local_ms(2026, 10, 25, 23, 45, tz=self.BERLIN))
        stats = aggregate([early, late], date(2026, 10, 25), tz=self.BERLIN)
        assert stats.count == 2
        assert stats.cash_total == 3000


class TestOrdersForDate:

    def test_newest_first(self, day_x_orders):
        listed = orders_for_date(day_x_orders, DAY_X, tz=TZ)
        assert [o.id for o in listed] == ["transfer-evening", "cash-morning"]

    def test_shift_filter(self, day_x_orders):
        listed = orders_for_date(day_x_orders, DAY_X, ShiftFilter.DAY, tz=TZ)
        assert [o.id for o in listed] == ["cash-morning"]

    def test_count_matches_aggregate(self, day_x_orders):
        assert len(orders_for_date(day_x_orders, DAY_X, tz=TZ)) == aggregate(day_x_orders, DAY_X, tz=TZ).count
