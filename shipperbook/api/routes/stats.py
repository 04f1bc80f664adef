"""
Stats API Routes
Daily totals, 7-day revenue trend and cash settlement

Every response is derived fresh from the stored orders.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from shipperbook.api.deps import get_ledger
from shipperbook.domain.models import ShiftFilter
from shipperbook.domain.services.ledger_service import LedgerService
from shipperbook.domain.services.settlement_calculator import handover_message
from shipperbook.utils.formatting import format_vnd
from shipperbook.utils.time import today_local

router = APIRouter()


# Response models
class DailyStatsResponse(BaseModel):
    date: str
    shift: ShiftFilter
    count: int
    cash_total: int
    transfer_total: int
    combined_total: int
    combined_total_display: str


class TrendPointResponse(BaseModel):
    date: str
    label: str
    total: int
    is_reference_date: bool


class TrendResponse(BaseModel):
    reference_date: str
    points: List[TrendPointResponse]


class SettlementResponse(BaseModel):
    date: str
    total_revenue: int
    cash_on_hand: int
    transfer_total: int
    cash_on_hand_display: str
    handover_message: str


@router.get("/daily", response_model=DailyStatsResponse)
async def daily_stats(
    day: Optional[date] = Query(None, alias="date", description="YYYY-MM-DD (default: today)"),
    shift: ShiftFilter = Query(ShiftFilter.ALL),
    ledger: LedgerService = Depends(get_ledger),
):
    """Order count and cash / transfer totals for one day"""
    target = day or today_local(ledger.tz)
    stats = await ledger.daily_stats(target, shift)

    return DailyStatsResponse(
        date=target.isoformat(),
        shift=shift,
        count=stats.count,
        cash_total=stats.cash_total,
        transfer_total=stats.transfer_total,
        combined_total=stats.combined_total,
        combined_total_display=format_vnd(stats.combined_total),
    )


@router.get("/trend", response_model=TrendResponse)
async def revenue_trend(
    day: Optional[date] = Query(None, alias="date", description="Reference date (default: today)"),
    ledger: LedgerService = Depends(get_ledger),
):
    """Daily revenue for the 7 days ending at the reference date"""
    reference = day or today_local(ledger.tz)
    points = await ledger.trend(reference)

    return TrendResponse(
        reference_date=reference.isoformat(),
        points=[
            TrendPointResponse(
                date=p.date.isoformat(),
                label=f"{p.date:%d/%m}",
                total=p.total,
                is_reference_date=p.is_reference_date,
            )
            for p in points
        ],
    )


@router.get("/settlement", response_model=SettlementResponse)
async def settlement(
    day: Optional[date] = Query(None, alias="date", description="YYYY-MM-DD (default: today)"),
    ledger: LedgerService = Depends(get_ledger),
):
    """Total revenue and the cash to hand over to the shop owner"""
    target = day or today_local(ledger.tz)
    result = await ledger.settlement(target)

    return SettlementResponse(
        date=result.date.isoformat(),
        total_revenue=result.total_revenue,
        cash_on_hand=result.cash_on_hand,
        transfer_total=result.transfer_total,
        cash_on_hand_display=format_vnd(result.cash_on_hand),
        handover_message=handover_message(result),
    )
