"""
Order API Routes
Record, list, delete, import and export delivery orders

Date Selection Rules:
- If `date` (YYYY-MM-DD) is provided → that calendar day is used
- If `date` is omitted → today in the configured local timezone
"""

import logging
from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response
from pydantic import BaseModel, ConfigDict, Field

from shipperbook.api.deps import get_ledger
from shipperbook.domain.errors import DuplicateId, MalformedRecordError, NotFound, ValidationError
from shipperbook.domain.models import MAX_ORDER_CODE_LENGTH, Order, PaymentMethod, Shift, ShiftFilter
from shipperbook.domain.services.ledger_service import LedgerService
from shipperbook.domain.services.shift_classifier import classify
from shipperbook.utils.time import to_local, today_local

logger = logging.getLogger(__name__)
router = APIRouter()


# -------------------------------------------------------------------
# Request / Response models
# -------------------------------------------------------------------

class CreateOrderRequest(BaseModel):
    """Request to record a delivered order"""
    model_config = ConfigDict(populate_by_name=True)

    amount: int = Field(..., description="Amount in VND (must be > 0)")
    payment_method: PaymentMethod = Field(PaymentMethod.CASH, description="CASH or TRANSFER")
    day: Optional[date] = Field(None, alias="date", description="Booking date (default: today)")
    description: Optional[str] = Field(None, description="Free-text note")
    order_code: Optional[str] = Field(None, max_length=MAX_ORDER_CODE_LENGTH, description="Shop order code")
    shift: Optional[Shift] = Field(None, description="Explicit shift (default: from time of day)")


class OrderResponse(BaseModel):
    id: str
    amount: int
    payment_method: PaymentMethod
    timestamp: int
    local_time: str
    description: Optional[str] = None
    order_code: Optional[str] = None
    shift: Shift
    shift_inferred: bool


class ImportResponse(BaseModel):
    imported: int
    skipped: int
    duplicates: int
    errors: List[str]


def to_response(order: Order, ledger: LedgerService) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        amount=order.amount,
        payment_method=order.payment_method,
        timestamp=order.timestamp,
        local_time=to_local(order.timestamp, ledger.tz).isoformat(),
        description=order.description,
        order_code=order.order_code,
        shift=classify(order, ledger.tz),
        shift_inferred=order.shift is None,
    )


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------

@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    request: CreateOrderRequest,
    ledger: LedgerService = Depends(get_ledger),
):
    """Record a new order booked on the requested day"""
    try:
        order = await ledger.record_order(
            amount=request.amount,
            payment_method=request.payment_method,
            target_date=request.day,
            description=request.description,
            order_code=request.order_code,
            shift=request.shift,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DuplicateId as e:
        raise HTTPException(status_code=409, detail=str(e))

    return to_response(order, ledger)


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    day: Optional[date] = Query(None, alias="date", description="YYYY-MM-DD (default: today)"),
    shift: ShiftFilter = Query(ShiftFilter.ALL),
    ledger: LedgerService = Depends(get_ledger),
):
    """Orders for one day, newest first"""
    target = day or today_local(ledger.tz)
    orders = await ledger.orders_for_date(target, shift)
    return [to_response(order, ledger) for order in orders]


@router.get("/export")
async def export_orders(ledger: LedgerService = Depends(get_ledger)):
    """Full collection in the durable record format"""
    return await ledger.export_records()


@router.post("/import", response_model=ImportResponse)
async def import_orders(
    payload: Any = Body(..., description="List of durable order records"),
    ledger: LedgerService = Depends(get_ledger),
):
    """Import durable records; malformed ones are skipped and reported"""
    try:
        summary = await ledger.import_records(payload)
    except MalformedRecordError as e:
        logger.warning(f"Import rejected: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return ImportResponse(
        imported=summary.imported,
        skipped=summary.skipped,
        duplicates=summary.duplicates,
        errors=summary.errors,
    )


@router.delete("/{order_id}", status_code=204)
async def delete_order(
    order_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    """Delete an order; unknown ids are reported, not ignored"""
    try:
        await ledger.delete_order(order_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Response(status_code=204)
