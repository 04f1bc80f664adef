"""
Shared API dependencies.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shipperbook.domain.services.ledger_service import LedgerService
from shipperbook.infrastructure.db.database import get_db
from shipperbook.infrastructure.db.repositories.order_repository import OrderRepository
from shipperbook.utils.time import LOCAL_TZ


def get_ledger(db: AsyncSession = Depends(get_db)) -> LedgerService:
    """
    Ledger bound to the request's database session.

    Usage (in routes):
        ledger: LedgerService = Depends(get_ledger)
    """
    return LedgerService(OrderRepository(db), tz=LOCAL_TZ)
