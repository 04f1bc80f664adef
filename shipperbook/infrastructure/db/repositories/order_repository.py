"""
Order Repository
Append / remove / list for immutable order records
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shipperbook.domain.errors import DuplicateId, NotFound, ValidationError
from shipperbook.domain.models import Order
from shipperbook.infrastructure.db.models import OrderModel

logger = logging.getLogger(__name__)


class OrderRepository:
    """Repository for orders, implements the OrderStore protocol"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, order_id: str) -> Optional[Order]:
        model = await self.session.get(OrderModel, order_id)
        return self._to_domain(model) if model is not None else None

    async def append(self, order: Order) -> None:
        """
        Insert a new order.

        Raises:
            DuplicateId: an order with this id is already stored
        """
        existing = await self.session.get(OrderModel, order.id)
        if existing is not None:
            raise DuplicateId(order.id)

        self.session.add(
            OrderModel(
                id=order.id,
                description=order.description,
                order_code=order.order_code,
                amount=order.amount,
                payment_method=order.payment_method,
                timestamp_ms=order.timestamp,
                shift=order.shift,
            )
        )
        await self.session.flush()

    async def remove(self, order_id: str) -> None:
        """
        Delete an order by id.

        Raises:
            NotFound: no order with this id; nothing is changed
        """
        model = await self.session.get(OrderModel, order_id)
        if model is None:
            raise NotFound(order_id)

        await self.session.delete(model)
        await self.session.flush()

    async def list(self) -> List[Order]:
        """
        All stored orders, newest first.

        Rows that no longer satisfy the order invariants are skipped and
        logged instead of failing the whole read.
        """
        result = await self.session.execute(
            select(OrderModel).order_by(OrderModel.timestamp_ms.desc(), OrderModel.id)
        )

        orders: List[Order] = []
        for model in result.scalars().all():
            try:
                orders.append(self._to_domain(model))
            except ValidationError as exc:
                logger.warning(f"Skipping malformed order row {model.id!r}: {exc}")
        return orders

    @staticmethod
    def _to_domain(model: OrderModel) -> Order:
        return Order(
            id=model.id,
            amount=model.amount,
            payment_method=model.payment_method,
            timestamp=model.timestamp_ms,
            description=model.description,
            order_code=model.order_code,
            shift=model.shift,
        )
