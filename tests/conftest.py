from datetime import datetime
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from shipperbook.infrastructure.db.database import Base, get_db
from shipperbook.infrastructure.db import models  # noqa: F401
from shipperbook.api.routes import orders, stats
from shipperbook.domain.models import Order, PaymentMethod, Shift
from shipperbook.utils.time import LOCAL_TZ, to_epoch_ms


def local_ms(year, month, day, hour=12, minute=0, second=0, tz=LOCAL_TZ) -> int:
    """Epoch ms of a local wall-clock time"""
    return to_epoch_ms(datetime(year, month, day, hour, minute, second, tzinfo=tz))


def make_order(
    order_id: str,
    amount: int,
    method: PaymentMethod,
    timestamp: int,
    shift: Shift = None,
    description: str = None,
) -> Order:
    return Order(
        id=order_id,
        amount=amount,
        payment_method=method,
        timestamp=timestamp,
        description=description,
        shift=shift,
    )


@pytest.fixture()
async def db_engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        future=True,
        echo=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
        # cleanup
        for table in reversed(Base.metadata.sorted_tables):
            await session.execute(table.delete())
        await session.commit()


@pytest.fixture()
async def app(db_session) -> FastAPI:
    app = FastAPI()
    app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])
    app.include_router(stats.router, prefix="/api/v1/stats", tags=["Stats"])

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
