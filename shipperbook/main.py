"""
FastAPI Main Application
Courier order ledger: daily totals, shifts, trend and cash settlement
"""

from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator
from sqlalchemy import text

from shipperbook.config import settings
from shipperbook.core.logging import setup_logging
from shipperbook.infrastructure.db.database import init_db, close_db

# Configure logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of the database
    """
    logger.info("=" * 60)
    logger.info("🚀 Starting ShipperBook")
    logger.info("=" * 60)

    await init_db()
    logger.info("✅ Database initialized")
    logger.info(f"   🕒 Timezone: {settings.TIMEZONE}")
    logger.info(f"   ✅ API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")

    yield

    logger.info("🛑 Shutting down ShipperBook...")
    await close_db()
    logger.info("✅ Database connections closed")


# Create FastAPI app
app = FastAPI(
    title="ShipperBook - Courier Order Ledger",
    description="Daily delivery totals, shifts and cash settlement for couriers",
    version="1.0.0",
    lifespan=lifespan
)


@app.get("/health")
async def health_check():
    """Health check with a real database probe"""
    db_status = "disconnected"
    db_error = None
    try:
        from shipperbook.infrastructure.db.database import engine
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as exc:
        db_status = "error"
        db_error = str(exc)

    return {
        "status": "healthy",
        "service": "ShipperBook",
        "version": "1.0.0",
        "timezone": settings.TIMEZONE,
        "database": db_status,
        "database_error": db_error,
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "ShipperBook courier ledger",
        "version": "1.0.0",
        "docs": "/docs"
    }


# Import and include routers
from shipperbook.api.routes import orders, stats  # noqa: E402

app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(stats.router, prefix="/api/v1/stats", tags=["Stats"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("shipperbook.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
