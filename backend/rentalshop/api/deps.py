"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from rentalshop.core.settings import get_revenue_engine
from rentalshop.db.session import get_session
from rentalshop.revenue import RevenueEngine


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


def get_engine() -> RevenueEngine:
    """Provide the revenue engine; tests override this to pin the clock."""
    return get_revenue_engine()
