"""Test fixtures for the revenue backend."""
from __future__ import annotations

import itertools
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from rentalshop.api import deps
from rentalshop.core.config import get_settings
from rentalshop.db.base import Base
from rentalshop.db.session import dispose_engine, get_sessionmaker
from rentalshop.main import app
from rentalshop.models import (
    Customer,
    Merchant,
    Order,
    OrderStatus,
    OrderType,
    Outlet,
)
from rentalshop.revenue import RevenueEngine

FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture()
def fixed_engine() -> RevenueEngine:
    """Revenue engine whose clock is pinned to ``FIXED_NOW``."""
    return RevenueEngine(clock=lambda: FIXED_NOW)


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, db_url: str, fixed_engine: RevenueEngine
) -> AsyncIterator[dict[str, Any]]:
    """Yield an async client plus a seeded merchant with two outlets."""
    sessionmaker = get_sessionmaker(db_url)

    async with sessionmaker() as session:
        merchant = Merchant(name="Party Rentals Co")
        session.add(merchant)
        await session.flush()

        downtown = Outlet(merchant_id=merchant.id, name="Downtown")
        uptown = Outlet(merchant_id=merchant.id, name="Uptown")
        other_merchant = Merchant(name="Costume Corner")
        session.add_all([downtown, uptown, other_merchant])
        await session.flush()

        elsewhere = Outlet(merchant_id=other_merchant.id, name="Harbor")
        customer = Customer(
            merchant_id=merchant.id,
            first_name="Jamie",
            last_name="Rivera",
            phone="555-201-3344",
        )
        session.add_all([elsewhere, customer])
        await session.commit()

        context: dict[str, Any] = {
            "db_url": db_url,
            "merchant_id": merchant.id,
            "outlet_id": downtown.id,
            "second_outlet_id": uptown.id,
            "other_merchant_id": other_merchant.id,
            "other_outlet_id": elsewhere.id,
            "customer_id": customer.id,
            "engine": fixed_engine,
        }

    app.dependency_overrides[deps.get_engine] = lambda: fixed_engine
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            context["client"] = client
            yield context
    finally:
        app.dependency_overrides.pop(deps.get_engine, None)


@pytest_asyncio.fixture()
async def seed_order(
    app_context: dict[str, Any],
) -> Callable[..., Awaitable[Order]]:
    """Return a coroutine that stores an order with sensible defaults."""
    sessionmaker = get_sessionmaker(app_context["db_url"])
    numbers = itertools.count(1)

    async def _seed(**fields: Any) -> Order:
        values: dict[str, Any] = {
            "outlet_id": app_context["outlet_id"],
            "customer_id": app_context["customer_id"],
            "order_number": f"ORD-{next(numbers):04d}",
            "order_type": OrderType.RENT,
            "status": OrderStatus.RESERVED,
            "total_amount": Decimal("500.00"),
            "deposit_amount": Decimal("100.00"),
            "security_deposit": Decimal("50.00"),
            "damage_fee": Decimal("20.00"),
        }
        values.update(fields)
        values.setdefault("updated_at", values.get("created_at"))
        if values["updated_at"] is None:
            values.pop("updated_at")
        async with sessionmaker() as session:
            order = Order(**values)
            session.add(order)
            await session.commit()
            return order

    return _seed
