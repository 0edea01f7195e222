"""Income analytics over stored orders.

Loads order snapshots for a tenant scope and a window, then hands them to the
revenue engine. No revenue rule is implemented here.
"""

from __future__ import annotations

import calendar
import logging
import uuid
from datetime import UTC, date, datetime
from typing import Any

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rentalshop.core.config import get_settings
from rentalshop.core.settings import get_revenue_engine
from rentalshop.models import Order, OrderStatus, Outlet
from rentalshop.revenue import (
    DailyIncomeReport,
    IncomePoint,
    OrderSnapshot,
    PeriodRevenue,
    RevenueEngine,
)
from rentalshop.revenue.aggregation import GROUP_BY_CHOICES

logger = logging.getLogger(__name__)

_FAR_FUTURE = datetime.max.replace(tzinfo=UTC)


def _validate_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        msg = "start_date must be on or before end_date"
        raise ValueError(msg)
    max_days = get_settings().report_max_range_days
    if (end_date - start_date).days + 1 > max_days:
        msg = f"date range must not exceed {max_days} days"
        raise ValueError(msg)


def _window(
    engine: RevenueEngine, start_date: date, end_date: date
) -> tuple[datetime, datetime]:
    return engine.policy.start_of_day(start_date), engine.policy.end_of_day(end_date)


def _in_range(column: Any, start: datetime, end: datetime) -> Any:
    return and_(column.is_not(None), column >= start, column <= end)


def _scoped(
    stmt: Select[tuple[Order]],
    *,
    merchant_id: uuid.UUID | None,
    outlet_id: uuid.UUID | None,
) -> Select[tuple[Order]]:
    if outlet_id is not None:
        return stmt.where(Order.outlet_id == outlet_id)
    if merchant_id is not None:
        outlet_ids = select(Outlet.id).where(Outlet.merchant_id == merchant_id)
        return stmt.where(Order.outlet_id.in_(outlet_ids))
    return stmt


def to_snapshot(order: Order) -> OrderSnapshot:
    """Convert a stored order into the engine's input value."""
    customer = order.customer
    snapshot = OrderSnapshot.from_record(
        order,
        customer_name=customer.full_name if customer is not None else None,
        customer_phone=customer.phone if customer is not None else None,
        outlet_name=order.outlet.name if order.outlet is not None else None,
    )
    if snapshot.created_at is None:
        logger.warning("Order %s has no usable creation timestamp", order.order_number)
    return snapshot


async def load_orders_for_window(
    session: AsyncSession,
    *,
    start: datetime,
    end: datetime,
    merchant_id: uuid.UUID | None = None,
    outlet_id: uuid.UUID | None = None,
) -> list[OrderSnapshot]:
    """Return snapshots of every order with activity or a plan inside the window.

    Activity means created, picked up, returned or cancelled in the window;
    planned pickups/returns are included so projections can be computed.
    Soft-deleted orders are ignored.
    """
    start_utc = start.astimezone(UTC)
    end_utc = end.astimezone(UTC)

    stmt = (
        select(Order)
        .options(selectinload(Order.customer), selectinload(Order.outlet))
        .where(
            Order.deleted_at.is_(None),
            or_(
                _in_range(Order.created_at, start_utc, end_utc),
                _in_range(Order.picked_up_at, start_utc, end_utc),
                _in_range(Order.returned_at, start_utc, end_utc),
                and_(
                    Order.status == OrderStatus.CANCELLED,
                    _in_range(Order.updated_at, start_utc, end_utc),
                ),
                _in_range(Order.pickup_plan_at, start_utc, end_utc),
                _in_range(Order.return_plan_at, start_utc, end_utc),
            ),
        )
        .order_by(Order.created_at.desc(), Order.order_number)
    )
    stmt = _scoped(stmt, merchant_id=merchant_id, outlet_id=outlet_id)

    result = await session.execute(stmt)
    orders = list(result.scalars().all())
    logger.debug("Loaded %d orders for %s..%s", len(orders), start_utc, end_utc)
    return [to_snapshot(order) for order in orders]


async def daily_income(
    session: AsyncSession,
    *,
    start_date: date,
    end_date: date,
    merchant_id: uuid.UUID | None = None,
    outlet_id: uuid.UUID | None = None,
    engine: RevenueEngine | None = None,
) -> DailyIncomeReport:
    """Income grouped by day with one merged row per order and day."""
    _validate_range(start_date, end_date)
    engine = engine or get_revenue_engine()
    start, end = _window(engine, start_date, end_date)

    orders = await load_orders_for_window(
        session, start=start, end=end, merchant_id=merchant_id, outlet_id=outlet_id
    )
    report = engine.daily_income_report(orders, start, end)
    logger.info(
        "Daily income %s..%s: %d days, %d order rows",
        start_date,
        end_date,
        report.summary.total_days,
        report.summary.total_orders,
    )
    return report


async def income_summary(
    session: AsyncSession,
    *,
    start_date: date,
    end_date: date,
    group_by: str = "month",
    merchant_id: uuid.UUID | None = None,
    outlet_id: uuid.UUID | None = None,
    engine: RevenueEngine | None = None,
) -> dict[str, Any]:
    """Realized and projected income per month or day, with totals."""
    if group_by not in GROUP_BY_CHOICES:
        raise ValueError(f"group_by must be one of {', '.join(GROUP_BY_CHOICES)}")
    _validate_range(start_date, end_date)
    engine = engine or get_revenue_engine()

    window_start, window_end = start_date, end_date
    if group_by == "month":
        # Series points cover whole calendar months.
        window_start = start_date.replace(day=1)
        last_day = calendar.monthrange(end_date.year, end_date.month)[1]
        window_end = end_date.replace(day=last_day)
    start, end = _window(engine, window_start, window_end)

    orders = await load_orders_for_window(
        session, start=start, end=end, merchant_id=merchant_id, outlet_id=outlet_id
    )
    points: list[IncomePoint] = engine.income_series(
        orders, start_date, end_date, group_by=group_by
    )
    totals = PeriodRevenue()
    for point in points:
        totals += PeriodRevenue(
            real_income=point.real_income, future_income=point.future_income
        )
    return {"data": points, "totals": totals}


async def order_revenue(
    session: AsyncSession,
    *,
    order_id: uuid.UUID,
    target_date: date | None = None,
    engine: RevenueEngine | None = None,
) -> dict[str, Any]:
    """Revenue breakdown for one order, optionally resolved for one day."""
    engine = engine or get_revenue_engine()
    stmt = (
        select(Order)
        .options(selectinload(Order.customer), selectinload(Order.outlet))
        .where(Order.id == order_id, Order.deleted_at.is_(None))
    )
    order = (await session.execute(stmt)).scalar_one_or_none()
    if order is None:
        raise LookupError("Order not found")

    snapshot = to_snapshot(order)
    payload: dict[str, Any] = {
        "order_id": order.id,
        "order_number": order.order_number,
        "status_revenue": engine.status_revenue(snapshot),
        "total_revenue": engine.total_revenue(snapshot),
        "events": engine.derive_events(snapshot),
        "future_events": engine.project_future(snapshot, engine.now(), _FAR_FUTURE),
        "date_revenue": None,
        "date_events": [],
    }
    if target_date is not None:
        payload["date_revenue"] = engine.revenue_for_date(snapshot, target_date)
        payload["date_events"] = engine.events_for_date(snapshot, target_date)
    return payload
