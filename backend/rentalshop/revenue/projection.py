"""Projected revenue from planned pickups and returns."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from rentalshop.revenue.days import coerce_datetime, utcnow
from rentalshop.revenue.types import (
    ZERO,
    OrderSnapshot,
    OrderStatus,
    RevenueEvent,
    RevenueType,
)

FUTURE_PICKUP = "Expected payment at pickup"
FUTURE_RETURN_DAMAGE = "Estimated damage charge at return"
FUTURE_RETURN_REFUND = "Estimated deposit refund at return"
FUTURE_RETURN_NONE = "No adjustment expected at return"


def future_pickup_amount(order: OrderSnapshot) -> Decimal:
    return order.total_amount - order.deposit_amount


def future_return_amount(order: OrderSnapshot) -> Decimal:
    return order.damage_fee - order.security_deposit


def future_return_description(amount: Decimal) -> str:
    if amount > 0:
        return FUTURE_RETURN_DAMAGE
    if amount < 0:
        return FUTURE_RETURN_REFUND
    return FUTURE_RETURN_NONE


def _planned_in_window(
    planned: datetime | None,
    range_start: datetime | None,
    range_end: datetime | None,
    now: datetime,
) -> bool:
    if planned is None or range_start is None or range_end is None:
        return False
    return range_start <= planned <= range_end and planned > now


def project_future_events(
    order: OrderSnapshot,
    range_start: datetime,
    range_end: datetime,
    *,
    now: datetime | None = None,
) -> list[RevenueEvent]:
    """Return revenue expected on planned dates inside the window.

    Only RENT orders short of completion project anything: a RESERVED order
    expects the remaining balance at its planned pickup, a PICKUPED order
    expects the damage/deposit settlement at its planned return.
    """
    events: list[RevenueEvent] = []
    if not order.is_rent:
        return events

    start = coerce_datetime(range_start)
    end = coerce_datetime(range_end)
    current = coerce_datetime(now) or utcnow()

    if order.status == OrderStatus.RESERVED and _planned_in_window(
        order.pickup_plan_at, start, end, current
    ):
        amount = future_pickup_amount(order)
        if amount > ZERO:
            events.append(
                RevenueEvent(
                    revenue=amount,
                    date=order.pickup_plan_at,
                    description=FUTURE_PICKUP,
                    revenue_type=RevenueType.RENT_FUTURE_PICKUP,
                )
            )

    if order.status == OrderStatus.PICKUPED and _planned_in_window(
        order.return_plan_at, start, end, current
    ):
        amount = future_return_amount(order)
        events.append(
            RevenueEvent(
                revenue=amount,
                date=order.return_plan_at,
                description=future_return_description(amount),
                revenue_type=RevenueType.RENT_FUTURE_RETURN,
            )
        )
    return events
