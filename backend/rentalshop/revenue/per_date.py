"""Revenue an order contributes on one calendar day."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from rentalshop.revenue.days import UTC_DAYS, DayPolicy, coerce_datetime, utcnow
from rentalshop.revenue.events import derive_revenue_events, return_amount
from rentalshop.revenue.projection import (
    future_pickup_amount,
    future_return_amount,
    project_future_events,
)
from rentalshop.revenue.types import (
    ZERO,
    OrderSnapshot,
    OrderStatus,
    RevenueEvent,
    sum_revenue,
)


def _target_day(target_date: date | datetime, policy: DayPolicy) -> date:
    if isinstance(target_date, datetime):
        return policy.day_of(coerce_datetime(target_date))
    return target_date


def revenue_for_date(
    order: OrderSnapshot,
    target_date: date | datetime,
    *,
    now: datetime | None = None,
    policy: DayPolicy = UTC_DAYS,
) -> Decimal:
    """Answer "what does this order contribute on ``target_date``".

    Days after a completed return report the final order total ("as of"
    reporting). Future days report projections for plans falling on that
    day. Any other day reports the realized events of that day.
    """
    target = _target_day(target_date, policy)
    today = policy.day_of(coerce_datetime(now) or utcnow())

    if order.status == OrderStatus.RETURNED and order.returned_at is not None:
        returned_day = policy.day_of(order.returned_at)
        if returned_day < target:
            return order.total_amount + order.damage_fee
        if returned_day == target:
            same_day_return = policy.same_day(
                order.picked_up_at or order.created_at, order.returned_at
            )
            return return_amount(order, same_day_return=same_day_return)

    if target > today:
        projected = ZERO
        if not order.is_rent:
            return projected
        if (
            order.status == OrderStatus.RESERVED
            and order.pickup_plan_at is not None
            and policy.day_of(order.pickup_plan_at) == target
        ):
            projected += future_pickup_amount(order)
        if (
            order.status == OrderStatus.PICKUPED
            and order.return_plan_at is not None
            and policy.day_of(order.return_plan_at) == target
        ):
            projected += future_return_amount(order)
        return projected

    start, end = policy.day_window(target)
    return sum_revenue(derive_revenue_events(order, start, end, policy=policy))


def revenue_events_for_date(
    order: OrderSnapshot,
    target_date: date | datetime,
    *,
    now: datetime | None = None,
    policy: DayPolicy = UTC_DAYS,
) -> list[RevenueEvent]:
    """Realized and projected events falling on one day, realized first."""
    start, end = policy.day_window(_target_day(target_date, policy))
    realized = derive_revenue_events(order, start, end, policy=policy)
    projected = project_future_events(order, start, end, now=now)
    return [*realized, *projected]


def revenue_total_for_date(
    order: OrderSnapshot,
    target_date: date | datetime,
    *,
    now: datetime | None = None,
    policy: DayPolicy = UTC_DAYS,
) -> Decimal:
    return sum_revenue(revenue_events_for_date(order, target_date, now=now, policy=policy))
