"""Single "current" revenue figure per order, keyed off its status."""

from __future__ import annotations

from decimal import Decimal

from rentalshop.revenue.days import UTC_DAYS, DayPolicy
from rentalshop.revenue.events import pickup_amount
from rentalshop.revenue.types import ZERO, OrderSnapshot, OrderStatus


def current_status_revenue(order: OrderSnapshot, *, policy: DayPolicy = UTC_DAYS) -> Decimal:
    """Revenue the order represents right now, without a date window.

    A returned order always reports ``total_amount + damage_fee`` whatever
    the timing of its transitions.
    """
    if not order.is_rent:
        if order.is_cancelled:
            return ZERO
        return order.total_amount

    same_day_pickup = policy.same_day(order.created_at, order.picked_up_at)
    same_day_return = policy.same_day(
        order.picked_up_at or order.created_at, order.returned_at
    )

    if order.status == OrderStatus.RESERVED:
        if same_day_pickup or same_day_return:
            return ZERO
        return order.deposit_amount
    if order.status == OrderStatus.PICKUPED:
        return pickup_amount(order, same_day_pickup=same_day_pickup)
    if order.status == OrderStatus.RETURNED:
        return order.total_amount + order.damage_fee
    return ZERO
