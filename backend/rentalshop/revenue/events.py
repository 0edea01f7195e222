"""Derive the revenue events an order has already produced."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from rentalshop.revenue.days import UTC_DAYS, DayPolicy, coerce_datetime, in_window
from rentalshop.revenue.types import (
    ZERO,
    OrderSnapshot,
    RevenueEvent,
    RevenueType,
    sum_revenue,
)

SALE_CREATED = "Sale order created"
SALE_CANCELLED = "Sale order cancelled (refund)"
RENT_DEPOSIT = "Rental deposit collected"
RENT_PICKUP = "Rental pickup payment"
RENT_SAME_DAY = "Rented and returned the same day"
RENT_RETURN_DAMAGE = "Rental return (damage fee)"
RENT_RETURN_REFUND = "Rental return (security deposit refund)"
RENT_RETURN_NONE = "Rental return (no adjustment)"
RENT_CANCELLED = "Rental order cancelled (refund)"


def pickup_amount(order: OrderSnapshot, *, same_day_pickup: bool) -> Decimal:
    """Money taken at pickup.

    When pickup happens on the creation day the deposit was never booked on
    its own, so it is not subtracted.
    """
    if same_day_pickup:
        return order.total_amount + order.security_deposit
    return order.total_amount - order.deposit_amount + order.security_deposit


def return_amount(order: OrderSnapshot, *, same_day_return: bool) -> Decimal:
    if same_day_return:
        return order.total_amount + order.damage_fee
    return order.damage_fee - order.security_deposit


def collected_before_cancellation(
    order: OrderSnapshot, cancelled_at: datetime, *, same_day_pickup: bool
) -> Decimal:
    """Money taken from the customer before ``cancelled_at``.

    Reconstructed from the deposit and pickup formulas, so a pickup absorbed
    by a cancellation on the same day is still refunded.
    """
    picked_up_at = order.picked_up_at
    if picked_up_at is not None and picked_up_at < cancelled_at:
        if same_day_pickup:
            return order.total_amount + order.security_deposit
        return order.deposit_amount + pickup_amount(order, same_day_pickup=False)
    if order.created_at is not None and order.created_at < cancelled_at:
        return order.deposit_amount
    return ZERO


def return_description(amount: Decimal) -> str:
    if amount > 0:
        return RENT_RETURN_DAMAGE
    if amount < 0:
        return RENT_RETURN_REFUND
    return RENT_RETURN_NONE


def _sale_events(order: OrderSnapshot) -> list[RevenueEvent]:
    events: list[RevenueEvent] = []
    created_at = order.created_at
    if created_at is None:
        return events

    if not order.cancelled_at_creation:
        events.append(
            RevenueEvent(
                revenue=order.total_amount,
                date=created_at,
                description=SALE_CREATED,
                revenue_type=RevenueType.SALE,
            )
        )

    cancelled_at = order.cancelled_at
    if cancelled_at is not None and created_at < cancelled_at:
        events.append(
            RevenueEvent(
                revenue=-order.total_amount,
                date=cancelled_at,
                description=SALE_CANCELLED,
                revenue_type=RevenueType.SALE_CANCELLED,
            )
        )
    return events


def _rent_events(order: OrderSnapshot, policy: DayPolicy) -> list[RevenueEvent]:
    events: list[RevenueEvent] = []
    created_at = order.created_at
    picked_up_at = order.picked_up_at
    returned_at = order.returned_at
    cancelled_at = order.cancelled_at

    same_day_pickup = policy.same_day(created_at, picked_up_at)
    same_day_return = policy.same_day(picked_up_at or created_at, returned_at)
    pickup_absorbed = policy.same_day(picked_up_at, cancelled_at)

    if (
        created_at is not None
        and not same_day_pickup
        and not same_day_return
        and not order.cancelled_at_creation
    ):
        events.append(
            RevenueEvent(
                revenue=order.deposit_amount,
                date=created_at,
                description=RENT_DEPOSIT,
                revenue_type=RevenueType.RENT_DEPOSIT,
            )
        )

    if picked_up_at is not None and not same_day_return and not pickup_absorbed:
        events.append(
            RevenueEvent(
                revenue=pickup_amount(order, same_day_pickup=same_day_pickup),
                date=picked_up_at,
                description=RENT_PICKUP,
                revenue_type=RevenueType.RENT_PICKUP,
            )
        )

    if returned_at is not None:
        amount = return_amount(order, same_day_return=same_day_return)
        events.append(
            RevenueEvent(
                revenue=amount,
                date=returned_at,
                description=RENT_SAME_DAY if same_day_return else return_description(amount),
                revenue_type=RevenueType.RENT_RETURN,
            )
        )

    if cancelled_at is not None:
        collected = collected_before_cancellation(
            order, cancelled_at, same_day_pickup=same_day_pickup
        )
        if collected > ZERO:
            events.append(
                RevenueEvent(
                    revenue=-collected,
                    date=cancelled_at,
                    description=RENT_CANCELLED,
                    revenue_type=RevenueType.RENT_CANCELLED,
                )
            )
    return events


def derive_revenue_events(
    order: OrderSnapshot,
    range_start: datetime | None = None,
    range_end: datetime | None = None,
    *,
    policy: DayPolicy = UTC_DAYS,
) -> list[RevenueEvent]:
    """Return every revenue event the order has already produced.

    The window is inclusive and only applied when both bounds are given.
    Missing timestamps suppress the events that depend on them; nothing here
    raises for incomplete data.
    """
    if order.is_rent:
        events = _rent_events(order, policy)
    else:
        events = _sale_events(order)

    start = coerce_datetime(range_start)
    end = coerce_datetime(range_end)
    return [event for event in events if in_window(event.date, start, end)]


def order_revenue_total(order: OrderSnapshot, *, policy: DayPolicy = UTC_DAYS) -> Decimal:
    """Sum of every event the order has produced so far."""
    return sum_revenue(derive_revenue_events(order, policy=policy))
