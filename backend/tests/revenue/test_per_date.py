"""Per-day revenue resolution."""
from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal

from rentalshop.revenue import (
    OrderSnapshot,
    OrderStatus,
    OrderType,
    RevenueType,
    revenue_events_for_date,
    revenue_for_date,
    revenue_total_for_date,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


def _returned() -> OrderSnapshot:
    return OrderSnapshot(
        id="returned",
        order_type=OrderType.RENT,
        status=OrderStatus.RETURNED,
        created_at=datetime(2024, 3, 1, 9, 0, tzinfo=UTC),
        picked_up_at=datetime(2024, 3, 2, 10, 0, tzinfo=UTC),
        returned_at=datetime(2024, 3, 3, 15, 0, tzinfo=UTC),
        updated_at=datetime(2024, 3, 3, 15, 0, tzinfo=UTC),
        total_amount=Decimal("500.00"),
        deposit_amount=Decimal("100.00"),
        security_deposit=Decimal("50.00"),
        damage_fee=Decimal("20.00"),
    )


def _reserved(**fields) -> OrderSnapshot:
    values = {
        "id": "reserved",
        "order_type": OrderType.RENT,
        "status": OrderStatus.RESERVED,
        "created_at": datetime(2024, 3, 10, 9, 0, tzinfo=UTC),
        "pickup_plan_at": datetime(2024, 3, 20, 10, 0, tzinfo=UTC),
        "total_amount": Decimal("300.00"),
        "deposit_amount": Decimal("60.00"),
        "security_deposit": Decimal("40.00"),
    }
    values.update(fields)
    return OrderSnapshot(**values)


def test_days_after_return_report_the_final_total() -> None:
    order = _returned()

    assert revenue_for_date(order, date(2024, 3, 10), now=NOW) == Decimal("520.00")
    assert revenue_for_date(order, date(2024, 4, 1), now=NOW) == Decimal("520.00")


def test_return_day_reports_the_return_settlement() -> None:
    assert revenue_for_date(_returned(), date(2024, 3, 3), now=NOW) == Decimal("-30.00")


def test_earlier_days_report_realized_events() -> None:
    order = _returned()

    assert revenue_for_date(order, date(2024, 3, 1), now=NOW) == Decimal("100.00")
    assert revenue_for_date(order, date(2024, 3, 2), now=NOW) == Decimal("450.00")
    assert revenue_for_date(order, date(2024, 2, 28), now=NOW) == Decimal("0.00")


def test_future_days_report_projections() -> None:
    reserved = _reserved()
    picked_up = _reserved(
        status=OrderStatus.PICKUPED,
        picked_up_at=datetime(2024, 3, 12, 9, 0, tzinfo=UTC),
        return_plan_at=datetime(2024, 3, 18, 17, 0, tzinfo=UTC),
    )

    assert revenue_for_date(reserved, date(2024, 3, 20), now=NOW) == Decimal("240.00")
    assert revenue_for_date(reserved, date(2024, 3, 21), now=NOW) == Decimal("0.00")
    assert revenue_for_date(picked_up, date(2024, 3, 18), now=NOW) == Decimal("-40.00")


def test_datetime_targets_resolve_to_their_day() -> None:
    target = datetime(2024, 3, 2, 23, 59, tzinfo=UTC)

    assert revenue_for_date(_returned(), target, now=NOW) == Decimal("450.00")


def test_events_for_date_combine_realized_and_projected() -> None:
    reserved = _reserved(created_at=datetime(2024, 3, 20, 8, 0, tzinfo=UTC))

    events = revenue_events_for_date(reserved, date(2024, 3, 20), now=NOW)

    assert [event.revenue_type for event in events] == [
        RevenueType.RENT_DEPOSIT,
        RevenueType.RENT_FUTURE_PICKUP,
    ]
    assert revenue_total_for_date(reserved, date(2024, 3, 20), now=NOW) == Decimal(
        "300.00"
    )


def test_events_for_date_on_a_past_day() -> None:
    events = revenue_events_for_date(_returned(), date(2024, 3, 2), now=NOW)

    assert [(event.revenue_type, event.revenue) for event in events] == [
        (RevenueType.RENT_PICKUP, Decimal("450.00"))
    ]
