"""Income analytics and per-order revenue API tests."""
from __future__ import annotations

import uuid
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from rentalshop.models import OrderStatus, OrderType

pytestmark = pytest.mark.asyncio

DAY1 = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
DAY2 = datetime(2024, 3, 2, 10, 0, tzinfo=UTC)
DAY3 = datetime(2024, 3, 3, 15, 0, tzinfo=UTC)


async def _returned_order(seed_order):
    return await seed_order(
        status=OrderStatus.RETURNED,
        created_at=DAY1,
        picked_up_at=DAY2,
        returned_at=DAY3,
        updated_at=DAY3,
    )


async def test_daily_income_endpoint(app_context, seed_order) -> None:
    client = app_context["client"]
    await _returned_order(seed_order)
    await seed_order(
        order_type=OrderType.SALE,
        status=OrderStatus.CANCELLED,
        created_at=datetime(2024, 3, 1, 11, 0, tzinfo=UTC),
        updated_at=datetime(2024, 3, 1, 16, 0, tzinfo=UTC),
        total_amount=Decimal("200.00"),
    )

    response = await client.get(
        "/api/v1/analytics/income/daily",
        params={
            "start_date": "2024-03-01",
            "end_date": "2024-03-03",
            "merchant_id": str(app_context["merchant_id"]),
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["startDate"] == "2024-03-01"
    first_day = payload["days"][0]
    assert first_day["date"] == "2024-03-01"
    assert first_day["dateISO"] == "2024-03-01T00:00:00+00:00"
    assert first_day["newOrderCount"] == 2
    assert Decimal(first_day["totalRevenue"]) == Decimal("100.00")

    rows = {row["revenueType"]: row for row in first_day["orders"]}
    assert set(rows) == {"RENT_DEPOSIT", "MULTIPLE"}
    assert rows["RENT_DEPOSIT"]["customerName"] == "Jamie Rivera"
    merged = rows["MULTIPLE"]
    assert Decimal(merged["revenue"]) == Decimal("0")
    assert merged["description"] == "Sale order created + Sale order cancelled (refund)"

    summary = payload["summary"]
    assert summary["totalDays"] == 3
    assert Decimal(summary["totalRevenue"]) == Decimal("520.00")
    assert summary["totalNewOrders"] == 2
    assert summary["totalOrders"] == 4


async def test_daily_income_rejects_inverted_range(app_context) -> None:
    response = await app_context["client"].get(
        "/api/v1/analytics/income/daily",
        params={"start_date": "2024-03-05", "end_date": "2024-03-01"},
    )

    assert response.status_code == 400
    assert "start_date" in response.json()["detail"]


async def test_income_summary_endpoint(app_context, seed_order) -> None:
    await _returned_order(seed_order)

    response = await app_context["client"].get(
        "/api/v1/analytics/income",
        params={"start_date": "2024-03-01", "end_date": "2024-03-03", "group_by": "day"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["groupBy"] == "day"
    assert [point["label"] for point in payload["data"]] == ["Mar 1", "Mar 2", "Mar 3"]
    assert [Decimal(point["realIncome"]) for point in payload["data"]] == [
        Decimal("100.00"),
        Decimal("450.00"),
        Decimal("-30.00"),
    ]
    assert Decimal(payload["totals"]["realIncome"]) == Decimal("520.00")
    assert Decimal(payload["totals"]["futureIncome"]) == Decimal("0")


async def test_income_summary_rejects_unknown_grouping(app_context) -> None:
    response = await app_context["client"].get(
        "/api/v1/analytics/income",
        params={"start_date": "2024-03-01", "end_date": "2024-03-31", "group_by": "week"},
    )

    assert response.status_code == 400


async def test_order_revenue_endpoint(app_context, seed_order) -> None:
    order = await _returned_order(seed_order)

    response = await app_context["client"].get(
        f"/api/v1/orders/{order.id}/revenue", params={"date": "2024-03-03"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["orderId"] == str(order.id)
    assert Decimal(payload["statusRevenue"]) == Decimal("520.00")
    assert Decimal(payload["totalRevenue"]) == Decimal("520.00")
    assert [event["revenueType"] for event in payload["events"]] == [
        "RENT_DEPOSIT",
        "RENT_PICKUP",
        "RENT_RETURN",
    ]
    assert payload["futureEvents"] == []
    assert Decimal(payload["dateRevenue"]) == Decimal("-30.00")
    assert len(payload["dateEvents"]) == 1


async def test_order_revenue_unknown_order(app_context) -> None:
    response = await app_context["client"].get(f"/api/v1/orders/{uuid.uuid4()}/revenue")

    assert response.status_code == 404
    assert response.json()["detail"] == "Order not found"
