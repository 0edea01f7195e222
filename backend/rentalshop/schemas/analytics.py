"""Income analytics schemas.

Responses use camelCase keys, the shape the dashboards consume.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rentalshop.revenue import OrderStatus, OrderType, RevenueType


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class RevenueEventRead(_CamelModel):
    """A single dated revenue entry."""

    revenue: Decimal
    date: datetime
    description: str
    revenue_type: RevenueType


class OrderRowRead(_CamelModel):
    """One order's merged revenue for a day."""

    id: uuid.UUID | None = None
    order_number: str | None = None
    order_type: OrderType
    status: OrderStatus
    revenue: Decimal
    revenue_type: str
    description: str
    revenue_date: datetime
    customer_name: str | None = None
    customer_phone: str | None = None
    outlet_name: str | None = None
    total_amount: Decimal
    deposit_amount: Decimal


class DayBucketRead(_CamelModel):
    date: date
    date_iso: str = Field(alias="dateISO")
    total_revenue: Decimal
    new_order_count: int
    orders: list[OrderRowRead]


class ReportSummaryRead(_CamelModel):
    total_days: int
    total_revenue: Decimal
    total_new_orders: int
    total_orders: int


class DailyIncomeResponse(_CamelModel):
    """Day-bucketed income report."""

    start_date: date
    end_date: date
    days: list[DayBucketRead]
    summary: ReportSummaryRead


class IncomePointRead(_CamelModel):
    period_start: date
    label: str
    year: int
    real_income: Decimal
    future_income: Decimal
    order_count: int


class IncomeTotalsRead(_CamelModel):
    real_income: Decimal
    future_income: Decimal


class IncomeSummaryResponse(_CamelModel):
    """Income series grouped by month or day."""

    group_by: str
    data: list[IncomePointRead]
    totals: IncomeTotalsRead


class OrderRevenueResponse(_CamelModel):
    """Revenue breakdown for a single order."""

    order_id: uuid.UUID
    order_number: str
    status_revenue: Decimal
    total_revenue: Decimal
    events: list[RevenueEventRead]
    future_events: list[RevenueEventRead]
    date_revenue: Decimal | None = None
    date_events: list[RevenueEventRead] = Field(default_factory=list)
