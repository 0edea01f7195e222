"""Period totals and the day-by-day income report.

The report folds the events of many orders into calendar-day buckets. Within
a day every order gets exactly one row; further events for the same order
and day are merged into that row. Rows live in an arena indexed by
``(order key, day)`` so merging never depends on dict or set iteration order,
only on the order in which orders (and their events) were supplied.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from rentalshop.revenue.days import (
    UTC_DAYS,
    DayPolicy,
    coerce_datetime,
    in_window,
    utcnow,
)
from rentalshop.revenue.events import derive_revenue_events
from rentalshop.revenue.projection import project_future_events
from rentalshop.revenue.types import (
    ZERO,
    OrderSnapshot,
    OrderType,
    OrderStatus,
    RevenueEvent,
    sum_revenue,
)

MULTIPLE = "MULTIPLE"
DESCRIPTION_SEPARATOR = " + "
GROUP_BY_CHOICES = ("month", "day")


@dataclass(frozen=True, slots=True)
class PeriodRevenue:
    """Realized and projected income over a window."""

    real_income: Decimal = ZERO
    future_income: Decimal = ZERO

    def __add__(self, other: "PeriodRevenue") -> "PeriodRevenue":
        return PeriodRevenue(
            real_income=self.real_income + other.real_income,
            future_income=self.future_income + other.future_income,
        )


@dataclass(frozen=True, slots=True)
class OrderRow:
    """One order's merged contribution to a single day."""

    id: Any
    order_number: str | None
    order_type: OrderType
    status: OrderStatus
    revenue: Decimal
    revenue_type: str
    description: str
    revenue_date: datetime
    customer_name: str | None
    customer_phone: str | None
    outlet_name: str | None
    total_amount: Decimal
    deposit_amount: Decimal
    events: tuple[RevenueEvent, ...]


@dataclass(frozen=True, slots=True)
class DayBucket:
    date: date
    date_iso: str
    total_revenue: Decimal
    new_order_count: int
    orders: tuple[OrderRow, ...]


@dataclass(frozen=True, slots=True)
class ReportSummary:
    total_days: int
    total_revenue: Decimal
    total_new_orders: int
    total_orders: int


@dataclass(frozen=True, slots=True)
class DailyIncomeReport:
    days: tuple[DayBucket, ...]
    summary: ReportSummary


@dataclass(frozen=True, slots=True)
class IncomePoint:
    """Income for one month or one day of a series."""

    period_start: date
    label: str
    year: int
    real_income: Decimal
    future_income: Decimal
    order_count: int


@dataclass(slots=True)
class _RowRecord:
    order: OrderSnapshot
    events: list[RevenueEvent] = field(default_factory=list)

    def freeze(self) -> OrderRow:
        first = self.events[0]
        if len(self.events) > 1:
            revenue_type = MULTIPLE
            descriptions = dict.fromkeys(event.description for event in self.events)
            description = DESCRIPTION_SEPARATOR.join(descriptions)
        else:
            revenue_type = first.revenue_type.value
            description = first.description
        order = self.order
        return OrderRow(
            id=order.id,
            order_number=order.order_number,
            order_type=order.order_type,
            status=order.status,
            revenue=sum_revenue(self.events),
            revenue_type=revenue_type,
            description=description,
            revenue_date=first.date,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            outlet_name=order.outlet_name,
            total_amount=order.total_amount,
            deposit_amount=order.deposit_amount,
            events=tuple(self.events),
        )


@dataclass(slots=True)
class _DayRecord:
    day: date
    total_revenue: Decimal = ZERO
    new_order_count: int = 0
    row_handles: list[int] = field(default_factory=list)


class _ReportBuilder:
    """Single-pass accumulator behind :func:`build_daily_income_report`."""

    def __init__(self, policy: DayPolicy) -> None:
        self._policy = policy
        self._rows: list[_RowRecord] = []
        self._row_index: dict[tuple[Any, date], int] = {}
        self._days: list[_DayRecord] = []
        self._day_index: dict[date, int] = {}
        self._new_orders: set[tuple[Any, date]] = set()

    def _day(self, day: date) -> _DayRecord:
        handle = self._day_index.get(day)
        if handle is None:
            handle = len(self._days)
            self._days.append(_DayRecord(day=day))
            self._day_index[day] = handle
        return self._days[handle]

    def add_event(self, order: OrderSnapshot, event: RevenueEvent) -> None:
        day = self._policy.day_of(event.date)
        bucket = self._day(day)
        bucket.total_revenue += event.revenue

        key = (order.order_key, day)
        handle = self._row_index.get(key)
        if handle is None:
            handle = len(self._rows)
            self._rows.append(_RowRecord(order=order))
            self._row_index[key] = handle
            bucket.row_handles.append(handle)
        self._rows[handle].events.append(event)

    def count_new_order(self, order: OrderSnapshot) -> None:
        """Count the order once on its creation day.

        The creation day gets a bucket even when no event of the window
        falls on it, instead of only counting into days that already hold
        revenue.
        """
        if order.created_at is None or order.cancelled_at_creation:
            return
        day = self._policy.day_of(order.created_at)
        key = (order.order_key, day)
        if key in self._new_orders:
            return
        self._new_orders.add(key)
        self._day(day).new_order_count += 1

    def build(self) -> DailyIncomeReport:
        days = sorted(self._days, key=lambda record: record.day)
        buckets = tuple(
            DayBucket(
                date=record.day,
                date_iso=self._policy.start_of_day(record.day).isoformat(),
                total_revenue=record.total_revenue,
                new_order_count=record.new_order_count,
                orders=tuple(self._rows[handle].freeze() for handle in record.row_handles),
            )
            for record in days
        )
        summary = ReportSummary(
            total_days=len(buckets),
            total_revenue=sum((bucket.total_revenue for bucket in buckets), ZERO),
            total_new_orders=sum(bucket.new_order_count for bucket in buckets),
            total_orders=sum(len(bucket.orders) for bucket in buckets),
        )
        return DailyIncomeReport(days=buckets, summary=summary)


def build_daily_income_report(
    orders: Iterable[OrderSnapshot],
    range_start: datetime,
    range_end: datetime,
    *,
    policy: DayPolicy = UTC_DAYS,
) -> DailyIncomeReport:
    """Bucket realized events of ``orders`` by day inside the inclusive window.

    New orders are counted on their creation day (once per order and day),
    except orders cancelled at the instant they were created.
    """
    start = coerce_datetime(range_start)
    end = coerce_datetime(range_end)
    builder = _ReportBuilder(policy)
    for order in orders:
        for event in derive_revenue_events(order, start, end, policy=policy):
            builder.add_event(order, event)
        if in_window(order.created_at, start, end):
            builder.count_new_order(order)
    return builder.build()


def period_revenue(
    order: OrderSnapshot,
    range_start: datetime,
    range_end: datetime,
    *,
    now: datetime | None = None,
    policy: DayPolicy = UTC_DAYS,
) -> PeriodRevenue:
    """Split one order's income in the window into realized and projected."""
    current = coerce_datetime(now) or utcnow()
    today = policy.day_of(current)

    real_income = ZERO
    future_income = ZERO
    for event in derive_revenue_events(order, range_start, range_end, policy=policy):
        if policy.day_of(event.date) <= today:
            real_income += event.revenue
        else:
            future_income += event.revenue
    future_income += sum_revenue(
        project_future_events(order, range_start, range_end, now=current)
    )
    return PeriodRevenue(real_income=real_income, future_income=future_income)


def period_revenue_batch(
    orders: Iterable[OrderSnapshot],
    range_start: datetime,
    range_end: datetime,
    *,
    now: datetime | None = None,
    policy: DayPolicy = UTC_DAYS,
) -> PeriodRevenue:
    current = coerce_datetime(now) or utcnow()
    total = PeriodRevenue()
    for order in orders:
        total += period_revenue(order, range_start, range_end, now=current, policy=policy)
    return total


def _month_periods(start: date, end: date) -> list[tuple[date, date]]:
    periods: list[tuple[date, date]] = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        last_day = calendar.monthrange(year, month)[1]
        periods.append((date(year, month, 1), date(year, month, last_day)))
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return periods


def _as_day(value: datetime | date, policy: DayPolicy) -> date:
    if isinstance(value, datetime):
        return policy.day_of(coerce_datetime(value))
    return value


def income_series(
    orders: Sequence[OrderSnapshot],
    range_start: datetime | date,
    range_end: datetime | date,
    *,
    group_by: str = "month",
    now: datetime | None = None,
    policy: DayPolicy = UTC_DAYS,
) -> list[IncomePoint]:
    """Realized/projected income per calendar month or day of the window.

    Months are always whole calendar months, from the month containing the
    window start to the month containing its end.
    """
    if group_by not in GROUP_BY_CHOICES:
        raise ValueError(f"group_by must be one of {', '.join(GROUP_BY_CHOICES)}")

    first_day = _as_day(range_start, policy)
    last_day = _as_day(range_end, policy)
    current = coerce_datetime(now) or utcnow()

    if group_by == "month":
        periods = _month_periods(first_day, last_day)
    else:
        periods = [(day, day) for day in policy.iter_days(first_day, last_day)]

    points: list[IncomePoint] = []
    for period_start, period_end in periods:
        window_start = policy.start_of_day(period_start)
        window_end = policy.end_of_day(period_end)
        income = period_revenue_batch(
            orders, window_start, window_end, now=current, policy=policy
        )
        order_count = sum(
            1
            for order in orders
            if not order.is_cancelled
            and in_window(order.created_at, window_start, window_end)
        )
        label = (
            period_start.strftime("%b")
            if group_by == "month"
            else f"{period_start.strftime('%b')} {period_start.day}"
        )
        points.append(
            IncomePoint(
                period_start=period_start,
                label=label,
                year=period_start.year,
                real_income=income.real_income,
                future_income=income.future_income,
                order_count=order_count,
            )
        )
    return points
