"""Stateless facade over the revenue rules.

Callers (status totals, single-day drill-downs, period reports, HTTP routes)
go through :class:`RevenueEngine` so that the day policy and the notion of
"now" are configured in one place and can be swapped in tests.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from rentalshop.revenue.aggregation import (
    DailyIncomeReport,
    IncomePoint,
    PeriodRevenue,
    build_daily_income_report,
    income_series,
    period_revenue,
    period_revenue_batch,
)
from rentalshop.revenue.days import UTC_DAYS, DayPolicy, utcnow
from rentalshop.revenue.events import derive_revenue_events, order_revenue_total
from rentalshop.revenue.per_date import revenue_events_for_date, revenue_for_date
from rentalshop.revenue.projection import project_future_events
from rentalshop.revenue.snapshot import current_status_revenue
from rentalshop.revenue.types import OrderSnapshot, RevenueEvent


@dataclass(frozen=True, slots=True)
class RevenueEngine:
    """Revenue operations bound to a day policy and a clock."""

    policy: DayPolicy = UTC_DAYS
    clock: Callable[[], datetime] = field(default=utcnow)

    def now(self) -> datetime:
        return self.clock()

    def derive_events(
        self,
        order: OrderSnapshot,
        range_start: datetime | None = None,
        range_end: datetime | None = None,
    ) -> list[RevenueEvent]:
        return derive_revenue_events(order, range_start, range_end, policy=self.policy)

    def total_revenue(self, order: OrderSnapshot) -> Decimal:
        return order_revenue_total(order, policy=self.policy)

    def project_future(
        self, order: OrderSnapshot, range_start: datetime, range_end: datetime
    ) -> list[RevenueEvent]:
        return project_future_events(order, range_start, range_end, now=self.now())

    def status_revenue(self, order: OrderSnapshot) -> Decimal:
        return current_status_revenue(order, policy=self.policy)

    def revenue_for_date(self, order: OrderSnapshot, target_date: date | datetime) -> Decimal:
        return revenue_for_date(order, target_date, now=self.now(), policy=self.policy)

    def events_for_date(
        self, order: OrderSnapshot, target_date: date | datetime
    ) -> list[RevenueEvent]:
        return revenue_events_for_date(
            order, target_date, now=self.now(), policy=self.policy
        )

    def period_revenue(
        self, order: OrderSnapshot, range_start: datetime, range_end: datetime
    ) -> PeriodRevenue:
        return period_revenue(
            order, range_start, range_end, now=self.now(), policy=self.policy
        )

    def period_revenue_batch(
        self,
        orders: Iterable[OrderSnapshot],
        range_start: datetime,
        range_end: datetime,
    ) -> PeriodRevenue:
        return period_revenue_batch(
            orders, range_start, range_end, now=self.now(), policy=self.policy
        )

    def daily_income_report(
        self,
        orders: Iterable[OrderSnapshot],
        range_start: datetime,
        range_end: datetime,
    ) -> DailyIncomeReport:
        return build_daily_income_report(
            orders, range_start, range_end, policy=self.policy
        )

    def income_series(
        self,
        orders: Sequence[OrderSnapshot],
        range_start: datetime | date,
        range_end: datetime | date,
        *,
        group_by: str = "month",
    ) -> list[IncomePoint]:
        return income_series(
            orders,
            range_start,
            range_end,
            group_by=group_by,
            now=self.now(),
            policy=self.policy,
        )
