"""Order revenue recognition engine.

Pure functions over :class:`OrderSnapshot` values; no I/O and no shared
state.
"""

from rentalshop.revenue.aggregation import (
    MULTIPLE,
    DailyIncomeReport,
    DayBucket,
    IncomePoint,
    OrderRow,
    PeriodRevenue,
    ReportSummary,
    build_daily_income_report,
    income_series,
    period_revenue,
    period_revenue_batch,
)
from rentalshop.revenue.days import UTC_DAYS, DayPolicy, coerce_datetime, to_money
from rentalshop.revenue.engine import RevenueEngine
from rentalshop.revenue.events import derive_revenue_events, order_revenue_total
from rentalshop.revenue.per_date import (
    revenue_events_for_date,
    revenue_for_date,
    revenue_total_for_date,
)
from rentalshop.revenue.projection import project_future_events
from rentalshop.revenue.snapshot import current_status_revenue
from rentalshop.revenue.types import (
    OrderSnapshot,
    OrderStatus,
    OrderType,
    RevenueEvent,
    RevenueType,
)

__all__ = [
    "DailyIncomeReport",
    "DayBucket",
    "DayPolicy",
    "IncomePoint",
    "MULTIPLE",
    "OrderRow",
    "OrderSnapshot",
    "OrderStatus",
    "OrderType",
    "PeriodRevenue",
    "ReportSummary",
    "RevenueEngine",
    "RevenueEvent",
    "RevenueType",
    "UTC_DAYS",
    "build_daily_income_report",
    "coerce_datetime",
    "current_status_revenue",
    "derive_revenue_events",
    "income_series",
    "order_revenue_total",
    "period_revenue",
    "period_revenue_batch",
    "project_future_events",
    "revenue_events_for_date",
    "revenue_for_date",
    "revenue_total_for_date",
    "to_money",
]
