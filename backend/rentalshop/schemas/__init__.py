"""Schema exports."""

from rentalshop.schemas.analytics import (
    DailyIncomeResponse,
    DayBucketRead,
    IncomePointRead,
    IncomeSummaryResponse,
    IncomeTotalsRead,
    OrderRevenueResponse,
    OrderRowRead,
    ReportSummaryRead,
    RevenueEventRead,
)

__all__ = [
    "DailyIncomeResponse",
    "DayBucketRead",
    "IncomePointRead",
    "IncomeSummaryResponse",
    "IncomeTotalsRead",
    "OrderRevenueResponse",
    "OrderRowRead",
    "ReportSummaryRead",
    "RevenueEventRead",
]
