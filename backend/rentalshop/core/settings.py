"""Specialized settings adapters for the revenue engine."""

from __future__ import annotations

from rentalshop.core.config import get_settings
from rentalshop.revenue import DayPolicy, RevenueEngine


def get_revenue_policy() -> DayPolicy:
    """Return the calendar-day policy configured for revenue reporting."""

    return DayPolicy.from_name(get_settings().revenue_timezone)


def get_revenue_engine() -> RevenueEngine:
    """Return a revenue engine bound to the configured day policy."""

    return RevenueEngine(policy=get_revenue_policy())
