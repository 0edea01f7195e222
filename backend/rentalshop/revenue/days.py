"""Calendar-day policy and input normalization for revenue rules.

Every "same day" comparison in the engine goes through a single
:class:`DayPolicy`, so the time zone that defines a business day is chosen
once (``REVENUE_TIMEZONE``) instead of at each call site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from zoneinfo import ZoneInfo

MONEY_PLACES = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Normalize a monetary input to a cent-quantized Decimal.

    ``None``, unparsable and non-finite values become zero.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0.00")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0.00")
    if not amount.is_finite():
        return Decimal("0.00")
    return amount.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def coerce_datetime(value: Any) -> datetime | None:
    """Return an aware datetime or ``None`` when the value is unusable.

    Naive datetimes are interpreted as UTC (SQLite hands them back that way).
    ISO-8601 strings are accepted, including a trailing ``Z``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


@dataclass(frozen=True, slots=True)
class DayPolicy:
    """Maps instants to calendar days in one time zone."""

    tz: tzinfo = field(default=UTC)

    @classmethod
    def from_name(cls, name: str | None) -> "DayPolicy":
        """Build a policy from an IANA zone name; blank or ``UTC`` means UTC."""
        if not name or name.strip().upper() == "UTC":
            return cls(UTC)
        return cls(ZoneInfo(name.strip()))

    def day_of(self, moment: datetime | date) -> date:
        if isinstance(moment, datetime):
            aware = moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)
            return aware.astimezone(self.tz).date()
        return moment

    def same_day(self, first: datetime | None, second: datetime | None) -> bool:
        if first is None or second is None:
            return False
        return self.day_of(first) == self.day_of(second)

    def day_key(self, moment: datetime | date) -> str:
        return self.day_of(moment).isoformat()

    def start_of_day(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz)

    def end_of_day(self, day: date) -> datetime:
        return datetime.combine(day, time.max, tzinfo=self.tz)

    def day_window(self, day: datetime | date) -> tuple[datetime, datetime]:
        """Inclusive ``(start, end)`` bounds of the day containing ``day``."""
        target = self.day_of(day)
        return self.start_of_day(target), self.end_of_day(target)

    def iter_days(self, start: date, end: date) -> list[date]:
        days: list[date] = []
        current = start
        while current <= end:
            days.append(current)
            current += timedelta(days=1)
        return days


UTC_DAYS = DayPolicy(UTC)


def in_window(
    moment: datetime | None,
    range_start: datetime | None,
    range_end: datetime | None,
) -> bool:
    """Inclusive window check; an open window (either bound missing) matches all."""
    if moment is None:
        return False
    if range_start is None or range_end is None:
        return True
    return range_start <= moment <= range_end


def utcnow() -> datetime:
    return datetime.now(UTC)
