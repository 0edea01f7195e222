"""Value objects shared by the revenue engine."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from rentalshop.revenue.days import coerce_datetime, to_money

ZERO = Decimal("0.00")


class OrderType(str, enum.Enum):
    """Kinds of orders handled by a shop."""

    RENT = "RENT"
    SALE = "SALE"


class OrderStatus(str, enum.Enum):
    """Lifecycle states for orders."""

    RESERVED = "RESERVED"
    PICKUPED = "PICKUPED"
    RETURNED = "RETURNED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class RevenueType(str, enum.Enum):
    """Lifecycle transition that produced a revenue event."""

    SALE = "SALE"
    RENT_DEPOSIT = "RENT_DEPOSIT"
    RENT_PICKUP = "RENT_PICKUP"
    RENT_RETURN = "RENT_RETURN"
    RENT_CANCELLED = "RENT_CANCELLED"
    SALE_CANCELLED = "SALE_CANCELLED"
    RENT_FUTURE_PICKUP = "RENT_FUTURE_PICKUP"
    RENT_FUTURE_RETURN = "RENT_FUTURE_RETURN"


FUTURE_REVENUE_TYPES = frozenset(
    {RevenueType.RENT_FUTURE_PICKUP, RevenueType.RENT_FUTURE_RETURN}
)

# Source attribute names, snake_case first.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "order_number": ("order_number", "orderNumber"),
    "order_type": ("order_type", "orderType"),
    "status": ("status",),
    "total_amount": ("total_amount", "totalAmount"),
    "deposit_amount": ("deposit_amount", "depositAmount"),
    "security_deposit": ("security_deposit", "securityDeposit"),
    "damage_fee": ("damage_fee", "damageFee"),
    "created_at": ("created_at", "createdAt"),
    "updated_at": ("updated_at", "updatedAt"),
    "picked_up_at": ("picked_up_at", "pickedUpAt"),
    "returned_at": ("returned_at", "returnedAt"),
    "pickup_plan_at": ("pickup_plan_at", "pickupPlanAt"),
    "return_plan_at": ("return_plan_at", "returnPlanAt"),
    "customer_name": ("customer_name", "customerName"),
    "customer_phone": ("customer_phone", "customerPhone"),
    "outlet_name": ("outlet_name", "outletName"),
}

_MONEY_FIELDS = ("total_amount", "deposit_amount", "security_deposit", "damage_fee")
_TIMESTAMP_FIELDS = (
    "created_at",
    "updated_at",
    "picked_up_at",
    "returned_at",
    "pickup_plan_at",
    "return_plan_at",
)


def _lookup(record: Any, field: str) -> Any:
    for name in _FIELD_ALIASES[field]:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def _coerce_enum(enum_cls: type[enum.Enum], value: Any, default: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    raw = getattr(value, "value", value)
    if isinstance(raw, str):
        try:
            return enum_cls(raw.strip().upper())
        except ValueError:
            return default
    return default


@dataclass(frozen=True, slots=True)
class OrderSnapshot:
    """Immutable view of an order used by every revenue calculation."""

    order_type: OrderType
    status: OrderStatus
    created_at: datetime | None
    total_amount: Decimal = ZERO
    deposit_amount: Decimal = ZERO
    security_deposit: Decimal = ZERO
    damage_fee: Decimal = ZERO
    picked_up_at: datetime | None = None
    returned_at: datetime | None = None
    pickup_plan_at: datetime | None = None
    return_plan_at: datetime | None = None
    updated_at: datetime | None = None
    id: Any = None
    order_number: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    outlet_name: str | None = None

    def __post_init__(self) -> None:
        # Direct construction gets the same normalization as from_record.
        object.__setattr__(
            self, "order_type", _coerce_enum(OrderType, self.order_type, OrderType.RENT)
        )
        object.__setattr__(
            self, "status", _coerce_enum(OrderStatus, self.status, OrderStatus.RESERVED)
        )
        for name in _MONEY_FIELDS:
            object.__setattr__(self, name, to_money(getattr(self, name)))
        for name in _TIMESTAMP_FIELDS:
            object.__setattr__(self, name, coerce_datetime(getattr(self, name)))

    @classmethod
    def from_record(cls, record: Any, **overrides: Any) -> "OrderSnapshot":
        """Build a snapshot from an ORM object or a mapping.

        Keys may be snake_case or camelCase. Money that cannot be parsed
        becomes zero and timestamps that cannot be parsed become ``None``.
        Unknown order types fall back to RENT and unknown statuses to
        RESERVED.
        """
        values = {field: _lookup(record, field) for field in _FIELD_ALIASES}
        values.update(overrides)

        order_number = values["order_number"]
        for name in ("customer_name", "customer_phone", "outlet_name"):
            values[name] = values[name] or None
        values["order_number"] = str(order_number) if order_number is not None else None
        return cls(**values)

    @property
    def is_rent(self) -> bool:
        return self.order_type == OrderType.RENT

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED

    @property
    def cancelled_at_creation(self) -> bool:
        """True when the order was cancelled at the instant it was created."""
        if not self.is_cancelled:
            return False
        return self.updated_at is None or self.updated_at == self.created_at

    @property
    def cancelled_at(self) -> datetime | None:
        return self.updated_at if self.is_cancelled else None

    @property
    def order_key(self) -> Any:
        """Identity used when grouping events per order."""
        if self.id is not None:
            return self.id
        if self.order_number is not None:
            return self.order_number
        return id(self)


@dataclass(frozen=True, slots=True)
class RevenueEvent:
    """A dated, signed amount attributable to one lifecycle transition."""

    revenue: Decimal
    date: datetime
    description: str
    revenue_type: RevenueType

    @property
    def is_projected(self) -> bool:
        return self.revenue_type in FUTURE_REVENUE_TYPES


def sum_revenue(events: Any) -> Decimal:
    """Sum the revenue of an iterable of events."""
    return sum((event.revenue for event in events), ZERO)
