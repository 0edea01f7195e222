"""ORM models package export."""

from rentalshop.models.customer import Customer
from rentalshop.models.merchant import Merchant, Outlet
from rentalshop.models.order import Order
from rentalshop.revenue.types import OrderStatus, OrderType

__all__ = [
    "Customer",
    "Merchant",
    "Order",
    "OrderStatus",
    "OrderType",
    "Outlet",
]
