from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from sqlalchemy import select

from rentalshop.core.config import get_settings
from rentalshop.db.session import get_sessionmaker
from rentalshop.models import (
    Customer,
    Merchant,
    Order,
    OrderStatus,
    OrderType,
    Outlet,
)

MERCHANT_NAME = "Dev Rentals"


def _demo_orders(outlet: Outlet, customer: Customer) -> list[Order]:
    today = datetime.now(UTC).replace(hour=10, minute=0, second=0, microsecond=0)

    def rent(number: str, **fields: object) -> Order:
        values: dict[str, object] = {
            "outlet_id": outlet.id,
            "customer_id": customer.id,
            "order_number": number,
            "order_type": OrderType.RENT,
            "total_amount": Decimal("500.00"),
            "deposit_amount": Decimal("100.00"),
            "security_deposit": Decimal("50.00"),
            "damage_fee": Decimal("0.00"),
        }
        values.update(fields)
        values.setdefault("updated_at", values["created_at"])
        return Order(**values)

    return [
        rent(
            "DEV-0001",
            status=OrderStatus.RETURNED,
            created_at=today - timedelta(days=6),
            picked_up_at=today - timedelta(days=5),
            returned_at=today - timedelta(days=2),
            damage_fee=Decimal("20.00"),
        ),
        rent(
            "DEV-0002",
            status=OrderStatus.PICKUPED,
            created_at=today - timedelta(days=3),
            picked_up_at=today - timedelta(days=3, hours=-2),
            return_plan_at=today + timedelta(days=2),
        ),
        rent(
            "DEV-0003",
            status=OrderStatus.RESERVED,
            created_at=today - timedelta(days=1),
            pickup_plan_at=today + timedelta(days=4),
        ),
        rent(
            "DEV-0004",
            status=OrderStatus.CANCELLED,
            created_at=today - timedelta(days=4),
            updated_at=today - timedelta(days=1),
        ),
        Order(
            outlet_id=outlet.id,
            customer_id=customer.id,
            order_number="DEV-0005",
            order_type=OrderType.SALE,
            status=OrderStatus.COMPLETED,
            total_amount=Decimal("120.00"),
            created_at=today,
            updated_at=today,
        ),
    ]


async def main() -> None:
    settings = get_settings()
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        existing = await session.execute(
            select(Merchant.id).where(Merchant.name == MERCHANT_NAME)
        )
        if existing.first():
            print(f"Merchant {MERCHANT_NAME} already exists")
            return

        merchant = Merchant(name=MERCHANT_NAME)
        session.add(merchant)
        await session.flush()

        outlet = Outlet(merchant_id=merchant.id, name="Main Street")
        customer = Customer(
            merchant_id=merchant.id,
            first_name="Dev",
            last_name="Customer",
            phone="555-010-0000",
        )
        session.add_all([outlet, customer])
        await session.flush()

        orders = _demo_orders(outlet, customer)
        session.add_all(orders)
        await session.commit()
        print(f"Created merchant {MERCHANT_NAME} with {len(orders)} demo orders")


if __name__ == "__main__":
    asyncio.run(main())
