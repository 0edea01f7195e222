"""Merchants, outlets, customers and orders.

Revision ID: 0001
Revises:
Create Date: 2026-01-05
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ORDER_TYPES = ("RENT", "SALE")
ORDER_STATUSES = ("RESERVED", "PICKUPED", "RETURNED", "COMPLETED", "CANCELLED")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(12, 2), nullable=False, server_default="0")


def upgrade() -> None:
    op.create_table(
        "merchants",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "outlets",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "merchant_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("merchants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_outlets_merchant_id", "outlets", ["merchant_id"])

    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "merchant_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("merchants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("first_name", sa.String(length=120)),
        sa.Column("last_name", sa.String(length=120)),
        sa.Column("phone", sa.String(length=32)),
        *_timestamps(),
    )
    op.create_index("ix_customers_merchant_id", "customers", ["merchant_id"])

    op.create_table(
        "orders",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "outlet_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("outlets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "customer_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("customers.id", ondelete="SET NULL"),
        ),
        sa.Column("order_number", sa.String(length=64), nullable=False, unique=True),
        sa.Column("order_type", sa.Enum(*ORDER_TYPES, name="ordertype"), nullable=False),
        sa.Column(
            "status", sa.Enum(*ORDER_STATUSES, name="orderstatus"), nullable=False
        ),
        _money("total_amount"),
        _money("deposit_amount"),
        _money("security_deposit"),
        _money("damage_fee"),
        sa.Column("picked_up_at", sa.DateTime(timezone=True)),
        sa.Column("returned_at", sa.DateTime(timezone=True)),
        sa.Column("pickup_plan_at", sa.DateTime(timezone=True)),
        sa.Column("return_plan_at", sa.DateTime(timezone=True)),
        sa.Column("deleted_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index("ix_orders_outlet_id", "orders", ["outlet_id"])
    op.create_index("ix_orders_created_at", "orders", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_orders_created_at", table_name="orders")
    op.drop_index("ix_orders_outlet_id", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_customers_merchant_id", table_name="customers")
    op.drop_table("customers")
    op.drop_index("ix_outlets_merchant_id", table_name="outlets")
    op.drop_table("outlets")
    op.drop_table("merchants")
    sa.Enum(name="orderstatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="ordertype").drop(op.get_bind(), checkfirst=True)
