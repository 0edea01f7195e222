"""Merchant and outlet models (tenant scope)."""
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentalshop.db.base import Base
from rentalshop.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from rentalshop.models.order import Order


class Merchant(TimestampMixin, Base):
    """A shop owner; owns one or more outlets."""

    __tablename__ = "merchants"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    outlets: Mapped[list["Outlet"]] = relationship(
        "Outlet", back_populates="merchant", cascade="all, delete-orphan"
    )


class Outlet(TimestampMixin, Base):
    """A physical store where orders are placed."""

    __tablename__ = "outlets"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    merchant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("merchants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    merchant: Mapped[Merchant] = relationship("Merchant", back_populates="outlets")
    orders: Mapped[list["Order"]] = relationship("Order", back_populates="outlet")
