"""Per-order revenue endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentalshop.api import deps
from rentalshop.revenue import RevenueEngine
from rentalshop.schemas.analytics import OrderRevenueResponse
from rentalshop.services import income_service

router = APIRouter(prefix="/orders")


@router.get(
    "/{order_id}/revenue",
    response_model=OrderRevenueResponse,
    summary="Revenue events and totals for one order",
)
async def order_revenue(
    order_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    engine: Annotated[RevenueEngine, Depends(deps.get_engine)],
    target_date: date | None = Query(default=None, alias="date"),
) -> OrderRevenueResponse:
    try:
        payload = await income_service.order_revenue(
            session, order_id=order_id, target_date=target_date, engine=engine
        )
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return OrderRevenueResponse.model_validate(payload)
