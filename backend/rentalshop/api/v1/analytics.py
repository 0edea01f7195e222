"""Income analytics endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentalshop.api import deps
from rentalshop.revenue import RevenueEngine
from rentalshop.schemas.analytics import (
    DailyIncomeResponse,
    IncomePointRead,
    IncomeSummaryResponse,
    IncomeTotalsRead,
)
from rentalshop.services import income_service

router = APIRouter(prefix="/analytics")


@router.get(
    "/income/daily",
    response_model=DailyIncomeResponse,
    summary="Daily income with per-order breakdown",
)
async def daily_income(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    engine: Annotated[RevenueEngine, Depends(deps.get_engine)],
    start_date: date = Query(...),
    end_date: date = Query(...),
    merchant_id: uuid.UUID | None = Query(default=None),
    outlet_id: uuid.UUID | None = Query(default=None),
) -> DailyIncomeResponse:
    try:
        report = await income_service.daily_income(
            session,
            start_date=start_date,
            end_date=end_date,
            merchant_id=merchant_id,
            outlet_id=outlet_id,
            engine=engine,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return DailyIncomeResponse.model_validate(
        {
            "start_date": start_date,
            "end_date": end_date,
            "days": report.days,
            "summary": report.summary,
        }
    )


@router.get(
    "/income",
    response_model=IncomeSummaryResponse,
    summary="Realized and projected income by month or day",
)
async def income_summary(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    engine: Annotated[RevenueEngine, Depends(deps.get_engine)],
    start_date: date = Query(...),
    end_date: date = Query(...),
    group_by: str = Query(default="month"),
    merchant_id: uuid.UUID | None = Query(default=None),
    outlet_id: uuid.UUID | None = Query(default=None),
) -> IncomeSummaryResponse:
    try:
        summary = await income_service.income_summary(
            session,
            start_date=start_date,
            end_date=end_date,
            group_by=group_by,
            merchant_id=merchant_id,
            outlet_id=outlet_id,
            engine=engine,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return IncomeSummaryResponse(
        group_by=group_by,
        data=[IncomePointRead.model_validate(point) for point in summary["data"]],
        totals=IncomeTotalsRead.model_validate(summary["totals"]),
    )
