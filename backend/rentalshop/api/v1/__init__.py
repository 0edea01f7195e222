"""Versioned API router."""

from fastapi import APIRouter

from . import analytics, health, orders

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(analytics.router, tags=["analytics"])
router.include_router(orders.router, tags=["orders"])
