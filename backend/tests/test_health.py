"""Health endpoint smoke test."""

import pytest

pytestmark = pytest.mark.asyncio


async def test_healthcheck_returns_ok(app_context) -> None:
    response = await app_context["client"].get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["database"] == "ok"
    assert payload["service"] == "Rentalshop Revenue API"
    assert payload["revenue_timezone"] == "UTC"
    assert response.headers.get("X-Request-ID")
