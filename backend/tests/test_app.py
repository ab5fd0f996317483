"""
Tests for app-level endpoints and request middleware.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_reports_disabled_cache(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["reservation_guard"] == "row"
    assert data["cache"] == {"status": "disabled"}


@pytest.mark.asyncio
async def test_metrics_exposes_booking_counters(client: AsyncClient, auth_headers, test_spot):
    await client.post(
        f"/api/spots/{test_spot.id}/bookings",
        json={"startDate": "2024-05-01", "endDate": "2024-05-03"},
        headers=auth_headers,
    )

    response = await client.get("/metrics")
    assert response.status_code == 200
    assert 'booking_decisions_total{outcome="approved"}' in response.text


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-Response-Time"].endswith("ms")


@pytest.mark.asyncio
async def test_request_id_is_generated(client: AsyncClient):
    response = await client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 12
