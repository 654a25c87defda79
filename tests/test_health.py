"""Tests for health check endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import AsyncClient

from app.main import app


@pytest.mark.asyncio
async def test_ping(client: AsyncClient):
    response = await client.get("/api/v1/ping")

    assert response.status_code == 200
    assert response.json() == {"message": "pong"}


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("db_ok", "redis_ok", "expected"),
    [(True, True, "healthy"), (True, False, "degraded"), (False, True, "unhealthy")],
)
async def test_detailed_health(client: AsyncClient, db_ok, redis_ok, expected):
    provider = MagicMock(initialized=True)
    app.state.identity_provider = provider
    try:
        with (
            patch(
                "app.api.v1.endpoints.health.check_database_connection",
                AsyncMock(return_value=db_ok),
            ),
            patch(
                "app.api.v1.endpoints.health.check_redis_connection",
                AsyncMock(return_value=redis_ok),
            ),
        ):
            response = await client.get("/api/v1/health/detailed")
    finally:
        del app.state.identity_provider

    body = response.json()
    assert body["status"] == expected
    assert body["identity_provider"] == "ready"


@pytest.mark.asyncio
async def test_detailed_health_without_identity_provider(client: AsyncClient):
    with (
        patch(
            "app.api.v1.endpoints.health.check_database_connection",
            AsyncMock(return_value=True),
        ),
        patch(
            "app.api.v1.endpoints.health.check_redis_connection",
            AsyncMock(return_value=True),
        ),
    ):
        response = await client.get("/api/v1/health/detailed")

    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["identity_provider"] == "not_initialized"
