"""Tests for errors that escape a route."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_unknown_route(client: AsyncClient):
    response = await client.get("/api/v1/nowhere")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Not Found",
        "path": "/api/v1/nowhere",
    }


@pytest.mark.asyncio
async def test_malformed_json_body(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth/signup",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Invalid input data.",
        "path": "/api/v1/auth/signup",
    }
