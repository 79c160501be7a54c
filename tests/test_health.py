"""Tests for the health endpoint and application wiring."""

import pytest
from httpx import ASGITransport, AsyncClient

from training_log_api.api.health import format_uptime
from training_log_api.errors import PersistenceError
from training_log_api.main import create_app


@pytest.mark.asyncio
async def test_health_endpoint(client: AsyncClient):
    response = await client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["healthy"] is True
    assert data["status"] == "healthy"
    assert data["databaseConnected"] is True
    assert "version" in data


@pytest.mark.asyncio
async def test_health_degraded_when_database_fails(client: AsyncClient, fake_db):
    fake_db.fail_with = PersistenceError("connection refused")

    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["healthy"] is True
    assert response.json()["status"] == "degraded"
    assert response.json()["databaseConnected"] is False


@pytest.mark.asyncio
async def test_database_routes_unavailable_without_database(test_settings):
    app = create_app(test_settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        health = await client.get("/api/health")
        register = await client.post(
            "/api/users",
            json={"firstName": "A", "lastName": "B", "email": "a@b.com", "password": "pw"},
        )

    assert health.status_code == 200
    assert health.json()["databaseConnected"] is False
    assert register.status_code == 503


@pytest.mark.asyncio
async def test_unknown_route_requires_auth(client: AsyncClient):
    response = await client.get("/api/nothing-here")
    assert response.status_code == 401


@pytest.mark.parametrize(
    "seconds,expected",
    [
        (0, "Days: 0, Hours: 0, Minutes: 0, Seconds: 0"),
        (3661, "Days: 0, Hours: 1, Minutes: 1, Seconds: 1"),
        (90061.9, "Days: 1, Hours: 1, Minutes: 1, Seconds: 1"),
    ],
)
def test_format_uptime(seconds, expected):
    assert format_uptime(seconds) == expected
