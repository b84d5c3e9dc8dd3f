"""Health & Readiness Probes — liveness always up, readiness follows the database."""

import pytest


class _DownManager:
    async def health_check(self) -> bool:
        return False


@pytest.fixture
def database_down(app):
    app.state.db_manager = _DownManager()


async def test_service_info(client):
    res = await client.get("/")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["service"] == "user-profile-service"
    assert body["version"] == "1.0.0"


async def test_health_reports_connected_database(client):
    res = await client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["uptime"] >= 0


async def test_liveness_always_ok(client, database_down):
    res = await client.get("/health/live")
    assert res.status_code == 200
    assert res.json() == {"status": "alive"}


async def test_readiness_ok_with_database(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json() == {"status": "ready"}


async def test_readiness_503_when_database_unreachable(client, database_down):
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json() == {"status": "not ready"}


async def test_health_503_when_database_unreachable(client, database_down):
    res = await client.get("/health")
    assert res.status_code == 503
    assert res.json()["status"] == "unhealthy"
    assert res.json()["database"] == "disconnected"


async def test_readiness_503_before_database_initialized(app, client):
    app.state.db_manager = None
    res = await client.get("/health/ready")
    assert res.status_code == 503
