"""API test fixtures — FastAPI app and async test client.

Invariants:
    - The app's DatabaseSessionManager wraps the test engine (app.state, no globals)
    - Rate limiting disabled unless a test builds its own app

Design Decisions:
    - ASGITransport does not run the lifespan: fixtures install the manager directly
"""

import pytest
from httpx import ASGITransport, AsyncClient

from profile_service.config import Settings
from profile_service.infrastructure.database import DatabaseSessionManager
from profile_service.main import create_app


@pytest.fixture
def settings():
    return Settings(environment="test", rate_limit_enabled=False)


@pytest.fixture
def app(settings, test_engine):
    application = create_app(settings)
    application.state.db_manager = DatabaseSessionManager.from_engine(test_engine)
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def create_user(client):
    """POST a user and return the decoded body."""
    async def _create(name="Alice Johnson", email="alice@example.com", **extra):
        res = await client.post(
            "/api/users", json={"name": name, "email": email, **extra},
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _create
