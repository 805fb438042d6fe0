"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from meal_record_api.core.config import Settings, get_settings
from meal_record_api.main import create_app
from meal_record_api.services.nutrition import NutritionPipeline

from .helpers import TEST_API_KEY, FakeAlerts, FakeGateway, FakeMealLog


@pytest.fixture
def gateway() -> FakeGateway:
    """Gateway replying with a clean nutrition JSON object."""
    return FakeGateway()


@pytest.fixture
def meal_log() -> FakeMealLog:
    return FakeMealLog()


@pytest.fixture
def alerts() -> FakeAlerts:
    return FakeAlerts()


@pytest.fixture
async def pipeline(gateway, meal_log, alerts) -> AsyncGenerator[NutritionPipeline, None]:
    """Pipeline over the fake collaborators; drains background reports on teardown."""
    pipeline = NutritionPipeline(gateway, meal_log=meal_log, alerts=alerts)
    yield pipeline
    await pipeline.wait_for_background()


@pytest.fixture
def app_settings() -> Settings:
    return Settings(api_key=TEST_API_KEY, meal_log_enabled=False, _env_file=None)


@pytest.fixture
async def client(pipeline, app_settings) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client wired to the fake pipeline.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.post("/meals", json=..., headers=...)
            assert response.status_code == 200
    """
    app = create_app()
    app.state.pipeline = pipeline
    app.dependency_overrides[get_settings] = lambda: app_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
