"""
Pytest configuration and fixtures for backend tests.
"""

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings

# Configure pytest-asyncio to use function-scoped event loops
pytest_plugins = ("pytest_asyncio",)

TEST_API_KEY = "test-key-123"
SECONDARY_API_KEY = "secondary-key-456"


@pytest.fixture
def settings() -> Settings:
    """Settings with known API keys and body logging disabled."""
    return Settings(_env_file=None, api_keys=[TEST_API_KEY, SECONDARY_API_KEY])


@pytest.fixture
def make_app() -> Callable[[Settings], FastAPI]:
    """Factory for applications built from explicit settings."""
    from app.main import create_app

    return create_app


@pytest_asyncio.fixture
async def api_app(
    settings: Settings, make_app: Callable[[Settings], FastAPI]
) -> AsyncGenerator[FastAPI, None]:
    """Create an application and run its lifespan around the test.

    ASGITransport does not send lifespan events, so the lifespan context
    is entered here to initialize the service container.
    """
    application = make_app(settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def client(api_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client that sends a valid API key."""
    transport = ASGITransport(app=api_app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-API-Key": TEST_API_KEY},
    ) as http_client:
        yield http_client


@pytest_asyncio.fixture
async def anonymous_client(api_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client that sends no API key."""
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def user_payload() -> dict[str, object]:
    """A valid user request body."""
    return {"name": "Alice Walker", "department": "Engineering", "salary": 72000}
