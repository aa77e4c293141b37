"""
Service Layer Tests.

Tests for the app/services/ module including:
- ServiceContainer lifecycle
- services_lifespan wiring onto app.state
"""

import pytest
from fastapi import FastAPI


class TestServiceContainer:
    """Tests for ServiceContainer class."""

    @pytest.mark.asyncio
    async def test_container_startup_initializes_services(self):
        """Test that startup creates a seeded user service."""
        from app.services import ServiceContainer

        container = ServiceContainer()

        with pytest.raises(RuntimeError, match="not initialized"):
            _ = container.users

        await container.startup()

        assert container.users is not None
        assert await container.users.count() == 3

        await container.shutdown()

    @pytest.mark.asyncio
    async def test_container_shutdown_releases_services(self):
        """Test that shutdown drops the service references."""
        from app.services import ServiceContainer

        container = ServiceContainer()
        await container.startup()
        await container.shutdown()

        with pytest.raises(RuntimeError):
            _ = container.users

    @pytest.mark.asyncio
    async def test_restart_reseeds(self):
        """Test that the store is not persisted across restarts."""
        from app.models.user import UserPayload
        from app.services import ServiceContainer

        container = ServiceContainer()
        await container.startup()
        await container.users.create_user(UserPayload(name="X", department="Y"))
        assert await container.users.count() == 4
        await container.shutdown()

        await container.startup()
        assert await container.users.count() == 3
        await container.shutdown()


class TestServicesLifespan:
    """Tests for services_lifespan and get_services."""

    @pytest.mark.asyncio
    async def test_lifespan_attaches_and_clears_container(self):
        from app.services import ServiceContainer, get_services, services_lifespan

        app = FastAPI()

        async with services_lifespan(app):
            services = get_services(app)
            assert isinstance(services, ServiceContainer)
            assert await services.users.count() == 3

        assert app.state.services is None
        with pytest.raises(RuntimeError, match="not initialized"):
            get_services(app)

    @pytest.mark.asyncio
    async def test_each_app_gets_its_own_container(self):
        from app.services import get_services, services_lifespan

        first, second = FastAPI(), FastAPI()

        async with services_lifespan(first), services_lifespan(second):
            assert get_services(first) is not get_services(second)
            await get_services(first).users.delete_user(1)
            assert await get_services(second).users.count() == 3
