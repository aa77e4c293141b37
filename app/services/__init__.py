"""
Service Container and Lifecycle Management.

Provides a container for service instances with startup/shutdown
lifecycle management for FastAPI integration. The container is attached
to ``app.state.services`` so each application owns its own store.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.services.user_service import SEED_USERS, UserService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Dependency injection container for all services.

    Manages service lifecycle with startup/shutdown hooks for proper
    resource management in FastAPI applications.
    """

    def __init__(self) -> None:
        """Initialize container with empty service references."""
        self._users: UserService | None = None

    @property
    def users(self) -> UserService:
        """Get user service instance."""
        if self._users is None:
            raise RuntimeError(
                "ServiceContainer not initialized - call startup() first"
            )
        return self._users

    async def startup(self) -> None:
        """Create services and seed the user store."""
        logger.info("Starting service container")
        self._users = UserService(seed=SEED_USERS)
        logger.info(f"User store seeded with {len(SEED_USERS)} users")

    async def shutdown(self) -> None:
        """Release service references; the store is not persisted."""
        logger.info("Shutting down service container")
        self._users = None
        logger.info("Service container shutdown complete")


def get_services(app: FastAPI) -> ServiceContainer:
    """
    Get the service container attached to an application.

    Args:
        app: FastAPI application instance

    Returns:
        The application's ServiceContainer

    Raises:
        RuntimeError: If the lifespan has not run for this application
    """
    services = getattr(app.state, "services", None)
    if services is None:
        raise RuntimeError(
            "Services not initialized - ensure services_lifespan() is used"
        )
    return services


@asynccontextmanager
async def services_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    FastAPI lifespan context manager for service initialization.

    Example:
        app = FastAPI(lifespan=services_lifespan)

    Args:
        app: FastAPI application instance

    Yields:
        None (context manager pattern)
    """
    services = ServiceContainer()
    await services.startup()
    app.state.services = services
    logger.info("FastAPI services initialized")

    try:
        yield
    finally:
        await services.shutdown()
        app.state.services = None
        logger.info("FastAPI services cleaned up")


__all__ = [
    "ServiceContainer",
    "UserService",
    "get_services",
    "services_lifespan",
]
