"""
FastAPI application entry point.

Configures and creates the FastAPI application with:
- Service lifecycle management
- The middleware pipeline (error normalization, authentication, logging)
- Exception handlers
- Router mounting
"""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables first
load_dotenv()

from app.api.errors import ErrorHandlingMiddleware, register_exception_handlers  # noqa: E402
from app.api.middleware import (  # noqa: E402
    ApiKeyAuthenticationMiddleware,
    HttpLoggingMiddleware,
)
from app.api.routers import health_router, users_router  # noqa: E402
from app.core.config import Settings, get_settings  # noqa: E402
from app.core.logging import configure_logging  # noqa: E402
from app.services import services_lifespan  # noqa: E402

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware added last runs first, so the logging stage is added
    first and the error boundary last.

    Args:
        settings: Explicit settings; defaults to the cached environment settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="User Management API",
        description="User CRUD API with error normalization, API key auth and HTTP logging",
        version="1.0.0",
        lifespan=services_lifespan,
    )
    app.state.settings = settings

    if not settings.api_keys:
        logger.warning("No API keys configured - every protected request will be rejected")

    register_exception_handlers(app)

    app.add_middleware(HttpLoggingMiddleware, settings=settings)
    app.add_middleware(ApiKeyAuthenticationMiddleware, settings=settings)
    app.add_middleware(ErrorHandlingMiddleware)

    app.include_router(health_router)
    app.include_router(users_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=True)
