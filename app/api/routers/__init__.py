"""
API router modules.

This package contains FastAPI routers organized by feature area:
- users: User CRUD endpoints and the error-simulation endpoint
- health: Health check for monitoring
"""

from app.api.routers.health import router as health_router
from app.api.routers.users import router as users_router

__all__ = [
    "health_router",
    "users_router",
]
