"""
API key authentication middleware.

Reads the configured API key header and compares it against the set of
configured keys. Documentation, health-check and favicon paths are
exempt. Failures are answered here with a plain-text 401 and never reach
later stages.
"""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from app.core.config import Settings, get_settings
from app.core.validators import matches_path_prefix

logger = logging.getLogger(__name__)

PUBLIC_PATHS = ("/docs", "/redoc", "/openapi.json", "/health", "/favicon.ico")

MISSING_KEY_MESSAGE = "API Key is missing"
INVALID_KEY_MESSAGE = "Invalid API Key"


class ApiKeyAuthenticationMiddleware(BaseHTTPMiddleware):
    """Reject requests that lack a valid API key."""

    def __init__(self, app: ASGIApp, settings: Settings | None = None) -> None:
        super().__init__(app)
        self.settings = settings or get_settings()
        self._valid_keys = frozenset(self.settings.api_keys)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if matches_path_prefix(path, PUBLIC_PATHS):
            return await call_next(request)

        api_key = request.headers.get(self.settings.api_key_header)
        if api_key is None:
            logger.warning(f"API key missing from request to {path}")
            return PlainTextResponse(MISSING_KEY_MESSAGE, status_code=401)

        if api_key not in self._valid_keys:
            logger.warning(f"Invalid API key attempted access to {path}")
            return PlainTextResponse(INVALID_KEY_MESSAGE, status_code=401)

        logger.info(f"Authenticated request to {path} with valid API key")
        return await call_next(request)
