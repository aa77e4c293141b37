"""
HTTP middleware for the request pipeline.

Registration order in app.main makes the stages run, outermost first:
error normalization, API key authentication, request/response logging.
"""

from app.api.middleware.auth import ApiKeyAuthenticationMiddleware
from app.api.middleware.http_logging import HttpLoggingMiddleware, ResponseCapture

__all__ = [
    "ApiKeyAuthenticationMiddleware",
    "HttpLoggingMiddleware",
    "ResponseCapture",
]
