"""
API layer package.

Provides HTTP endpoint routing, middleware, error handling and
request/response models.
"""

from app.api.errors import (
    ErrorHandlingMiddleware,
    classify_exception,
    register_exception_handlers,
)

__all__ = ["ErrorHandlingMiddleware", "classify_exception", "register_exception_handlers"]
