"""
Centralized exception handling for API endpoints.

The ErrorHandlingMiddleware wraps the whole pipeline: any exception raised
downstream is classified into an ErrorKind and rendered as an
ErrorResponse. Framework errors that FastAPI would otherwise render itself
(request validation, routing 404s) are sent through the same translation
via registered exception handlers.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler as default_http_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.models.errors import (
    ApiError,
    ErrorKind,
    ErrorResponse,
    internal_error,
    invalid_argument_error,
    kind_for_status,
    not_found_error,
    unauthorized_error,
)

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Request validation failed"
    first_error = errors[0]
    field = ".".join(str(loc) for loc in first_error["loc"])
    return f"{field}: {first_error['msg']}"


def classify_exception(exc: Exception) -> ApiError:
    """
    Map an exception to a tagged ApiError.

    Args:
        exc: Any exception raised while handling a request

    Returns:
        ApiError carrying the error kind and client-safe details
    """
    if isinstance(exc, ApiError):
        return exc

    if isinstance(exc, RequestValidationError):
        return invalid_argument_error(_describe_validation_error(exc))

    if isinstance(exc, StarletteHTTPException):
        kind = kind_for_status(exc.status_code)
        if kind is not None and kind is not ErrorKind.INTERNAL:
            return ApiError(kind, str(exc.detail))
        return internal_error(str(exc.detail))

    if isinstance(exc, PermissionError):
        return unauthorized_error(str(exc))

    if isinstance(exc, (KeyError, FileNotFoundError)):
        # KeyError.__str__ quotes its argument
        detail = exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc)
        return not_found_error(str(detail))

    # Model and serialization failures past request parsing are server bugs
    if isinstance(exc, (ValidationError, PydanticSerializationError)):
        return internal_error(f"{type(exc).__name__}: {exc}")

    if isinstance(exc, ValueError):
        return invalid_argument_error(str(exc))

    return internal_error(f"{type(exc).__name__}: {exc}")


def render_error(request: Request, exc: Exception) -> JSONResponse:
    """
    Log a failure and convert it to a JSON error response.

    Internal errors are logged with their traceback; the client only ever
    sees the generic message and support details.

    Args:
        request: The request that failed
        exc: The exception raised while handling it

    Returns:
        JSONResponse with the ErrorResponse body and mapped status code
    """
    error = classify_exception(exc)
    path = request.url.path

    if error.kind is ErrorKind.INTERNAL:
        logger.error(
            f"Unhandled exception on {request.method} {path}: "
            f"{type(exc).__name__}: {exc}",
            exc_info=exc,
        )
    else:
        logger.warning(
            f"{error.kind.value} on {request.method} {path}: {error.details}"
        )

    body = ErrorResponse.from_error(error, path=path)
    return JSONResponse(status_code=body.status_code, content=body.to_dict())


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Outermost stage: no exception escapes this boundary unrendered."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return render_error(request, exc)


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """
    Render request validation failures as INVALID_ARGUMENT errors.

    Args:
        request: The incoming HTTP request
        exc: The validation exception (must be RequestValidationError)

    Returns:
        JSONResponse with a 400 error body
    """
    if not isinstance(exc, RequestValidationError):
        raise exc
    return render_error(request, exc)


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """
    Render framework HTTP errors whose status has an error kind.

    Statuses outside the classification table (e.g. 405) keep FastAPI's
    default rendering.

    Args:
        request: The incoming HTTP request
        exc: The HTTP exception (must be a Starlette HTTPException)

    Returns:
        Response for the HTTP error
    """
    if not isinstance(exc, StarletteHTTPException):
        raise exc
    kind = kind_for_status(exc.status_code)
    if kind is None or kind is ErrorKind.INTERNAL:
        return await default_http_handler(request, exc)
    return render_error(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers on the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
