"""
Dependency injection providers for API endpoints.

Provides FastAPI dependencies that inject service instances into route
handlers, and validation helpers for request payloads.
"""

from __future__ import annotations

from fastapi import Request

from app.core.validators import is_blank
from app.models.errors import invalid_argument_error
from app.models.user import UserPayload
from app.services import UserService, get_services


def get_user_service(request: Request) -> UserService:
    """
    Dependency provider for UserService.

    Returns:
        UserService instance owned by the requesting application
    """
    return get_services(request.app).users


def validate_user_payload(payload: UserPayload) -> UserPayload:
    """
    Validate that a user payload has a name and a department.

    Args:
        payload: The request body

    Returns:
        The payload, unchanged

    Raises:
        ApiError: INVALID_ARGUMENT if name or department is blank
    """
    if is_blank(payload.name):
        raise invalid_argument_error("Name is required.")
    if is_blank(payload.department):
        raise invalid_argument_error("Department is required.")
    return payload


class ValidatedUserPayload:
    """
    Dependency class for validated user request bodies.

    Usage:
        @router.post("")
        async def endpoint(payload: UserPayload = Depends(ValidatedUserPayload())):
            ...
    """

    def __call__(self, payload: UserPayload) -> UserPayload:
        """Validate and return the payload."""
        return validate_user_payload(payload)
