"""
Users router - CRUD operations on the user store.

Handlers validate input and signal failures by raising ApiError; the
error-normalization middleware renders them. A missing user is answered
here with a plain-text 404, like the delete confirmation.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse

from app.api.deps import ValidatedUserPayload, get_user_service
from app.models.errors import (
    conflict_error,
    invalid_argument_error,
    not_found_error,
    unauthorized_error,
)
from app.models.user import User, UserPayload
from app.services import UserService

router = APIRouter(prefix="/api/user", tags=["users"])

USER_NOT_FOUND_TEMPLATE = "User with ID {user_id} not found."

SIMULATED_ERRORS: dict[str, Callable[[], Exception]] = {
    "argument": lambda: invalid_argument_error("This is a test argument exception"),
    "notfound": lambda: not_found_error("This is a test not found exception"),
    "unauthorized": lambda: unauthorized_error("This is a test unauthorized exception"),
    "conflict": lambda: conflict_error("This is a test conflict exception"),
    "server": lambda: RuntimeError("This is a test internal server error"),
}


@router.get("", response_model=list[User])
async def list_users(
    user_svc: UserService = Depends(get_user_service),
) -> list[User]:
    """
    List all users.

    Args:
        user_svc: Injected user service

    Returns:
        Every stored user, no filtering or pagination
    """
    return await user_svc.list_users()


@router.get("/test-error/{category}")
async def simulate_error(category: str) -> Response:
    """
    Raise a failure of the requested category.

    Diagnostic endpoint for exercising the error-normalization middleware.

    Args:
        category: argument, notfound, unauthorized, conflict or server

    Raises:
        ApiError: For the client-error categories and unknown categories
        RuntimeError: For the server category
    """
    factory = SIMULATED_ERRORS.get(category.lower())
    if factory is None:
        raise invalid_argument_error(
            f"Valid error types: {', '.join(SIMULATED_ERRORS)}"
        )
    raise factory()


def _user_not_found(user_id: int) -> PlainTextResponse:
    return PlainTextResponse(
        USER_NOT_FOUND_TEMPLATE.format(user_id=user_id), status_code=404
    )


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: int,
    user_svc: UserService = Depends(get_user_service),
) -> User | PlainTextResponse:
    """
    Get a user by id.

    Returns:
        The user, or a plain-text 404 if no user has this id
    """
    user = await user_svc.get_user(user_id)
    if user is None:
        return _user_not_found(user_id)
    return user


@router.post("", response_model=User, status_code=201)
async def create_user(
    request: Request,
    response: Response,
    payload: UserPayload = Depends(ValidatedUserPayload()),
    user_svc: UserService = Depends(get_user_service),
) -> User:
    """
    Create a user.

    The id is assigned by the store; any id in the body is ignored.

    Args:
        request: The incoming HTTP request, used to build the Location header
        response: Outgoing response, receives the Location header
        payload: Validated user data
        user_svc: Injected user service

    Returns:
        The created user
    """
    user = await user_svc.create_user(payload)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: int,
    payload: UserPayload = Depends(ValidatedUserPayload()),
    user_svc: UserService = Depends(get_user_service),
) -> User | PlainTextResponse:
    """
    Overwrite name, department and salary of a user.

    Returns:
        The updated user, or a plain-text 404 if no user has this id

    Raises:
        ApiError: INVALID_ARGUMENT for a blank name or department
    """
    user = await user_svc.update_user(user_id, payload)
    if user is None:
        return _user_not_found(user_id)
    return user


@router.delete("/{user_id}", response_class=PlainTextResponse)
async def delete_user(
    user_id: int,
    user_svc: UserService = Depends(get_user_service),
) -> PlainTextResponse:
    """Delete a user and confirm in plain text."""
    if not await user_svc.delete_user(user_id):
        return _user_not_found(user_id)
    return PlainTextResponse(f"User with ID {user_id} has been deleted successfully.")
