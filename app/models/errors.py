"""
Unified error schema for the User Management API.

Every failure surfaced to a client is classified into an ErrorKind and
rendered as an ErrorResponse with a fixed status code and message.
Handlers raise ApiError tagged with a kind; the error-normalization
middleware is the only place that turns a kind into a wire response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorKind(str, Enum):
    """Internal classification of a failure prior to translation."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


# kind -> (status code, client-facing message)
ERROR_TABLE: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.INVALID_ARGUMENT: (400, "Invalid argument provided"),
    ErrorKind.NOT_FOUND: (404, "Resource not found"),
    ErrorKind.UNAUTHORIZED: (401, "Unauthorized access"),
    ErrorKind.CONFLICT: (409, "Operation conflict"),
    ErrorKind.INTERNAL: (500, "An internal server error occurred"),
}

INTERNAL_ERROR_DETAILS = "Please contact support if the problem persists"


def status_for(kind: ErrorKind) -> int:
    """Return the HTTP status code mapped to an error kind."""
    return ERROR_TABLE[kind][0]


def kind_for_status(status_code: int) -> ErrorKind | None:
    """Return the error kind mapped to an HTTP status code, if any."""
    for kind, (status, _) in ERROR_TABLE.items():
        if status == status_code:
            return kind
    return None


class ApiError(Exception):
    """
    Failure tagged with an ErrorKind.

    Attributes:
        kind: Classification used by the error boundary
        details: Optional human-readable explanation for the client
    """

    def __init__(self, kind: ErrorKind, details: str | None = None) -> None:
        self.kind = kind
        self.details = details
        super().__init__(details or kind.value)

    @property
    def status_code(self) -> int:
        return status_for(self.kind)


@dataclass
class ErrorResponse:
    """
    Structured error body returned to clients.

    Attributes:
        message: Human-readable summary of the failure
        status_code: HTTP status code of the response
        details: Optional explanation, never internals for INTERNAL errors
        path: Request path that failed
        timestamp: Instant the response was generated (UTC)
    """

    message: str
    status_code: int
    details: str | None = None
    path: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_error(cls, error: ApiError, path: str) -> ErrorResponse:
        """
        Build the response for a classified error.

        INTERNAL errors always carry the generic support message instead
        of the error's own details.

        Args:
            error: The classified error
            path: Request path that failed

        Returns:
            ErrorResponse populated from the classification table
        """
        status, message = ERROR_TABLE[error.kind]
        details = (
            INTERNAL_ERROR_DETAILS
            if error.kind is ErrorKind.INTERNAL
            else error.details
        )
        return cls(message=message, status_code=status, details=details, path=path)

    def to_dict(self) -> dict[str, str | int | None]:
        """
        Convert to the camelCase wire format.

        Returns:
            Dictionary with message, statusCode, details, timestamp and path
        """
        return {
            "message": self.message,
            "statusCode": self.status_code,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "path": self.path,
        }


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Predefined Error Factories
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def invalid_argument_error(details: str | None = None) -> ApiError:
    """Create error for rejected input."""
    return ApiError(ErrorKind.INVALID_ARGUMENT, details)


def not_found_error(details: str | None = None) -> ApiError:
    """Create error for a missing resource."""
    return ApiError(ErrorKind.NOT_FOUND, details)


def unauthorized_error(details: str | None = None) -> ApiError:
    """Create error for a denied operation."""
    return ApiError(ErrorKind.UNAUTHORIZED, details)


def conflict_error(details: str | None = None) -> ApiError:
    """Create error for an operation conflicting with current state."""
    return ApiError(ErrorKind.CONFLICT, details)


def internal_error(details: str | None = None) -> ApiError:
    """Create generic internal error."""
    return ApiError(ErrorKind.INTERNAL, details)
