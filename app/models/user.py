"""
Pydantic models for the user resource.

User is the stored and returned record. UserPayload is the request body
for create and update; its id is accepted for compatibility and ignored.
Salaries must be finite; NaN and Infinity are rejected.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class User(BaseModel):
    """A stored user record."""

    id: int
    name: str
    department: str
    salary: float = Field(default=0, allow_inf_nan=False)


class UserPayload(BaseModel):
    """Request body for creating or updating a user."""

    id: int | None = None  # ignored, the store assigns ids
    name: str | None = None
    department: str | None = None
    salary: float = Field(default=0, allow_inf_nan=False)
