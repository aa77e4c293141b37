"""
User Service - In-process user store.

Holds user records keyed by id plus a monotonically increasing id counter.
All access goes through a single asyncio.Lock so concurrent requests see
a consistent collection. Records handed out are copies; the stored
state only changes through the service methods.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from app.models.user import User, UserPayload

logger = logging.getLogger(__name__)

SEED_USERS: tuple[User, ...] = (
    User(id=1, name="John Doe", department="IT", salary=50000),
    User(id=2, name="Jane Smith", department="HR", salary=60000),
    User(id=3, name="Mike Johnson", department="Finance", salary=55000),
)


class UserService:
    """
    Service layer for user CRUD operations.

    Lookups that miss return None (or False for delete); mapping a miss
    to a client-facing error is the caller's job.
    """

    def __init__(self, seed: Iterable[User] = SEED_USERS) -> None:
        """
        Initialize the store with seed records.

        Args:
            seed: Initial users; ids must be unique
        """
        self._users: dict[int, User] = {}
        for user in seed:
            if user.id in self._users:
                raise ValueError(f"Duplicate seed user id: {user.id}")
            self._users[user.id] = user.model_copy()
        self._next_id = max(self._users, default=0) + 1
        self._lock = asyncio.Lock()

    async def list_users(self) -> list[User]:
        """
        List all users in insertion order.

        Returns:
            Copies of every stored user
        """
        async with self._lock:
            return [user.model_copy() for user in self._users.values()]

    async def get_user(self, user_id: int) -> User | None:
        """
        Retrieve a single user.

        Args:
            user_id: Id of the user

        Returns:
            Copy of the user or None if not found
        """
        async with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    async def create_user(self, payload: UserPayload) -> User:
        """
        Store a new user under the next id.

        Any id on the payload is ignored.

        Args:
            payload: Validated user data

        Returns:
            The stored user with its assigned id
        """
        async with self._lock:
            user = User(
                id=self._next_id,
                name=payload.name or "",
                department=payload.department or "",
                salary=payload.salary,
            )
            self._users[user.id] = user
            self._next_id += 1
            logger.info(f"Created user {user.id}")
            return user.model_copy()

    async def update_user(self, user_id: int, payload: UserPayload) -> User | None:
        """
        Overwrite name, department and salary of an existing user.

        Args:
            user_id: Id of the user to update
            payload: Validated user data; its id is ignored

        Returns:
            The updated user or None if not found
        """
        async with self._lock:
            existing = self._users.get(user_id)
            if existing is None:
                return None
            updated = existing.model_copy(
                update={
                    "name": payload.name or "",
                    "department": payload.department or "",
                    "salary": payload.salary,
                }
            )
            self._users[user_id] = updated
            logger.info(f"Updated user {user_id}")
            return updated.model_copy()

    async def delete_user(self, user_id: int) -> bool:
        """
        Remove a user.

        Args:
            user_id: Id of the user to delete

        Returns:
            True if deleted, False if not found
        """
        async with self._lock:
            if self._users.pop(user_id, None) is None:
                return False
            logger.info(f"Deleted user {user_id}")
            return True

    async def count(self) -> int:
        """Return the number of stored users."""
        async with self._lock:
            return len(self._users)
