"""Base user store interface.

Defines the record store contract consumed by the coordinator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from usercache.models import User


class UserStore(ABC):
    """Abstract base class for durable user storage.

    Every operation either succeeds or raises one of NotFoundError,
    ConflictError or StoreUnavailableError.
    """

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User:
        """Get a user by identifier.

        Raises:
            NotFoundError: If no user has this identifier
        """
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User:
        """Get a user by email.

        Raises:
            NotFoundError: If no user has this email
        """
        ...

    @abstractmethod
    async def create(self, email: str, name: str) -> User:
        """Create a user and return it with its assigned identifier.

        Raises:
            ConflictError: If the email is already taken
        """
        ...

    @abstractmethod
    async def update(self, user_id: int, email: str, name: str) -> None:
        """Replace the email and name of a user.

        Raises:
            NotFoundError: If no user has this identifier
            ConflictError: If the email belongs to another user
        """
        ...

    @abstractmethod
    async def delete(self, user_id: int) -> None:
        """Delete a user.

        Raises:
            NotFoundError: If no user has this identifier
        """
        ...

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List all users ordered by identifier."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Count all users."""
        ...

    @abstractmethod
    async def list_recent(self, days: int) -> list[User]:
        """List users created within the last `days` days, newest first."""
        ...
