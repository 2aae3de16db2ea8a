"""Base cache interface.

Defines the expiring key/value contract consumed by the coordinator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta


class Cache(ABC):
    """Abstract base class for expiring key/value caches.

    Implementations must make get/set/delete atomic per key and raise
    CacheUnavailableError on transport failures.
    """

    @abstractmethod
    async def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or None if absent or expired."""
        ...

    @abstractmethod
    async def set(self, key: str, value: bytes, ttl: int) -> None:
        """Store bytes under key, expiring after ttl seconds."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key. Deleting an absent key is not an error."""
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether key is present."""
        ...

    @abstractmethod
    async def ttl_remaining(self, key: str) -> timedelta | None:
        """Remaining lifetime of key.

        Returns:
            The remaining TTL, or None if the key is absent or never expires.
        """
        ...

    async def health_check(self) -> bool:
        """Check cache connectivity."""
        return True
