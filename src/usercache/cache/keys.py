"""Cache key schema for usercache.

Key format: {prefix}:{id}

Where:
- prefix: "user" by default (configurable for shared Redis instances)
- id: the store-assigned integer identifier
"""

from __future__ import annotations


class CacheKeys:
    """Cache key generator following consistent naming convention."""

    PREFIX = "user"

    @classmethod
    def user(cls, user_id: int, prefix: str | None = None) -> str:
        """Key for a cached user record."""
        return f"{prefix or cls.PREFIX}:{user_id}"

    @classmethod
    def parse_user_key(cls, key: str, prefix: str | None = None) -> int | None:
        """Parse a user cache key back into its identifier.

        Returns None if the key doesn't match the expected format.
        """
        head, sep, tail = key.rpartition(":")
        if not sep or head != (prefix or cls.PREFIX) or not tail.isdigit():
            return None
        return int(tail)
