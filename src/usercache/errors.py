"""Error taxonomy for usercache.

Store errors (NotFound, Conflict, StoreUnavailable) are authoritative and
reach the caller unchanged. Cache errors are downgraded by the coordinator:
a failed read becomes a miss, a failed write or invalidation is logged and
discarded.
"""

from __future__ import annotations


class UserCacheError(Exception):
    """Base exception for usercache errors."""

    code = "error"

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(text)


class NotFoundError(UserCacheError):
    """Raised when a user is not present in the store."""

    code = "not_found"

    def __init__(self, entity: str, key: object) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class ConflictError(UserCacheError):
    """Raised when a unique constraint (email) is violated."""

    code = "conflict"


class StoreUnavailableError(UserCacheError):
    """Raised when the backing store cannot complete an operation."""

    code = "store_unavailable"


class CacheError(UserCacheError):
    """Base exception for non-fatal cache layer errors."""

    code = "cache_error"


class CacheUnavailableError(CacheError):
    """Raised when the cache transport fails."""

    code = "cache_unavailable"


class CacheSerializationError(CacheError):
    """Raised when a cached payload cannot be encoded or decoded."""

    code = "cache_serialization"
