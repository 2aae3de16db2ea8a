"""usercache: cache-aside user records on PostgreSQL and Redis."""

from usercache.coordinator import CachedUserRepository
from usercache.errors import (
    CacheError,
    CacheSerializationError,
    CacheUnavailableError,
    ConflictError,
    NotFoundError,
    StoreUnavailableError,
    UserCacheError,
)
from usercache.models import User

__all__ = [
    "CachedUserRepository",
    "User",
    "UserCacheError",
    "NotFoundError",
    "ConflictError",
    "StoreUnavailableError",
    "CacheError",
    "CacheUnavailableError",
    "CacheSerializationError",
]

__version__ = "0.1.0"
