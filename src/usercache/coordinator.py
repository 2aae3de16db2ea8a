"""Cache-aside coordinator for user records.

Reads go to the cache first and fall back to the store on a miss, then
repopulate the entry. Writes go to the store first; create writes the new
record through to the cache, update and delete only invalidate it.

Per-key cache states are Absent and Populated. There is no stale state:
every write path tears the entry down instead of refreshing it with data
the store has not confirmed.

Store errors reach the caller unchanged. Cache errors never do: a failed
read is a miss, and a failed write or invalidation after a successful store
mutation is logged and discarded. The latter leaves the previous entry in
place until its TTL runs out.
"""

from __future__ import annotations

import logging

from usercache.cache.base import Cache
from usercache.cache.codec import decode_user, encode_user
from usercache.cache.keys import CacheKeys
from usercache.errors import CacheError
from usercache.models import User
from usercache.observability.logging import LogContext
from usercache.observability.metrics import MetricsRegistry, get_metrics
from usercache.persistence.base import UserStore

logger = logging.getLogger(__name__)

# 5 minutes
DEFAULT_TTL = 300


class CachedUserRepository:
    """Wraps a UserStore with cache-aside reads and invalidate-on-write.

    Holds no mutable state of its own, so one instance can serve any number
    of concurrent tasks.
    """

    def __init__(
        self,
        store: UserStore,
        cache: Cache,
        ttl: int = DEFAULT_TTL,
        key_prefix: str | None = None,
        metrics: MetricsRegistry | None = None,
    ):
        self.store = store
        self.cache = cache
        self.ttl = ttl
        self.key_prefix = key_prefix
        self.metrics = metrics or get_metrics()

    def cache_key(self, user_id: int) -> str:
        """Cache key for a user identifier."""
        return CacheKeys.user(user_id, self.key_prefix)

    # -------------------------------------------------------------------------
    # Cache helpers
    # -------------------------------------------------------------------------

    def _discard(self, operation: str, key: str, error: CacheError) -> None:
        """Log and count a cache error that is deliberately not raised."""
        self.metrics.cache_errors_total.labels(operation=operation).inc()
        logger.warning(
            "Discarded cache error during %s on %s: %s",
            operation,
            key,
            error,
            extra={"cache_key": key, "error_code": error.code},
        )

    async def _read(self, key: str) -> User | None:
        """Return the cached user, or None on absent, corrupt or unavailable."""
        try:
            data = await self.cache.get(key)
            if data is None:
                return None
            return decode_user(data)
        except CacheError as e:
            self._discard("get", key, e)
            return None

    async def _populate(self, key: str, user: User) -> None:
        """Best-effort cache write; errors are discarded."""
        try:
            await self.cache.set(key, encode_user(user), self.ttl)
        except CacheError as e:
            self._discard("set", key, e)

    async def _invalidate(self, key: str) -> None:
        """Best-effort cache delete; errors are discarded."""
        try:
            await self.cache.delete(key)
        except CacheError as e:
            self._discard("delete", key, e)

    # -------------------------------------------------------------------------
    # Cached operations
    # -------------------------------------------------------------------------

    async def fetch_by_id(self, user_id: int) -> User:
        """Get a user, serving from cache when possible.

        A cache hit never touches the store. On a miss the store result is
        cached with the configured TTL. Store errors propagate and leave the
        cache untouched.
        """
        key = self.cache_key(user_id)
        with LogContext(operation="fetch_by_id"):
            cached = await self._read(key)
            if cached is not None:
                self.metrics.cache_hits_total.inc()
                return cached

            self.metrics.cache_misses_total.inc()
            logger.debug("Cache miss for %s", key)

            with self.metrics.time_store("get_by_id"):
                user = await self.store.get_by_id(user_id)

            await self._populate(key, user)
            return user

    async def create_cached(self, email: str, name: str) -> User:
        """Create a user and write it through to the cache."""
        with LogContext(operation="create_cached"):
            with self.metrics.time_store("create"):
                user = await self.store.create(email, name)

            # A brand-new key has no stale value to race with
            await self._populate(self.cache_key(user.id), user)
            return user

    async def update_cached(self, user_id: int, email: str, name: str) -> None:
        """Update a user and invalidate its cache entry.

        The entry is not repopulated; the next read is a forced miss that
        confirms the new values against the store.
        """
        with LogContext(operation="update_cached"):
            with self.metrics.time_store("update"):
                await self.store.update(user_id, email, name)

            await self._invalidate(self.cache_key(user_id))

    async def delete_cached(self, user_id: int) -> None:
        """Delete a user and invalidate its cache entry."""
        with LogContext(operation="delete_cached"):
            with self.metrics.time_store("delete"):
                await self.store.delete(user_id)

            await self._invalidate(self.cache_key(user_id))

    # -------------------------------------------------------------------------
    # Uncached reads
    # -------------------------------------------------------------------------

    async def get_by_email(self, email: str) -> User:
        with self.metrics.time_store("get_by_email"):
            return await self.store.get_by_email(email)

    async def list_users(self) -> list[User]:
        with self.metrics.time_store("list_all"):
            return await self.store.list_all()

    async def list_recent(self, days: int) -> list[User]:
        with self.metrics.time_store("list_recent"):
            return await self.store.list_recent(days)

    async def count_users(self) -> int:
        with self.metrics.time_store("count"):
            return await self.store.count()
