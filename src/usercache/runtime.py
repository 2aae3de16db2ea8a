"""Process-level wiring for usercache.

The runtime owns the SQLAlchemy engine and the Redis client and hands them
to a CachedUserRepository. Open it once at startup and close it at
shutdown:

    async with Runtime.from_settings(settings) as runtime:
        user = await runtime.users.fetch_by_id(1)
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TYPE_CHECKING

from usercache.cache.redis import RedisCache, close_redis, create_redis
from usercache.config import Settings
from usercache.coordinator import CachedUserRepository
from usercache.observability.metrics import MetricsRegistry
from usercache.persistence.db import Database
from usercache.persistence.repositories import SqlUserStore

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class Runtime:
    """Owns the shared store and cache handles for one process."""

    def __init__(self, database: Database, redis_client: Redis, settings: Settings):
        self.database = database
        self.redis_client = redis_client
        self.cache = RedisCache(redis_client)
        self.store = SqlUserStore(database.session_factory)
        self.metrics = MetricsRegistry(enabled=settings.enable_metrics)
        self.users = CachedUserRepository(
            self.store,
            self.cache,
            ttl=settings.cache_ttl_seconds,
            key_prefix=settings.cache_key_prefix,
            metrics=self.metrics,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Runtime:
        return cls(Database.from_settings(settings), create_redis(settings.redis_url), settings)

    async def health(self) -> dict[str, bool]:
        """Report connectivity of both backing services."""
        return {
            "database": await self.database.health_check(),
            "cache": await self.cache.health_check(),
        }

    async def close(self) -> None:
        """Close database and Redis connections."""
        try:
            await close_redis(self.redis_client)
        finally:
            await self.database.close()
        logger.debug("Runtime closed")

    async def __aenter__(self) -> Runtime:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
