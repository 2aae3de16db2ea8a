"""Redis cache implementation for usercache.

Provides async Redis operations for caching serialized user snapshots.
Uses redis-py async client for connection pooling.
"""

from __future__ import annotations

from collections.abc import Awaitable
from datetime import timedelta
from typing import TYPE_CHECKING, cast

import redis.asyncio as redis
from redis.exceptions import RedisError

from usercache.cache.base import Cache
from usercache.errors import CacheUnavailableError

if TYPE_CHECKING:
    from redis.asyncio import Redis


def create_redis(url: str) -> Redis:
    """Create a Redis client for the given URL.

    Values are kept as bytes; the caller owns the client and must close it.
    """
    return redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=False,
    )


async def close_redis(client: Redis) -> None:
    """Close Redis connections."""
    await client.aclose()


class RedisCache(Cache):
    """Cache operations backed by Redis.

    Every RedisError is re-raised as CacheUnavailableError so callers only
    deal with the usercache error taxonomy.
    """

    def __init__(self, client: Redis):
        self.client = client

    async def get(self, key: str) -> bytes | None:
        try:
            return cast(bytes | None, await self.client.get(key))
        except RedisError as e:
            raise CacheUnavailableError(f"GET {key} failed: {e}") from e

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        try:
            await self.client.setex(key, ttl, value)
        except RedisError as e:
            raise CacheUnavailableError(f"SETEX {key} failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as e:
            raise CacheUnavailableError(f"DEL {key} failed: {e}") from e

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self.client.exists(key))
        except RedisError as e:
            raise CacheUnavailableError(f"EXISTS {key} failed: {e}") from e

    async def ttl_remaining(self, key: str) -> timedelta | None:
        """Remaining TTL of a key.

        Redis reports -2 for a missing key and -1 for a key without expiry.
        """
        try:
            seconds = await self.client.ttl(key)
        except RedisError as e:
            raise CacheUnavailableError(f"TTL {key} failed: {e}") from e
        if seconds < 0:
            return None
        return timedelta(seconds=seconds)

    async def health_check(self) -> bool:
        """Check Redis connectivity."""
        try:
            await cast(Awaitable[bool], self.client.ping())
            return True
        except RedisError:
            return False
