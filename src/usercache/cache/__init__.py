"""Cache layer for usercache.

Provides the expiring key/value contract and its Redis implementation:
- Keys of the form "user:<id>"
- orjson snapshots of user records
- TTL-based expiration for memory management
"""

from usercache.cache.base import Cache
from usercache.cache.codec import decode_user, encode_user
from usercache.cache.keys import CacheKeys
from usercache.cache.redis import RedisCache, close_redis, create_redis

__all__ = [
    "Cache",
    "CacheKeys",
    "RedisCache",
    "create_redis",
    "close_redis",
    "encode_user",
    "decode_user",
]
