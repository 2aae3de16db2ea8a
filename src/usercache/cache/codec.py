"""Serialization of cached user snapshots.

Entries are stored as compact orjson bytes of the model's JSON dump so they
remain readable with redis-cli.
"""

from __future__ import annotations

import orjson
from pydantic import ValidationError

from usercache.errors import CacheSerializationError
from usercache.models import User

ORJSON_OPTIONS = orjson.OPT_UTC_Z


def encode_user(user: User) -> bytes:
    """Serialize a user into cache bytes."""
    try:
        return orjson.dumps(user.model_dump(mode="json"), option=ORJSON_OPTIONS)
    except TypeError as e:
        raise CacheSerializationError(f"Cannot encode user {user.id}: {e}") from e


def decode_user(data: bytes | str) -> User:
    """Deserialize cache bytes into a user.

    Raises:
        CacheSerializationError: If the payload is not valid JSON or does not
            describe a valid user.
    """
    try:
        return User.model_validate(orjson.loads(data))
    except (orjson.JSONDecodeError, ValidationError) as e:
        raise CacheSerializationError(f"Corrupt cache entry: {e}") from e
