"""Unit test fixtures: in-memory implementations of the store and cache."""

from __future__ import annotations

import asyncio
import time
from datetime import UTC, datetime, timedelta

import pytest

from usercache.cache.base import Cache
from usercache.coordinator import CachedUserRepository
from usercache.errors import CacheUnavailableError, ConflictError, NotFoundError
from usercache.models import User
from usercache.observability.metrics import MetricsRegistry
from usercache.persistence.base import UserStore


class InMemoryUserStore(UserStore):
    """Dict-backed store that records every call."""

    def __init__(self) -> None:
        self.rows: dict[int, User] = {}
        self.calls: list[str] = []
        self._next_id = 1

    async def get_by_id(self, user_id: int) -> User:
        self.calls.append("get_by_id")
        await asyncio.sleep(0)
        try:
            return self.rows[user_id]
        except KeyError:
            raise NotFoundError("User", user_id) from None

    async def get_by_email(self, email: str) -> User:
        self.calls.append("get_by_email")
        for user in self.rows.values():
            if user.email == email:
                return user
        raise NotFoundError("User", email)

    async def create(self, email: str, name: str) -> User:
        self.calls.append("create")
        if any(user.email == email for user in self.rows.values()):
            raise ConflictError(f"email already exists: {email}")
        user = User(id=self._next_id, email=email, name=name, created_at=datetime.now(UTC))
        self.rows[user.id] = user
        self._next_id += 1
        return user

    async def update(self, user_id: int, email: str, name: str) -> None:
        self.calls.append("update")
        await asyncio.sleep(0)
        if user_id not in self.rows:
            raise NotFoundError("User", user_id)
        if any(u.email == email and u.id != user_id for u in self.rows.values()):
            raise ConflictError(f"email already exists: {email}")
        self.rows[user_id] = self.rows[user_id].model_copy(update={"email": email, "name": name})

    async def delete(self, user_id: int) -> None:
        self.calls.append("delete")
        if self.rows.pop(user_id, None) is None:
            raise NotFoundError("User", user_id)

    async def list_all(self) -> list[User]:
        self.calls.append("list_all")
        return [self.rows[key] for key in sorted(self.rows)]

    async def count(self) -> int:
        self.calls.append("count")
        return len(self.rows)

    async def list_recent(self, days: int) -> list[User]:
        self.calls.append("list_recent")
        since = datetime.now(UTC) - timedelta(days=days)
        recent = [u for u in self.rows.values() if u.created_at >= since]
        return sorted(recent, key=lambda u: (u.created_at, u.id), reverse=True)


class InMemoryCache(Cache):
    """Expiring dict cache; set `available = False` to simulate an outage."""

    def __init__(self) -> None:
        self.entries: dict[str, tuple[bytes, float]] = {}
        self.available = True
        self.writes: list[str] = []

    def _check(self) -> None:
        if not self.available:
            raise CacheUnavailableError("connection refused")

    def _live(self, key: str) -> tuple[bytes, float] | None:
        entry = self.entries.get(key)
        if entry is not None and entry[1] <= time.monotonic():
            del self.entries[key]
            return None
        return entry

    async def get(self, key: str) -> bytes | None:
        self._check()
        entry = self._live(key)
        return entry[0] if entry else None

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        self._check()
        self.writes.append(f"set {key}")
        self.entries[key] = (value, time.monotonic() + ttl)

    async def delete(self, key: str) -> None:
        self._check()
        self.writes.append(f"delete {key}")
        self.entries.pop(key, None)

    async def exists(self, key: str) -> bool:
        self._check()
        return self._live(key) is not None

    async def ttl_remaining(self, key: str) -> timedelta | None:
        self._check()
        entry = self._live(key)
        if entry is None:
            return None
        return timedelta(seconds=entry[1] - time.monotonic())


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def metrics() -> MetricsRegistry:
    return MetricsRegistry(enabled=True)


@pytest.fixture
def repo(
    store: InMemoryUserStore, cache: InMemoryCache, metrics: MetricsRegistry
) -> CachedUserRepository:
    return CachedUserRepository(store, cache, metrics=metrics)
