"""Integration test fixtures using Docker.

Starts PostgreSQL and Redis containers once per session; each test gets a
fresh schema seeded with the two reference users and an empty Redis.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from tests.integration.docker_utils import DockerService, get_docker_client, run_container
from usercache.cache.redis import RedisCache, close_redis, create_redis
from usercache.coordinator import CachedUserRepository
from usercache.observability.metrics import MetricsRegistry
from usercache.persistence.db import Database
from usercache.persistence.repositories import SqlUserStore
from usercache.persistence.tables import UserTable

SEED_USERS = [
    ("alice@example.com", "Alice Smith"),
    ("bob@example.com", "Bob Johnson"),
]


@pytest.fixture(scope="session")
def docker_client():
    """Create a Docker client or skip if Docker is unavailable."""
    try:
        client = get_docker_client()
        client.ping()
    except Exception as exc:
        pytest.skip(f"Docker not available: {exc}")
    yield client
    client.close()


@pytest.fixture(scope="session")
def postgres_container(docker_client) -> Iterator[DockerService]:
    env = {
        "POSTGRES_USER": "testuser",
        "POSTGRES_PASSWORD": "testpass",
        "POSTGRES_DB": "testdb",
    }
    with run_container(
        docker_client, "postgres:16-alpine", env=env, ports={"5432/tcp": None}
    ) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def redis_container(docker_client) -> Iterator[DockerService]:
    with run_container(docker_client, "redis:7-alpine", ports={"6379/tcp": None}) as redis:
        yield redis


@pytest.fixture(scope="session")
def database_url(postgres_container: DockerService) -> str:
    host = postgres_container.host
    port = postgres_container.port(5432)
    return f"postgresql+asyncpg://testuser:testpass@{host}:{port}/testdb"


@pytest.fixture(scope="session")
def redis_url(redis_container: DockerService) -> str:
    host = redis_container.host
    port = redis_container.port(6379)
    return f"redis://{host}:{port}/0"


@pytest_asyncio.fixture
async def database(database_url: str) -> AsyncIterator[Database]:
    """Fresh schema with the reference users."""
    db = Database(create_async_engine(database_url, echo=False))
    await _wait_for_database(db)
    await db.drop_all()
    await db.create_all()

    async with db.session_context() as session:
        session.add_all([UserTable(email=email, name=name) for email, name in SEED_USERS])

    yield db

    await db.drop_all()
    await db.close()


@pytest_asyncio.fixture
async def store(database: Database) -> SqlUserStore:
    return SqlUserStore(database.session_factory)


@pytest_asyncio.fixture
async def redis_client(redis_url: str):
    client = create_redis(redis_url)
    await _wait_for_redis(client)
    await client.flushdb()
    yield client
    await client.flushdb()
    await close_redis(client)


@pytest_asyncio.fixture
async def cache(redis_client) -> RedisCache:
    return RedisCache(redis_client)


@pytest_asyncio.fixture
async def users(store: SqlUserStore, cache: RedisCache) -> CachedUserRepository:
    return CachedUserRepository(store, cache, metrics=MetricsRegistry())


async def _wait_for_database(db: Database, timeout: float = 30.0) -> None:
    """Wait for PostgreSQL to accept connections."""
    deadline = time.monotonic() + timeout
    while not await db.health_check():
        if time.monotonic() >= deadline:
            raise TimeoutError("PostgreSQL did not become ready")
        await asyncio.sleep(0.5)


async def _wait_for_redis(client, timeout: float = 30.0) -> None:
    """Wait for Redis to accept connections."""
    cache = RedisCache(client)
    deadline = time.monotonic() + timeout
    while not await cache.health_check():
        if time.monotonic() >= deadline:
            raise TimeoutError("Redis did not become ready")
        await asyncio.sleep(0.5)
