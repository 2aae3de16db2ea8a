"""Repository pattern for user persistence.

SqlUserStore implements the UserStore contract on top of an async
SQLAlchemy session factory. Each operation runs in its own transaction and
translates driver errors into the usercache error taxonomy:
- unique constraint violations become ConflictError
- any other SQLAlchemy or connection error becomes StoreUnavailableError
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from typing import AsyncIterator

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from usercache.errors import ConflictError, NotFoundError, StoreUnavailableError
from usercache.models import User
from usercache.persistence.base import UserStore
from usercache.persistence.tables import UserTable


class SqlUserStore(UserStore):
    """Repository for user operations."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Transactional scope that maps driver errors to store errors."""
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            raise ConflictError(f"Unique constraint violated: {e.orig}") from e
        except (SQLAlchemyError, OSError) as e:
            await session.rollback()
            raise StoreUnavailableError(f"User store unavailable: {e}") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def _get_row(self, session: AsyncSession, user_id: int) -> UserTable:
        row = await session.get(UserTable, user_id)
        if row is None:
            raise NotFoundError("User", user_id)
        return row

    # -------------------------------------------------------------------------
    # Read operations
    # -------------------------------------------------------------------------

    async def get_by_id(self, user_id: int) -> User:
        async with self._session() as session:
            row = await self._get_row(session, user_id)
            return row.to_model()

    async def get_by_email(self, email: str) -> User:
        stmt = select(UserTable).where(UserTable.email == email)
        async with self._session() as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()
            if row is None:
                raise NotFoundError("User", email)
            return row.to_model()

    async def list_all(self) -> list[User]:
        stmt = select(UserTable).order_by(UserTable.id)
        async with self._session() as session:
            result = await session.execute(stmt)
            return [row.to_model() for row in result.scalars()]

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserTable)
        async with self._session() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())

    async def list_recent(self, days: int) -> list[User]:
        since = datetime.now(UTC) - timedelta(days=days)
        stmt = (
            select(UserTable)
            .where(UserTable.created_at >= since)
            .order_by(UserTable.created_at.desc(), UserTable.id.desc())
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return [row.to_model() for row in result.scalars()]

    # -------------------------------------------------------------------------
    # Write operations
    # -------------------------------------------------------------------------

    async def create(self, email: str, name: str) -> User:
        """Create a new user.

        The row is flushed and refreshed so the returned model carries the
        database-assigned id and created_at.
        """
        async with self._session() as session:
            row = UserTable(email=email, name=name)
            session.add(row)
            await session.flush()
            await session.refresh(row)
            return row.to_model()

    async def update(self, user_id: int, email: str, name: str) -> None:
        async with self._session() as session:
            row = await self._get_row(session, user_id)
            row.email = email
            row.name = name
            await session.flush()

    async def delete(self, user_id: int) -> None:
        async with self._session() as session:
            row = await self._get_row(session, user_id)
            await session.delete(row)
            await session.flush()
