"""SQLAlchemy ORM models for user persistence."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Identity, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from usercache.models import User


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserTable(Base):
    """User table.

    The identifier is generated by the database and never reused; email
    uniqueness is enforced here, not by the cache layer.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigInteger, Identity(always=False), primary_key=True)

    # Alternate key
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False, index=True)

    name: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def to_model(self) -> User:
        """Convert the row into a domain model."""
        return User(id=self.id, email=self.email, name=self.name, created_at=self.created_at)
