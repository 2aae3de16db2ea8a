"""Persistence layer for usercache.

This module provides:
- Async PostgreSQL engine and session factory
- SQLAlchemy ORM model for the users table
- The UserStore contract and its SQL implementation
"""

from usercache.persistence.base import UserStore
from usercache.persistence.db import Database
from usercache.persistence.repositories import SqlUserStore
from usercache.persistence.tables import Base, UserTable

__all__ = [
    # DB
    "Database",
    # Tables
    "Base",
    "UserTable",
    # Repositories
    "UserStore",
    "SqlUserStore",
]
