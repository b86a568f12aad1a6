"""
Relational storage: ORM models, CRUD helpers and connection management.
"""

from second_brain.boundary.db.base import Base
from second_brain.boundary.db.connection import (
    create_tables,
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)

__all__ = [
    "Base",
    "create_tables",
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
