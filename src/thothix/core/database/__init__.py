"""Database layer - session management, base models, and mixins."""

from thothix.core.database.base import Base, IDMixin, TimestampMixin, new_id
from thothix.core.database.session import (
    create_all,
    get_db,
    get_engine,
    get_session_factory,
)


__all__ = [
    "Base",
    "IDMixin",
    "TimestampMixin",
    "create_all",
    "get_db",
    "get_engine",
    "get_session_factory",
    "new_id",
]
