"""Database layer - engine and base classes."""

from connector_kernel.db.base import Base, TimestampedBase, UUIDString
from connector_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
    session_scope,
)

__all__ = [
    "Base",
    "TimestampedBase",
    "UUIDString",
    "create_tables",
    "drop_tables",
    "get_engine",
    "get_session",
    "init_engine_from_url",
    "reset_engine",
    "session_scope",
]
