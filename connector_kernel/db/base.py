"""
Module: connector_kernel.db.base
Responsibility: Declarative base classes for the connector's SQLAlchemy ORM
    models.  Provides the UUID primary key convention and a timestamp mixin.
Architecture position: Kernel > DB.  Lowest-level import target for models.
    MUST NOT import from models/, selectors/, domain/, or outer layers.

Invariants enforced:
    - UUID primary keys stored as String(36) so the same schema runs on
      SQLite (tests) and PostgreSQL.
    - datetime maps to DateTime(timezone=True).
"""

from datetime import datetime
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UUIDString(TypeDecorator):
    """
    UUID type stored as String(36) for cross-database portability.

    Binding accepts UUID objects or plain strings, so a candidate identifier
    of any shape can be compared against a UUID column without raising.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return None

    def process_result_value(self, value, dialect):
        if value is not None:
            return PyUUID(value)
        return None


class Base(DeclarativeBase):
    """
    Declarative base for all connector models.

    Guarantees:
        - id is always a uuid4-generated UUID stored as String(36).
        - datetime maps to DateTime(timezone=True).
    """

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
        PyUUID: UUIDString(),
    }

    id: Mapped[PyUUID] = mapped_column(
        UUIDString(),
        primary_key=True,
        default=uuid4,
    )


class TimestampedBase(Base):
    """Abstract base recording when a row was created and last modified."""

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
