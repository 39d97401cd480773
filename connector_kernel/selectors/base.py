"""
Module: connector_kernel.selectors.base
Responsibility: Abstract base class for read-only query selectors.
Architecture position: Kernel > Selectors.  May import from db/base.py and
    models/.  MUST NOT import from domain/ services or outer layers.

Invariants enforced:
    - Read-only access: selectors never add, delete, flush, or commit.
    - DTO return convention: selectors return frozen dataclasses, not ORM
      instances.
    - Session ownership: the caller owns the session and its transaction.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from connector_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """Abstract base class for all selectors."""

    def __init__(self, session: Session):
        self.session = session
