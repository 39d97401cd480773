"""
Module: connector_kernel.models.contact
Responsibility: ORM persistence for contacts that own external object rows
    (e.g., a shopper's addresses in the remote commerce system).
Architecture position: Kernel > Models.  May import from db/base.py only.

A contact is reachable from the remote system by any of three identifiers:
its own record id, the remote customer id, or its account id.  None of them
is unique across the other two, so resolution matches all three.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from connector_kernel.db.base import TimestampedBase


class Contact(TimestampedBase):
    """Person owning external object rows, matched by customer/record/account id."""

    __tablename__ = "contacts"

    __table_args__ = (
        Index("idx_contact_customer_id", "customer_id"),
        Index("idx_contact_account_id", "account_id"),
    )

    # Customer identifier in the remote commerce system
    customer_id: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Owning account
    account_id: Mapped[str | None] = mapped_column(String(100), nullable=True)

    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Contact {self.id}: {self.last_name} (customer {self.customer_id})>"
