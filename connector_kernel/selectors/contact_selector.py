"""
Contact selector: resolve the contact that owns an external object row.

The remote system hands us one candidate identifier whose shape is not
known in advance.  It is matched against the customer id, the contact's own
record id, and the account id as three independent equality conditions
joined with OR, and at most one contact is returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import or_, select

from connector_kernel.exceptions import ContactNotFoundError
from connector_kernel.logging_config import get_logger
from connector_kernel.models.contact import Contact
from connector_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.contact")


@dataclass(frozen=True)
class ContactInfo:
    """Immutable DTO for contact data."""

    id: UUID
    customer_id: str | None
    account_id: str | None
    first_name: str | None
    last_name: str
    email: str | None

    @property
    def display_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


class ContactSelector(BaseSelector[Contact]):
    """Read-only contact lookups by candidate identifier."""

    def _to_dto(self, contact: Contact) -> ContactInfo:
        return ContactInfo(
            id=contact.id,
            customer_id=contact.customer_id,
            account_id=contact.account_id,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
        )

    def find_by_identifier(self, identifier: str) -> ContactInfo | None:
        """
        Find the contact matching ``identifier`` on any identifier field.

        Returns:
            ContactInfo, or None if nothing matches.
        """
        stmt = (
            select(Contact)
            .where(
                or_(
                    Contact.customer_id == identifier,
                    Contact.id == identifier,
                    Contact.account_id == identifier,
                )
            )
            .limit(1)
        )
        contact = self.session.execute(stmt).scalars().first()
        if contact is None:
            return None
        return self._to_dto(contact)

    def resolve(self, identifier: str) -> ContactInfo:
        """
        Resolve the contact matching ``identifier``.

        Raises:
            ContactNotFoundError: If no contact matches.
        """
        info = self.find_by_identifier(identifier)
        if info is None:
            logger.info("contact_not_found", extra={"identifier": identifier})
            raise ContactNotFoundError(identifier)
        return info
