"""Read-only selectors returning DTOs."""

from connector_kernel.selectors.base import BaseSelector
from connector_kernel.selectors.contact_selector import ContactInfo, ContactSelector

__all__ = ["BaseSelector", "ContactInfo", "ContactSelector"]
