"""ORM models."""

from connector_kernel.models.contact import Contact

__all__ = ["Contact"]
