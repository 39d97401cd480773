"""
Attribute type tags and the shared classification helper.

Both the schema builder and the record mapper dispatch on the same closed
set of attribute types.  ``resolve_attribute_type`` is the single place a
raw catalog tag becomes an ``AttributeType``.
"""

from __future__ import annotations

from enum import Enum


class AttributeType(str, Enum):
    """Semantic type of a mapped attribute."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    TEXT = "text"


_TAGS: dict[str, AttributeType] = {member.value: member for member in AttributeType}


def is_known_attribute_type(tag: AttributeType | str | None) -> bool:
    """True if ``tag`` names an AttributeType without falling back."""
    if isinstance(tag, AttributeType):
        return True
    if not isinstance(tag, str):
        return False
    return tag.strip().lower() in _TAGS


def resolve_attribute_type(tag: AttributeType | str | None) -> AttributeType:
    """
    Classify a catalog type tag.

    Known tags match case-insensitively.  Missing, empty and unrecognized
    tags resolve to TEXT.
    """
    if isinstance(tag, AttributeType):
        return tag
    if isinstance(tag, str):
        known = _TAGS.get(tag.strip().lower())
        if known is not None:
            return known
    # Default arm: anything else degrades to text.
    return AttributeType.TEXT
