"""
connector_kernel.domain -- Pure types and the attribute type dispatch helper.

ZERO I/O.
"""

from connector_kernel.domain.field_types import (
    AttributeType,
    is_known_attribute_type,
    resolve_attribute_type,
)
from connector_kernel.domain.types import (
    DISPLAY_URL_COLUMN,
    EXTERNAL_ID_COLUMN,
    EXTERNAL_ID_PLACEHOLDER,
    ColumnDefinition,
    ColumnType,
    EntityDefinition,
    FieldMapping,
    LookupDef,
    Record,
    RecordValue,
    TableDescriptor,
)

__all__ = [
    "AttributeType",
    "ColumnDefinition",
    "ColumnType",
    "DISPLAY_URL_COLUMN",
    "EXTERNAL_ID_COLUMN",
    "EXTERNAL_ID_PLACEHOLDER",
    "EntityDefinition",
    "FieldMapping",
    "LookupDef",
    "Record",
    "RecordValue",
    "TableDescriptor",
    "is_known_attribute_type",
    "resolve_attribute_type",
]
