"""
connector_kernel.domain.types -- Pure frozen dataclasses for catalogs and schemas.

ZERO I/O.  FieldMapping is the shared input of the schema builder and the
record mapper; ColumnDefinition and TableDescriptor are the schema builder's
output, handed to whatever registers the external object.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from connector_kernel.domain.field_types import AttributeType

# Reserved infrastructure columns present on every external object table
EXTERNAL_ID_COLUMN = "ExternalId"
DISPLAY_URL_COLUMN = "DisplayUrl"

# Placeholder substituted in display URL templates
EXTERNAL_ID_PLACEHOLDER = "{external_id}"

# Fixed column sizes
TEXT_LENGTH = 255
INTEGER_PRECISION = 10
NUMBER_PRECISION = 10
NUMBER_SCALE = 2

# Record value as produced by the mapper: bool | int | Decimal | str
RecordValue = Union[bool, int, Decimal, str]
Record = dict[str, RecordValue]


# =============================================================================
# Field mapping
# =============================================================================


@dataclass(frozen=True)
class FieldMapping:
    """Single catalog entry: source attribute -> target column with type and labels."""

    source_attribute: str  # Key or dotted path in the source document
    target_attribute: str  # Column / record key (e.g., "City__c")
    attribute_type: AttributeType | str = AttributeType.TEXT  # Raw tags resolved at use
    label: str = ""
    description: str = ""


# =============================================================================
# Columns
# =============================================================================


class ColumnType(str, Enum):
    """Column kinds an external object table may carry."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    TEXT = "text"
    URL = "url"
    INDIRECT_LOOKUP = "indirect_lookup"


@dataclass(frozen=True)
class ColumnDefinition:
    """
    One column of an external object table.

    Only the attributes that apply to ``column_type`` are set; build through
    the classmethod constructors rather than directly.
    """

    name: str
    column_type: ColumnType
    label: str = ""
    description: str = ""
    precision: int | None = None
    scale: int | None = None
    length: int | None = None
    reference_to: str | None = None  # INDIRECT_LOOKUP target entity
    reference_target_field: str | None = None  # Field matched by value on the target

    @classmethod
    def boolean(cls, name: str, label: str = "", description: str = "") -> ColumnDefinition:
        return cls(name=name, column_type=ColumnType.BOOLEAN, label=label, description=description)

    @classmethod
    def integer(
        cls, name: str, label: str = "", description: str = "", precision: int = INTEGER_PRECISION
    ) -> ColumnDefinition:
        return cls(
            name=name, column_type=ColumnType.INTEGER, label=label,
            description=description, precision=precision, scale=0,
        )

    @classmethod
    def number(
        cls,
        name: str,
        label: str = "",
        description: str = "",
        precision: int = NUMBER_PRECISION,
        scale: int = NUMBER_SCALE,
    ) -> ColumnDefinition:
        return cls(
            name=name, column_type=ColumnType.NUMBER, label=label,
            description=description, precision=precision, scale=scale,
        )

    @classmethod
    def text(
        cls, name: str, label: str = "", description: str = "", length: int = TEXT_LENGTH
    ) -> ColumnDefinition:
        return cls(
            name=name, column_type=ColumnType.TEXT, label=label,
            description=description, length=length,
        )

    @classmethod
    def url(cls, name: str, label: str = "", description: str = "") -> ColumnDefinition:
        return cls(name=name, column_type=ColumnType.URL, label=label, description=description)

    @classmethod
    def indirect_lookup(
        cls,
        name: str,
        reference_to: str,
        reference_target_field: str,
        label: str = "",
        description: str = "",
    ) -> ColumnDefinition:
        return cls(
            name=name,
            column_type=ColumnType.INDIRECT_LOOKUP,
            label=label,
            description=description,
            reference_to=reference_to,
            reference_target_field=reference_target_field,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain dict with only the attributes set for this column kind."""
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.column_type.value,
            "label": self.label,
            "description": self.description,
        }
        for key in ("precision", "scale", "length", "reference_to", "reference_target_field"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


# =============================================================================
# Table descriptor
# =============================================================================


@dataclass(frozen=True)
class TableDescriptor:
    """Schema of one external object: labels, primary key, ordered columns."""

    name: str
    label_singular: str
    label_plural: str
    description: str
    primary_key_column: str
    columns: tuple[ColumnDefinition, ...] = ()

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    def get_column(self, name: str) -> ColumnDefinition | None:
        """Last column named ``name``, or None."""
        found = None
        for column in self.columns:
            if column.name == name:
                found = column
        return found

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label_singular": self.label_singular,
            "label_plural": self.label_plural,
            "description": self.description,
            "primary_key_column": self.primary_key_column,
            "columns": [c.to_dict() for c in self.columns],
        }


# =============================================================================
# Entity definition (compiled shape used by schema builder and row assembly)
# =============================================================================


@dataclass(frozen=True)
class LookupDef:
    """Indirect lookup from each row to the entity that owns it."""

    column: str  # Column name on the external object (e.g., "Contact__c")
    target_entity: str  # Owning entity (e.g., "Contact")
    target_field: str  # Field on the owner matched by value
    label: str = ""
    description: str = ""
    source_attribute: str | None = None  # Document attribute holding the lookup value


@dataclass(frozen=True)
class EntityDefinition:
    """One external object: labels, owner lookup, field mappings, row identity."""

    name: str
    label_singular: str
    label_plural: str
    lookup: LookupDef
    description: str = ""
    field_mappings: tuple[FieldMapping, ...] = ()
    external_id_attribute: str = "id"  # Document attribute holding the row's id
    display_url_template: str | None = None  # Formatted with external_id
