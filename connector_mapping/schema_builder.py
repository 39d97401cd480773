"""
Schema builder: pure transformation from field mappings to an external
object table descriptor.  ZERO I/O.

Column order is part of the contract: mapped columns in catalog order, then
ExternalId, then DisplayUrl, then the indirect lookup to the owning entity.
"""

from __future__ import annotations

from collections.abc import Sequence

from connector_kernel.domain.field_types import AttributeType, resolve_attribute_type
from connector_kernel.domain.types import (
    DISPLAY_URL_COLUMN,
    EXTERNAL_ID_COLUMN,
    INTEGER_PRECISION,
    NUMBER_PRECISION,
    NUMBER_SCALE,
    TEXT_LENGTH,
    ColumnDefinition,
    FieldMapping,
    TableDescriptor,
)
from connector_kernel.logging_config import get_logger

logger = get_logger("mapping.schema_builder")


def build_column(mapping: FieldMapping) -> ColumnDefinition:
    """Column for a single mapping; unrecognized types become text(255)."""
    name = mapping.target_attribute
    label = mapping.label
    description = mapping.description
    attribute_type = resolve_attribute_type(mapping.attribute_type)

    if attribute_type == AttributeType.BOOLEAN:
        return ColumnDefinition.boolean(name, label, description)
    if attribute_type == AttributeType.INTEGER:
        return ColumnDefinition.integer(name, label, description, precision=INTEGER_PRECISION)
    if attribute_type == AttributeType.NUMBER:
        return ColumnDefinition.number(
            name, label, description, precision=NUMBER_PRECISION, scale=NUMBER_SCALE
        )
    return ColumnDefinition.text(name, label, description, length=TEXT_LENGTH)


def build_columns(field_mappings: Sequence[FieldMapping]) -> tuple[ColumnDefinition, ...]:
    """One column per mapping, in input order."""
    return tuple(build_column(fm) for fm in field_mappings)


def build_table_descriptor(
    name: str,
    label_singular: str,
    label_plural: str,
    description: str,
    lookup_column: str,
    lookup_label: str,
    lookup_description: str,
    lookup_target_entity: str,
    lookup_target_field: str,
    field_mappings: Sequence[FieldMapping],
) -> TableDescriptor:
    """
    Build the table descriptor for one external object. Pure function.

    The indirect lookup column relates each row to ``lookup_target_entity``
    by matching its value against ``lookup_target_field``.  The primary key
    is always ExternalId.
    """
    columns = list(build_columns(field_mappings))

    lookup = ColumnDefinition.indirect_lookup(
        lookup_column,
        reference_to=lookup_target_entity,
        reference_target_field=lookup_target_field,
        label=lookup_label,
        description=lookup_description,
    )

    columns.append(
        ColumnDefinition.text(
            EXTERNAL_ID_COLUMN,
            label="External ID",
            description="Unique identifier of the record in the source system",
            length=TEXT_LENGTH,
        )
    )
    columns.append(
        ColumnDefinition.url(
            DISPLAY_URL_COLUMN,
            label="Display URL",
            description="Link to the record in the source system",
        )
    )
    columns.append(lookup)

    descriptor = TableDescriptor(
        name=name,
        label_singular=label_singular,
        label_plural=label_plural,
        description=description,
        primary_key_column=EXTERNAL_ID_COLUMN,
        columns=tuple(columns),
    )
    logger.debug(
        "table_descriptor_built",
        extra={"table": name, "column_count": len(descriptor.columns)},
    )
    return descriptor
