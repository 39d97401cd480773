"""
Record mapper: extract and coerce values from a source document into a
typed record, driven by the same field mappings as the schema builder.

Tolerance policy:
    - Absent attribute  -> one diagnostic to the sink, field omitted, continue.
    - Wrong-typed value -> AttributeTypeMismatchError propagates; the record
      is not built.
Mappings sharing a target attribute: the later mapping wins.
"""

from __future__ import annotations

from collections.abc import Sequence

from connector_kernel.domain.field_types import AttributeType, resolve_attribute_type
from connector_kernel.domain.types import FieldMapping, Record, RecordValue
from connector_kernel.logging_config import get_logger

from connector_mapping.diagnostics import (
    DiagnosticsSink,
    MissingAttributeDiagnostic,
    resolve_sink,
)
from connector_mapping.document import FieldValue, Present, SourceDocument

logger = get_logger("mapping.engine")


def coerce_value(value: FieldValue, attribute_type: AttributeType | str) -> RecordValue:
    """Read ``value`` as the record type for ``attribute_type``."""
    resolved = resolve_attribute_type(attribute_type)
    if resolved == AttributeType.BOOLEAN:
        return value.as_boolean()
    if resolved == AttributeType.INTEGER:
        return value.as_integer()
    if resolved == AttributeType.NUMBER:
        return value.as_decimal()
    return value.as_string()


def emit_diagnostic(sink: DiagnosticsSink, diagnostic: MissingAttributeDiagnostic) -> None:
    # Fire-and-forget: a failing sink never changes the mapping result.
    try:
        sink(diagnostic)
    except Exception:
        logger.error(
            "diagnostics_sink_failed",
            extra={"source_attribute": diagnostic.source_attribute, "context": diagnostic.context},
            exc_info=True,
        )


def map_fields(
    source_document: SourceDocument,
    field_mappings: Sequence[FieldMapping],
    context: str,
    diagnostics: DiagnosticsSink | None = None,
) -> Record:
    """
    Map a source document into a record keyed by target attribute.

    Args:
        source_document: Structured lookup over the payload.
        field_mappings: Catalog entries, applied in order.
        context: Identifier carried on diagnostics (entity, request id, ...).
        diagnostics: Sink for absent attributes.  Defaults to logging.

    Raises:
        AttributeTypeMismatchError: A present value has the wrong type.
    """
    sink = resolve_sink(diagnostics)
    record: Record = {}

    for fm in field_mappings:
        found = source_document.lookup(fm.source_attribute)
        if isinstance(found, Present):
            record[fm.target_attribute] = coerce_value(found.value, fm.attribute_type)
            continue

        emit_diagnostic(
            sink,
            MissingAttributeDiagnostic(
                source_attribute=fm.source_attribute,
                target_attribute=fm.target_attribute,
                document_snapshot=source_document.to_json(),
                context=context,
            ),
        )

    return record
