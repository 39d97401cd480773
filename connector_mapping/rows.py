"""
Row assembly: one complete external object row per source document.

A row is the mapped record plus the three infrastructure columns of the
entity's table descriptor: ExternalId (required), DisplayUrl (when the
entity has a URL template) and the indirect lookup value (when the entity
names the document attribute holding it).
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote

from connector_kernel.domain.types import (
    DISPLAY_URL_COLUMN,
    EXTERNAL_ID_COLUMN,
    EXTERNAL_ID_PLACEHOLDER,
    EntityDefinition,
    Record,
    TableDescriptor,
)
from connector_kernel.exceptions import MissingExternalIdError
from connector_kernel.logging_config import LogContext, get_logger

from connector_mapping.diagnostics import (
    DiagnosticsSink,
    MissingAttributeDiagnostic,
    resolve_sink,
)
from connector_mapping.document import Present, SourceDocument
from connector_mapping.engine import emit_diagnostic, map_fields
from connector_mapping.schema_builder import build_table_descriptor

logger = get_logger("mapping.rows")


def describe_entity(entity: EntityDefinition) -> TableDescriptor:
    """Table descriptor for a configured entity."""
    return build_table_descriptor(
        name=entity.name,
        label_singular=entity.label_singular,
        label_plural=entity.label_plural,
        description=entity.description,
        lookup_column=entity.lookup.column,
        lookup_label=entity.lookup.label,
        lookup_description=entity.lookup.description,
        lookup_target_entity=entity.lookup.target_entity,
        lookup_target_field=entity.lookup.target_field,
        field_mappings=entity.field_mappings,
    )


def build_display_url(template: str, external_id: str) -> str:
    """
    Fill ``{external_id}`` in the entity's URL template (URL-quoted).

    Only that placeholder is substituted; any other braces in the template
    are kept literally.
    """
    return template.replace(EXTERNAL_ID_PLACEHOLDER, quote(external_id, safe=""))


def build_row(
    document: SourceDocument,
    entity: EntityDefinition,
    context: str | None = None,
    diagnostics: DiagnosticsSink | None = None,
) -> Record:
    """
    Build one external object row.

    Raises:
        MissingExternalIdError: The document has no external id.
        AttributeTypeMismatchError: A present value has the wrong type.
    """
    sink = resolve_sink(diagnostics)

    found_id = document.lookup(entity.external_id_attribute)
    if not isinstance(found_id, Present):
        raise MissingExternalIdError(entity.name, entity.external_id_attribute)
    external_id = found_id.value.as_string()

    with LogContext.bind(entity=entity.name, document_id=external_id):
        row = map_fields(
            document,
            entity.field_mappings,
            context or f"{entity.name}:{external_id}",
            diagnostics=sink,
        )
        row[EXTERNAL_ID_COLUMN] = external_id

        if entity.display_url_template:
            row[DISPLAY_URL_COLUMN] = build_display_url(entity.display_url_template, external_id)

        lookup = entity.lookup
        if lookup.source_attribute:
            found_owner = document.lookup(lookup.source_attribute)
            if isinstance(found_owner, Present):
                row[lookup.column] = found_owner.value.as_string()
            else:
                emit_diagnostic(
                    sink,
                    MissingAttributeDiagnostic(
                        source_attribute=lookup.source_attribute,
                        target_attribute=lookup.column,
                        document_snapshot=document.to_json(),
                        context=context or f"{entity.name}:{external_id}",
                    ),
                )

    return row


def build_rows(
    documents: Iterable[SourceDocument],
    entity: EntityDefinition,
    context: str | None = None,
    diagnostics: DiagnosticsSink | None = None,
) -> list[Record]:
    """Build one row per document, in order. The first failure propagates."""
    rows = [build_row(doc, entity, context, diagnostics) for doc in documents]
    logger.info("rows_built", extra={"entity": entity.name, "row_count": len(rows)})
    return rows
