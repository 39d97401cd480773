"""Schema builder and record mapper: pure transformations driven by field mappings."""

from connector_mapping.diagnostics import (
    CollectingDiagnosticsSink,
    DiagnosticsSink,
    LoggingDiagnosticsSink,
    MissingAttributeDiagnostic,
)
from connector_mapping.document import (
    ABSENT,
    FieldValue,
    LookupResult,
    Present,
    SourceDocument,
)
from connector_mapping.engine import coerce_value, map_fields
from connector_mapping.rows import build_row, build_rows, describe_entity
from connector_mapping.schema_builder import (
    build_column,
    build_columns,
    build_table_descriptor,
)

__all__ = [
    "ABSENT",
    "CollectingDiagnosticsSink",
    "DiagnosticsSink",
    "FieldValue",
    "LoggingDiagnosticsSink",
    "LookupResult",
    "MissingAttributeDiagnostic",
    "Present",
    "SourceDocument",
    "build_column",
    "build_columns",
    "build_row",
    "build_rows",
    "build_table_descriptor",
    "coerce_value",
    "describe_entity",
    "map_fields",
]
