"""
Hypothesis property tests for the schema builder and record mapper.

Properties checked:
- Same mappings always produce the same table descriptor.
- Mapped columns come first in input order, then ExternalId, DisplayUrl,
  and the indirect lookup.
- Every unrecognized type tag yields a text(255) column.
- Each absent attribute produces exactly one diagnostic and no record key.
"""

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from connector_kernel.domain.field_types import is_known_attribute_type
from connector_kernel.domain.types import ColumnType, FieldMapping
from connector_mapping.diagnostics import CollectingDiagnosticsSink
from connector_mapping.document import SourceDocument
from connector_mapping.engine import map_fields
from connector_mapping.schema_builder import build_column, build_table_descriptor

names = st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=12)
type_tags = st.one_of(
    st.sampled_from(["boolean", "integer", "number", "text"]),
    st.text(max_size=10),
)
mappings = st.lists(
    st.builds(
        FieldMapping,
        source_attribute=names,
        target_attribute=names.map(lambda n: f"{n}__c"),
        attribute_type=type_tags,
        label=st.text(max_size=20),
        description=st.text(max_size=20),
    ),
    max_size=15,
)


def _descriptor(field_mappings):
    return build_table_descriptor(
        "B2C_Address", "Address", "Addresses", "", "Contact__c", "Contact", "",
        "Contact", "B2C_Customer_ID__c", field_mappings,
    )


@settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(field_mappings=mappings)
def test_descriptor_deterministic(field_mappings):
    assert _descriptor(field_mappings) == _descriptor(field_mappings)


@settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(field_mappings=mappings)
def test_column_order(field_mappings):
    table = _descriptor(field_mappings)
    assert table.column_names == tuple(fm.target_attribute for fm in field_mappings) + (
        "ExternalId", "DisplayUrl", "Contact__c",
    )
    assert [c.column_type for c in table.columns[-3:]] == [
        ColumnType.TEXT, ColumnType.URL, ColumnType.INDIRECT_LOOKUP,
    ]
    assert table.primary_key_column == "ExternalId"


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(tag=st.text(max_size=10))
def test_unknown_tags_become_text(tag):
    col = build_column(FieldMapping("a", "A__c", tag))
    if not is_known_attribute_type(tag):
        assert col.column_type == ColumnType.TEXT
        assert col.length == 255


@settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(present=st.dictionaries(names, st.text(max_size=5), max_size=8), absent=st.lists(names, max_size=5))
def test_each_absent_attribute_one_diagnostic(present, absent):
    missing = [a for a in absent if a not in present]
    field_mappings = [FieldMapping(k, f"{k}__c") for k in present] + [
        FieldMapping(k, f"{k}__m") for k in missing
    ]
    sink = CollectingDiagnosticsSink()

    record = map_fields(SourceDocument(dict(present)), field_mappings, "prop", sink)

    assert record == {f"{k}__c": v for k, v in present.items()}
    assert sink.missing_attributes == tuple(missing)
