"""Domain type construction, immutability, and serialisation."""

import dataclasses

import pytest

from connector_kernel.domain.field_types import AttributeType
from connector_kernel.domain.types import (
    ColumnDefinition,
    ColumnType,
    FieldMapping,
    TableDescriptor,
)


class TestFieldMapping:
    def test_defaults(self):
        fm = FieldMapping(source_attribute="city", target_attribute="City__c")
        assert fm.attribute_type == AttributeType.TEXT
        assert fm.label == ""
        assert fm.description == ""

    def test_immutable(self):
        fm = FieldMapping("city", "City__c")
        with pytest.raises(dataclasses.FrozenInstanceError):
            fm.target_attribute = "Town__c"


class TestColumnDefinition:
    def test_integer_constructor(self):
        col = ColumnDefinition.integer("Zip__c", "Zip", "Postal code")
        assert col.column_type == ColumnType.INTEGER
        assert col.precision == 10
        assert col.scale == 0
        assert col.length is None

    def test_number_constructor(self):
        col = ColumnDefinition.number("Amount__c")
        assert (col.precision, col.scale) == (10, 2)

    def test_text_constructor(self):
        assert ColumnDefinition.text("City__c").length == 255

    def test_indirect_lookup_constructor(self):
        col = ColumnDefinition.indirect_lookup("Contact__c", "Contact", "Customer_ID__c")
        assert col.column_type == ColumnType.INDIRECT_LOOKUP
        assert col.reference_to == "Contact"
        assert col.reference_target_field == "Customer_ID__c"

    def test_to_dict_only_set_attributes(self):
        assert ColumnDefinition.url("DisplayUrl", "Display URL").to_dict() == {
            "name": "DisplayUrl",
            "type": "url",
            "label": "Display URL",
            "description": "",
        }
        assert ColumnDefinition.text("City__c").to_dict()["length"] == 255


class TestTableDescriptor:
    def test_column_helpers(self):
        table = TableDescriptor(
            name="T",
            label_singular="T",
            label_plural="Ts",
            description="",
            primary_key_column="ExternalId",
            columns=(ColumnDefinition.text("A"), ColumnDefinition.boolean("B")),
        )
        assert table.column_names == ("A", "B")
        assert table.get_column("B").column_type == ColumnType.BOOLEAN
        assert table.get_column("C") is None
        assert [c["name"] for c in table.to_dict()["columns"]] == ["A", "B"]
