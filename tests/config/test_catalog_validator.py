"""Tests for catalog validation errors and warnings."""

import dataclasses

from connector_config.schema import MappingCatalog
from connector_config.validator import validate_catalog
from connector_kernel.domain.types import EntityDefinition, FieldMapping, LookupDef

LOOKUP = LookupDef(column="Contact__c", target_entity="Contact", target_field="Customer_ID__c")


def _entity(name="B2C_Address", mappings=()):
    return EntityDefinition(
        name=name,
        label_singular=name,
        label_plural=name,
        lookup=LOOKUP,
        field_mappings=tuple(mappings),
    )


def _catalog(*entities):
    return MappingCatalog(name="c", version=1, entities=entities)


def test_clean_catalog_is_valid():
    result = validate_catalog(_catalog(_entity(mappings=[FieldMapping("city", "City__c", "text")])))
    assert result.is_valid
    assert result.warnings == []


def test_duplicate_entity_names_error():
    result = validate_catalog(_catalog(_entity(), _entity()))
    assert not result.is_valid
    assert "Duplicate entity name" in result.errors[0]


def test_empty_entity_name_error():
    assert not validate_catalog(_catalog(_entity(name=""))).is_valid


def test_reserved_column_target_error():
    for reserved in ("ExternalId", "DisplayUrl", "Contact__c"):
        result = validate_catalog(_catalog(_entity(mappings=[FieldMapping("x", reserved)])))
        assert not result.is_valid
        assert reserved in result.errors[0]


def test_duplicate_target_warning():
    result = validate_catalog(
        _catalog(_entity(mappings=[FieldMapping("city", "City__c"), FieldMapping("town", "City__c")]))
    )
    assert result.is_valid
    assert len(result.warnings) == 1
    assert "last mapping wins" in result.warnings[0]


def test_unrecognized_type_warning():
    result = validate_catalog(_catalog(_entity(mappings=[FieldMapping("d", "Date__c", "date")])))
    assert result.is_valid
    assert "treated as text" in result.warnings[0]


def test_display_url_template_without_placeholder_warning():
    entity = dataclasses.replace(_entity(), display_url_template="https://shop.example.com/{id}")
    result = validate_catalog(_catalog(entity))
    assert result.is_valid
    assert "{external_id}" in result.warnings[0]


def test_display_url_template_with_extra_braces_accepted():
    entity = dataclasses.replace(
        _entity(), display_url_template="https://shop.example.com/{external_id}?view={tab}"
    )
    assert validate_catalog(_catalog(entity)).warnings == []
