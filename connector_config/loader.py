"""
Catalog Loader (``connector_config.loader``).

Responsibility
--------------
Loads a YAML mapping catalog and parses it into typed dataclasses.  The
runtime entrypoint is ``connector_config.get_active_catalog()``; this module
is the parsing layer underneath it.

Catalog shape
-------------
::

    name: commerce
    version: 1
    entities:
      - name: B2C_Address
        label_singular: Address
        label_plural: Addresses
        description: Customer addresses
        external_id_attribute: address_id
        display_url_template: https://shop.example.com/addresses/{external_id}
        lookup:
          column: Contact__c
          label: Contact
          description: Owning contact
          target_entity: Contact
          target_field: Customer_ID__c
          source_attribute: customer_id
        field_mappings:
          - source: city
            target: City__c
            type: text
            label: City
            description: City name

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.

Type tags are kept exactly as written; unrecognized tags are resolved (to
text) by the builder and mapper, and reported by the validator.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from connector_kernel.domain.types import EntityDefinition, FieldMapping, LookupDef

from connector_config.schema import MappingCatalog


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_field_mapping(data: dict[str, Any]) -> FieldMapping:
    """Parse a FieldMapping. ``source`` and ``target`` are required."""
    return FieldMapping(
        source_attribute=str(data["source"]),
        target_attribute=str(data["target"]),
        attribute_type=str(data.get("type") or "text"),
        label=str(data.get("label") or ""),
        description=str(data.get("description") or ""),
    )


def parse_lookup(data: dict[str, Any]) -> LookupDef:
    """Parse a LookupDef. ``column``, ``target_entity`` and ``target_field`` are required."""
    return LookupDef(
        column=data["column"],
        target_entity=data["target_entity"],
        target_field=data["target_field"],
        label=data.get("label", ""),
        description=data.get("description", ""),
        source_attribute=data.get("source_attribute"),
    )


def parse_entity(data: dict[str, Any]) -> EntityDefinition:
    """
    Parse an EntityDefinition.

    Raises:
        KeyError: if ``name``, ``lookup``, or a nested required key is missing.
    """
    name = data["name"]
    return EntityDefinition(
        name=name,
        label_singular=data.get("label_singular", name),
        label_plural=data.get("label_plural", name),
        description=data.get("description", ""),
        lookup=parse_lookup(data["lookup"]),
        field_mappings=tuple(parse_field_mapping(fm) for fm in data.get("field_mappings") or ()),
        external_id_attribute=data.get("external_id_attribute", "id"),
        display_url_template=data.get("display_url_template"),
    )


def parse_catalog(data: dict[str, Any]) -> MappingCatalog:
    """Parse a MappingCatalog from an already-loaded dict."""
    return MappingCatalog(
        name=data["name"],
        version=int(data.get("version", 1)),
        entities=tuple(parse_entity(e) for e in data.get("entities") or ()),
        checksum=compute_checksum(data),
    )


def load_catalog(path: Path | str) -> MappingCatalog:
    """Load and parse a catalog file."""
    return parse_catalog(load_yaml_file(Path(path)))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    SHA-256 of the canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
