"""
Catalog Validator (``connector_config.validator``).

Validates a ``MappingCatalog`` before it is handed to the schema builder.

Errors (catalog MUST NOT be used):
* Empty or duplicate entity names.
* A field mapping targeting a reserved column (ExternalId, DisplayUrl, or
  the entity's lookup column).

Warnings (catalog usable, should be reviewed):
* Several mappings in one entity share a target; the later one wins in
  records and both appear as columns.
* Unrecognized attribute types; they are treated as text.
* A display URL template without ``{external_id}``; every row gets the
  same URL.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from connector_kernel.domain.field_types import is_known_attribute_type
from connector_kernel.domain.types import (
    DISPLAY_URL_COLUMN,
    EXTERNAL_ID_COLUMN,
    EXTERNAL_ID_PLACEHOLDER,
)

from connector_config.schema import MappingCatalog


@dataclass
class CatalogValidationResult:
    """``is_valid`` is True only when ``errors`` is empty."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def validate_catalog(catalog: MappingCatalog) -> CatalogValidationResult:
    """Validate every entity in the catalog."""
    result = CatalogValidationResult()

    names = Counter(e.name for e in catalog.entities)
    for name, count in sorted(names.items()):
        if not name:
            result.add_error("Entity with empty name")
        elif count > 1:
            result.add_error(f"Duplicate entity name {name!r} ({count} definitions)")

    for entity in catalog.entities:
        reserved = {EXTERNAL_ID_COLUMN, DISPLAY_URL_COLUMN, entity.lookup.column}
        targets = Counter(fm.target_attribute for fm in entity.field_mappings)

        for target, count in sorted(targets.items()):
            if target in reserved:
                result.add_error(
                    f"{entity.name}: mapping target {target!r} collides with a reserved column"
                )
            if count > 1:
                result.add_warning(
                    f"{entity.name}: target {target!r} is mapped {count} times; "
                    "the last mapping wins"
                )

        for fm in entity.field_mappings:
            if not is_known_attribute_type(fm.attribute_type):
                result.add_warning(
                    f"{entity.name}: {fm.target_attribute!r} has unrecognized type "
                    f"{fm.attribute_type!r}; treated as text"
                )

        template = entity.display_url_template
        if template and EXTERNAL_ID_PLACEHOLDER not in template:
            result.add_warning(
                f"{entity.name}: display URL template {template!r} does not contain "
                f"{EXTERNAL_ID_PLACEHOLDER}"
            )

    return result
