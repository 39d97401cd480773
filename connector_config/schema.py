"""
Mapping catalog schema.

The catalog is the human-authored, reviewable source artifact: one YAML file
listing every external object and its field mappings.  The loader parses it
into these frozen dataclasses; entity and field mapping shapes come from
``connector_kernel.domain.types`` so the mapper and builder consume them
directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from connector_kernel.domain.types import EntityDefinition


@dataclass(frozen=True)
class MappingCatalog:
    """A versioned set of external object definitions."""

    name: str
    version: int
    entities: tuple[EntityDefinition, ...] = ()
    checksum: str = field(default="", compare=False)

    @property
    def entity_names(self) -> tuple[str, ...]:
        return tuple(e.name for e in self.entities)

    def get_entity(self, name: str) -> EntityDefinition:
        """
        Entity definition by name.

        Raises:
            KeyError: if no entity has that name.
        """
        for entity in self.entities:
            if entity.name == name:
                return entity
        raise KeyError(f"Unknown entity {name!r} in catalog {self.name!r}")
