"""
connector_config -- single public entrypoint for the mapping catalog.

Responsibility:
    ``get_active_catalog()`` is the way runtime code obtains the catalog of
    external objects.  It resolves the catalog file, loads it, validates
    it, and emits a ``CONNECTOR_CATALOG_TRACE`` log entry.

Failure modes:
    - ``FileNotFoundError`` -- the catalog file does not exist.
    - ``yaml.YAMLError`` -- the catalog file is not valid YAML.
    - ``KeyError`` -- a required catalog key is missing.
    - ``ValueError`` -- the catalog fails validation.

Non-goals:
    - No caching: callers hold the returned catalog for as long as they need.
"""

from __future__ import annotations

import os
from pathlib import Path

from connector_kernel.logging_config import LogContext, configure_logging, get_logger

from connector_config.loader import load_catalog
from connector_config.schema import MappingCatalog
from connector_config.validator import CatalogValidationResult, validate_catalog

_logger = get_logger("config")

CATALOG_PATH_ENV = "CONNECTOR_CATALOG_PATH"

_DEFAULT_CATALOG = Path(__file__).parent / "catalogs" / "commerce.yaml"


def resolve_catalog_path(path: Path | str | None = None) -> Path:
    """Explicit path, else $CONNECTOR_CATALOG_PATH, else the packaged default."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CATALOG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return _DEFAULT_CATALOG


def get_active_catalog(path: Path | str | None = None) -> MappingCatalog:
    """
    Load and validate the active mapping catalog.

    Raises:
        FileNotFoundError: If the catalog file does not exist.
        ValueError: If catalog validation reports errors.
    """
    configure_logging()
    catalog_path = resolve_catalog_path(path)
    catalog = load_catalog(catalog_path)

    with LogContext.bind(catalog=catalog.name):
        validation = validate_catalog(catalog)
        if not validation.is_valid:
            raise ValueError(
                "Catalog validation failed:\n"
                + "\n".join(f"  - {e}" for e in validation.errors)
            )
        for warning in validation.warnings:
            _logger.warning("catalog_validation_warning", extra={"warning": warning})

        _logger.info(
            "CONNECTOR_CATALOG_TRACE",
            extra={
                "trace_type": "CONNECTOR_CATALOG_TRACE",
                "catalog_version": catalog.version,
                "checksum": catalog.checksum,
                "entity_count": len(catalog.entities),
                "catalog_path": str(catalog_path),
            },
        )
    return catalog


__all__ = [
    "CATALOG_PATH_ENV",
    "CatalogValidationResult",
    "MappingCatalog",
    "get_active_catalog",
    "load_catalog",
    "resolve_catalog_path",
    "validate_catalog",
]
