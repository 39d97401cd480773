"""
Pytest fixtures for the connector test suite.

Provides:
- Structured logging configuration and a log capture fixture
- An in-memory SQLite session with the connector tables created
- Common catalog builders

Environment Variables:
- CONNECTOR_DATABASE_URL: database for contact resolution tests.
  If not set, uses in-memory SQLite.
"""

import json
import logging
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from connector_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from connector_kernel.domain.field_types import AttributeType
from connector_kernel.domain.types import EntityDefinition, FieldMapping, LookupDef
from connector_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture connector logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            map_fields(...)
            logs = captured_logs()
            assert any(r["message"] == "source_attribute_missing" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("connector")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Fresh database with connector tables; closed and dropped afterwards."""
    init_engine_from_url()
    create_tables()
    sess = get_session()
    try:
        yield sess
    finally:
        sess.close()
        drop_tables()
        reset_engine()


# =============================================================================
# Catalog fixtures
# =============================================================================


@pytest.fixture
def address_mappings() -> tuple[FieldMapping, ...]:
    return (
        FieldMapping("city", "City__c", AttributeType.TEXT, "City", "City name"),
        FieldMapping("zip", "Zip__c", AttributeType.INTEGER, "Zip", "Postal code"),
        FieldMapping("preferred", "Preferred__c", AttributeType.BOOLEAN, "Preferred", ""),
        FieldMapping("surcharge", "Surcharge__c", AttributeType.NUMBER, "Surcharge", ""),
    )


@pytest.fixture
def address_entity(address_mappings) -> EntityDefinition:
    return EntityDefinition(
        name="B2C_Address",
        label_singular="Address",
        label_plural="Addresses",
        description="Customer addresses",
        lookup=LookupDef(
            column="Contact__c",
            target_entity="Contact",
            target_field="B2C_Customer_ID__c",
            label="Contact",
            description="Owning contact",
            source_attribute="customer_id",
        ),
        field_mappings=address_mappings,
        external_id_attribute="address_id",
        display_url_template="https://shop.example.com/addresses/{external_id}",
    )
