"""Tests for the get_active_catalog entrypoint and the packaged catalog."""

import textwrap

import pytest

from connector_config import CATALOG_PATH_ENV, get_active_catalog, resolve_catalog_path
from connector_kernel.domain.types import ColumnType
from connector_mapping.document import SourceDocument
from connector_mapping.diagnostics import CollectingDiagnosticsSink
from connector_mapping.rows import build_row, describe_entity


class TestResolveCatalogPath:
    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CATALOG_PATH_ENV, str(tmp_path / "env.yaml"))
        assert resolve_catalog_path(tmp_path / "arg.yaml") == tmp_path / "arg.yaml"

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CATALOG_PATH_ENV, str(tmp_path / "env.yaml"))
        assert resolve_catalog_path() == tmp_path / "env.yaml"

    def test_packaged_default(self, monkeypatch):
        monkeypatch.delenv(CATALOG_PATH_ENV, raising=False)
        assert resolve_catalog_path().name == "commerce.yaml"


class TestGetActiveCatalog:
    def test_packaged_catalog_loads(self, monkeypatch, captured_logs):
        monkeypatch.delenv(CATALOG_PATH_ENV, raising=False)
        catalog = get_active_catalog()
        assert catalog.name == "commerce"
        assert "B2C_CustomerAddress" in catalog.entity_names

        trace = [r for r in captured_logs() if r["message"] == "CONNECTOR_CATALOG_TRACE"]
        assert len(trace) == 1
        assert trace[0]["checksum"] == catalog.checksum
        assert trace[0]["entity_count"] == len(catalog.entities)
        assert trace[0]["catalog"] == "commerce"

    def test_invalid_catalog_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            textwrap.dedent(
                """\
                name: bad
                entities:
                  - name: X
                    lookup: {column: C, target_entity: T, target_field: F}
                    field_mappings:
                      - {source: id, target: ExternalId}
                """
            )
        )
        with pytest.raises(ValueError, match="Catalog validation failed"):
            get_active_catalog(path)

    def test_warnings_logged(self, tmp_path, captured_logs):
        path = tmp_path / "warn.yaml"
        path.write_text(
            textwrap.dedent(
                """\
                name: warn
                entities:
                  - name: X
                    lookup: {column: C, target_entity: T, target_field: F}
                    field_mappings:
                      - {source: d, target: D__c, type: date}
                """
            )
        )
        get_active_catalog(path)
        assert any(r["message"] == "catalog_validation_warning" for r in captured_logs())


class TestPackagedAddressEntity:
    def test_schema_and_row(self, monkeypatch):
        monkeypatch.delenv(CATALOG_PATH_ENV, raising=False)
        entity = get_active_catalog().get_entity("B2C_CustomerAddress")

        table = describe_entity(entity)
        assert table.column_names[-3:] == ("ExternalId", "DisplayUrl", "Contact__c")
        assert table.get_column("Shipping_Surcharge__c").column_type == ColumnType.NUMBER

        sink = CollectingDiagnosticsSink()
        doc = SourceDocument.from_json(
            '{"address_id": "home", "customer_id": "00012", "first_name": "Ada",'
            ' "last_name": "Lovelace", "address1": "1 Rue de Rivoli", "city": "Paris",'
            ' "postal_code": "75001", "country_code": "FR", "preferred": true,'
            ' "c_deliveryAttempts": 0, "c_shippingSurcharge": 4.90}'
        )
        row = build_row(doc, entity, diagnostics=sink)

        assert row["ExternalId"] == "home"
        assert row["Contact__c"] == "00012"
        assert row["Preferred__c"] is True
        assert row["Delivery_Attempts__c"] == 0
        assert set(sink.missing_attributes) == {"address2", "state_code", "phone"}
