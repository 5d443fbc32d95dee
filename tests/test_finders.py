"""Tests for the key finder strategies against DuckDB."""

import pytest

from keyfinder.datatypes import DataType
from keyfinder.errors import ClassificationFailure, KeyDiscoveryError, QueryFailure
from keyfinder.finders import (
    HeuristicKeyFinder,
    IdentityColumnFinder,
    MetadataTableKeyFinder,
    PrimaryKeyConstraintFinder,
)
from keyfinder.keys import ColumnDescriptor, ColumnRole, KeyColumn, TableIdentifier


def _names(columns):
    return [column.name for column in columns]


def _roles(columns):
    return [column.role for column in columns]


class TestPrimaryKeyConstraintFinder:
    def test_auto_increment_primary_key(self, connection, dialect):
        columns = PrimaryKeyConstraintFinder().find_columns(
            connection, dialect, TableIdentifier("ORDERS", "SALES")
        )

        assert columns == [
            KeyColumn.from_descriptor(ColumnDescriptor("ORDER_ID", DataType.INTEGER, True))
        ]
        assert columns[0].role is ColumnRole.AUTO_GENERATED

    def test_composite_primary_key_in_declared_order(self, connection, dialect):
        columns = PrimaryKeyConstraintFinder().find_columns(
            connection, dialect, TableIdentifier("ORDER_LINES", "SALES")
        )

        assert _names(columns) == ["ORDER_ID", "LINE_NO"]
        assert _roles(columns) == [ColumnRole.EXTERNALLY_SUPPLIED] * 2

    def test_no_primary_key_is_empty(self, connection, dialect):
        """A table without a constraint is a normal, empty outcome."""
        columns = PrimaryKeyConstraintFinder().find_columns(
            connection, dialect, TableIdentifier("EVENTS")
        )
        assert columns == []

    def test_schema_filter(self, connection, dialect):
        """The SALES.ORDERS key is not reported for an unqualified ORDERS."""
        columns = PrimaryKeyConstraintFinder().find_columns(
            connection, dialect, TableIdentifier("ORDERS")
        )
        assert columns == []


class TestIdentityColumnFinder:
    def test_sequence_default_column(self, connection, dialect):
        columns = IdentityColumnFinder().find_columns(
            connection, dialect, TableIdentifier("EVENTS")
        )

        assert _names(columns) == ["EVENT_ID"]
        assert columns[0].role is ColumnRole.AUTO_GENERATED
        assert columns[0].declared_type == DataType.BIGINT

    def test_no_generated_columns(self, connection, dialect):
        columns = IdentityColumnFinder().find_columns(
            connection, dialect, TableIdentifier("LOOKUP")
        )
        assert columns == []

    def test_unknown_source(self):
        with pytest.raises(ValueError):
            IdentityColumnFinder(source="sequence")

    def test_primary_index_without_catalog(self, tracking_connection, dialect):
        with pytest.raises(KeyDiscoveryError):
            IdentityColumnFinder(source="primary_index").find_columns(
                tracking_connection, dialect, TableIdentifier("EVENTS")
            )
        assert tracking_connection.open_cursors == []


class TestHeuristicKeyFinder:
    def test_sole_not_null_unique_column(self, connection, dialect):
        columns = HeuristicKeyFinder().find_columns(
            connection, dialect, TableIdentifier("LOOKUP")
        )

        assert _names(columns) == ["CODE"]
        assert columns[0].role is ColumnRole.EXTERNALLY_SUPPLIED

    def test_nullable_unique_falls_back_to_id_column(self, connection, dialect):
        columns = HeuristicKeyFinder().find_columns(
            connection, dialect, TableIdentifier("WIDGETS")
        )
        assert _names(columns) == ["id"]

    def test_ambiguous_unique_constraints(self, connection, dialect):
        """Two candidate constraints and no id column: no guess."""
        columns = HeuristicKeyFinder().find_columns(
            connection, dialect, TableIdentifier("TAGS")
        )
        assert columns == []

    def test_configured_column_names(self, connection, dialect):
        finder = HeuristicKeyFinder(column_names=["B"])
        columns = finder.find_columns(connection, dialect, TableIdentifier("TAGS"))
        assert _names(columns) == ["B"]

    def test_no_signal(self, connection, dialect):
        columns = HeuristicKeyFinder().find_columns(
            connection, dialect, TableIdentifier("SCRATCH")
        )
        assert columns == []

    def test_missing_table(self, tracking_connection, dialect):
        with pytest.raises(QueryFailure):
            HeuristicKeyFinder().find_columns(
                tracking_connection, dialect, TableIdentifier("MISSING")
            )
        assert tracking_connection.open_cursors == []


class TestMetadataTableKeyFinder:
    def test_missing_metadata_table(self, connection, dialect):
        columns = MetadataTableKeyFinder().find_columns(
            connection, dialect, TableIdentifier("ORDERS", "SALES")
        )
        assert columns == []

    def test_policy_overrides_catalog_flag(self, pk_metadata, dialect):
        columns = MetadataTableKeyFinder().find_columns(
            pk_metadata, dialect, TableIdentifier("ORDERS", "SALES")
        )

        assert _names(columns) == ["ORDER_ID"]
        assert columns[0].role is ColumnRole.EXTERNALLY_SUPPLIED

    def test_rows_ordered_by_index_and_schema_null(self, pk_metadata, dialect):
        columns = MetadataTableKeyFinder().find_columns(
            pk_metadata, dialect, TableIdentifier("SCRATCH")
        )

        assert _names(columns) == ["NOTE", "CREATED"]
        assert _roles(columns) == [
            ColumnRole.AUTO_GENERATED,
            ColumnRole.EXTERNALLY_SUPPLIED,
        ]

    def test_unlisted_table(self, pk_metadata, dialect):
        columns = MetadataTableKeyFinder().find_columns(
            pk_metadata, dialect, TableIdentifier("EVENTS")
        )
        assert columns == []

    def test_unknown_policy(self, pk_metadata, dialect):
        with pytest.raises(KeyDiscoveryError):
            MetadataTableKeyFinder().find_columns(
                pk_metadata, dialect, TableIdentifier("LOOKUP")
            )

    def test_unclassifiable_column(self, pk_metadata, dialect):
        with pytest.raises(ClassificationFailure):
            MetadataTableKeyFinder().find_columns(
                pk_metadata, dialect, TableIdentifier("BAGS")
            )

    def test_custom_table_name(self, pk_metadata, dialect):
        finder = MetadataTableKeyFinder(table_name="other_metadata")
        columns = finder.find_columns(pk_metadata, dialect, TableIdentifier("SCRATCH"))
        assert columns == []

    def test_duplicate_rows_for_one_column(self, pk_metadata, dialect):
        pk_metadata.execute(
            "INSERT INTO pk_metadata VALUES ('SALES', 'ORDERS', 'ORDER_ID', 2, 'assigned')"
        )
        with pytest.raises(KeyDiscoveryError, match="Duplicate"):
            MetadataTableKeyFinder().find_columns(
                pk_metadata, dialect, TableIdentifier("ORDERS", "SALES")
            )


@pytest.fixture
def attached(connection):
    """Second database holding same-named tables with different keys."""
    connection.execute("ATTACH ':memory:' AS other")
    connection.execute('CREATE SCHEMA other."SALES"')
    connection.execute(
        'CREATE TABLE other."SALES"."ORDERS" ("X" INTEGER PRIMARY KEY, "ORDER_ID" INTEGER)'
    )
    connection.execute('CREATE TABLE other.main."EVENTS" ("PAYLOAD" VARCHAR PRIMARY KEY)')
    connection.execute('CREATE TABLE other.main."LOOKUP" ("LABEL" VARCHAR NOT NULL UNIQUE)')
    connection.execute(
        "CREATE TABLE other.main.pk_metadata (table_schema VARCHAR, table_name VARCHAR,"
        " pk_column VARCHAR, pk_column_idx INTEGER, pk_policy VARCHAR)"
    )
    connection.execute(
        "INSERT INTO other.main.pk_metadata VALUES ('SALES', 'ORDERS', 'X', 1, NULL)"
    )
    return connection


class TestAttachedDatabase:
    def test_primary_key_ignores_attached_database(self, attached, dialect):
        columns = PrimaryKeyConstraintFinder().find_columns(
            attached, dialect, TableIdentifier("ORDERS", "SALES")
        )

        assert _names(columns) == ["ORDER_ID"]
        assert columns[0].role is ColumnRole.AUTO_GENERATED

    def test_unqualified_lookup_ignores_attached_database(self, attached, dialect):
        columns = PrimaryKeyConstraintFinder().find_columns(
            attached, dialect, TableIdentifier("EVENTS")
        )
        assert columns == []

    def test_unique_constraints_ignore_attached_database(self, attached, dialect):
        columns = HeuristicKeyFinder().find_columns(
            attached, dialect, TableIdentifier("LOOKUP")
        )
        assert _names(columns) == ["CODE"]

    def test_metadata_table_in_attached_database_is_not_used(self, attached, dialect):
        columns = MetadataTableKeyFinder().find_columns(
            attached, dialect, TableIdentifier("ORDERS", "SALES")
        )
        assert columns == []
