"""Tests for catalog type mapping."""

import pytest

from keyfinder.datatypes import DataType, map_type
from keyfinder.errors import ClassificationFailure
from keyfinder.finders import PrimaryKeyConstraintFinder


def test_integer_types():
    assert map_type("INTEGER") == DataType.INTEGER
    assert map_type("int4") == DataType.INTEGER
    assert map_type("SMALLINT") == DataType.SMALLINT
    assert map_type("BIGINT") == DataType.BIGINT
    assert map_type("bigserial") == DataType.BIGINT


def test_numeric_types():
    assert map_type("REAL") == DataType.FLOAT
    assert map_type("double precision") == DataType.DOUBLE
    assert map_type("DECIMAL(12,2)") == DataType.DECIMAL
    assert map_type("numeric(18, 4)") == DataType.DECIMAL


def test_string_types():
    assert map_type("VARCHAR") == DataType.VARCHAR
    assert map_type("character varying(20)") == DataType.VARCHAR
    assert map_type("CHAR(3)") == DataType.TEXT
    assert map_type("text") == DataType.TEXT


def test_temporal_types():
    assert map_type("DATE") == DataType.DATE
    assert map_type("TIMESTAMP") == DataType.TIMESTAMP
    assert map_type("timestamp(6) with time zone") == DataType.TIMESTAMP
    assert map_type("time without time zone") == DataType.TIME


def test_other_types():
    assert map_type("boolean") == DataType.BOOLEAN
    assert map_type("uuid") == DataType.UUID
    assert map_type("bytea") == DataType.BINARY


def test_extension_and_array_types():
    assert map_type("USER-DEFINED") == DataType.VARCHAR
    assert map_type("ENUM('a', 'b')") == DataType.VARCHAR
    assert map_type("inet") == DataType.VARCHAR
    assert map_type("money") == DataType.DECIMAL
    assert map_type("interval") == DataType.INTERVAL
    assert map_type("ARRAY") == DataType.ARRAY
    assert map_type("INTEGER[]") == DataType.ARRAY
    assert map_type("VARCHAR[3]") == DataType.ARRAY


def test_unsupported_types_fail():
    """Types with no mapping are classification failures, not defaults."""
    with pytest.raises(ClassificationFailure):
        map_type("STRUCT(a INTEGER)")
    with pytest.raises(ClassificationFailure):
        map_type("MAP(VARCHAR, INTEGER)")
    with pytest.raises(ClassificationFailure):
        map_type("GEOMETRY")


def test_missing_type_fails():
    with pytest.raises(ClassificationFailure):
        map_type(None)
    with pytest.raises(ClassificationFailure):
        map_type("")


@pytest.mark.parametrize(
    "declared, expected",
    [
        ("UHUGEINT", DataType.BIGINT),
        ("TIMESTAMP_S", DataType.TIMESTAMP),
        ("TIMESTAMP_MS", DataType.TIMESTAMP),
        ("TIMESTAMP_NS", DataType.TIMESTAMP),
        ("ENUM('a', 'b')", DataType.VARCHAR),
    ],
)
def test_duckdb_key_types(connection, dialect, declared, expected):
    """Primary keys on DuckDB-specific types resolve instead of failing."""
    connection.execute(f'CREATE TABLE "TYPED" ("K" {declared} PRIMARY KEY, "V" VARCHAR)')

    key = PrimaryKeyConstraintFinder().find_key(connection, dialect, None, "TYPED")

    assert key.column_names == ("K",)
    assert key.get_column("K").declared_type == expected
