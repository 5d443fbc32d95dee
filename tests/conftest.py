"""Shared fixtures for key discovery tests."""

from typing import Any, List, Tuple

import pytest

from keyfinder.catalog.dialects import DuckDBDialect
from keyfinder.cli.main import seed_demo_data
from keyfinder.datasources.duckdb import DuckDBDataSource

from .fakes import TrackingConnection


def _seed_extra_tables(connection) -> None:
    statements = [
        """
        CREATE TABLE "SALES"."ORDER_LINES" (
            "ORDER_ID" INTEGER,
            "LINE_NO" INTEGER,
            "SKU" VARCHAR,
            PRIMARY KEY ("ORDER_ID", "LINE_NO")
        )
        """,
        """
        CREATE TABLE "WIDGETS" (
            "id" INTEGER,
            "serial" VARCHAR UNIQUE,
            "name" VARCHAR
        )
        """,
        """
        CREATE TABLE "TAGS" (
            "A" VARCHAR NOT NULL UNIQUE,
            "B" VARCHAR NOT NULL UNIQUE
        )
        """,
        """
        CREATE TABLE "BAGS" (
            "ITEMS" STRUCT(sku VARCHAR, qty INTEGER),
            "OWNER" VARCHAR
        )
        """,
    ]
    for sql in statements:
        connection.execute(sql)


@pytest.fixture
def duckdb_datasource():
    """In-memory DuckDB datasource seeded with key discovery scenarios."""
    ds = DuckDBDataSource("test_duck", {"path": ":memory:", "read_only": False})
    ds.connect()
    seed_demo_data(ds.connection)
    _seed_extra_tables(ds.connection)

    yield ds

    ds.disconnect()


@pytest.fixture
def connection(duckdb_datasource):
    return duckdb_datasource.connection


@pytest.fixture
def tracking_connection(connection):
    return TrackingConnection(connection)


@pytest.fixture
def dialect():
    return DuckDBDialect()


@pytest.fixture
def pk_metadata(connection):
    """Key metadata table with overrides for a few tables."""
    connection.execute(
        """
        CREATE TABLE pk_metadata (
            table_schema VARCHAR,
            table_name VARCHAR NOT NULL,
            pk_column VARCHAR NOT NULL,
            pk_column_idx INTEGER,
            pk_policy VARCHAR
        )
        """
    )
    rows: List[Tuple[Any, ...]] = [
        ("SALES", "ORDERS", "ORDER_ID", 1, "assigned"),
        (None, "SCRATCH", "CREATED", 2, None),
        (None, "SCRATCH", "NOTE", 1, "sequence"),
        (None, "BAGS", "ITEMS", 1, None),
        (None, "LOOKUP", "LABEL", 1, "bogus"),
    ]
    for row in rows:
        connection.execute("INSERT INTO pk_metadata VALUES (?, ?, ?, ?, ?)", list(row))
    return connection
