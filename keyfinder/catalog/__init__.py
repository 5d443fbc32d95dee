"""Catalog query layer for key discovery."""

from .dialects import (
    CatalogDialect,
    DuckDBDialect,
    PostgreSQLDialect,
    TeradataDialect,
    get_dialect,
)
from .metadata import TableMetadata, catalog_cursor, run_query

__all__ = [
    "CatalogDialect",
    "DuckDBDialect",
    "PostgreSQLDialect",
    "TeradataDialect",
    "get_dialect",
    "TableMetadata",
    "catalog_cursor",
    "run_query",
]
