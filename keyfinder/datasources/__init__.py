"""Data source connectors."""

from .base import DataSource
from .postgresql import PostgreSQLDataSource
from .duckdb import DuckDBDataSource

__all__ = [
    "DataSource",
    "PostgreSQLDataSource",
    "DuckDBDataSource",
]
