"""Primary-key discovery over live database catalogs."""

from typing import Optional, Union

from .catalog import CatalogDialect, DuckDBDialect, PostgreSQLDialect, TeradataDialect, get_dialect
from .datatypes import DataType
from .errors import ClassificationFailure, KeyDiscoveryError, QueryFailure
from .finders import CompositeKeyFinder, KeyFinder, default_key_finder
from .keys import (
    NO_KEY,
    ColumnDescriptor,
    ColumnRole,
    KeyColumn,
    NoKeyFound,
    ResolvedKey,
    TableIdentifier,
)

__version__ = "0.1.0"


def find_primary_key(
    connection,
    dialect: CatalogDialect,
    schema: Optional[str],
    table: str,
    finder: Optional[KeyFinder] = None,
) -> Union[ResolvedKey, NoKeyFound]:
    """Resolve a table's key with the default finder chain.

    Args:
        connection: Open DB-API connection, left open afterwards
        dialect: Catalog dialect matching the connection
        schema: Schema name, or None for the current schema
        table: Table name
        finder: Finder to use instead of default_key_finder()

    Returns:
        ResolvedKey, or NO_KEY if no strategy found one
    """
    if finder is None:
        finder = default_key_finder()
    return finder.find_key(connection, dialect, schema, table)


__all__ = [
    "CatalogDialect",
    "DuckDBDialect",
    "PostgreSQLDialect",
    "TeradataDialect",
    "get_dialect",
    "DataType",
    "KeyDiscoveryError",
    "QueryFailure",
    "ClassificationFailure",
    "KeyFinder",
    "CompositeKeyFinder",
    "default_key_finder",
    "find_primary_key",
    "NO_KEY",
    "NoKeyFound",
    "ColumnDescriptor",
    "ColumnRole",
    "KeyColumn",
    "ResolvedKey",
    "TableIdentifier",
]
