"""Key finder for databases that flag generated columns instead of keys."""

from typing import List
import logging

from ..catalog.dialects import CatalogDialect
from ..catalog.metadata import TableMetadata, catalog_cursor, run_query
from ..keys.model import KeyColumn, TableIdentifier
from .base import KeyFinder

logger = logging.getLogger(__name__)

IDENTITY_SOURCE = "identity"
PRIMARY_INDEX_SOURCE = "primary_index"


class IdentityColumnFinder(KeyFinder):
    """Uses columns the catalog marks as database-generated.

    The default source is the dialect's identity-flag view (identity
    columns, or sequence-backed defaults on DuckDB). The ``primary_index``
    source reads the primary index catalog instead; only Teradata has one.

    Either way only columns the probe also reports as auto-increment are
    kept, so every column found here is auto-generated. Other matches are
    skipped, not treated as errors.
    """

    name = "identity"

    def __init__(self, source: str = IDENTITY_SOURCE):
        if source not in (IDENTITY_SOURCE, PRIMARY_INDEX_SOURCE):
            raise ValueError(f"Unknown identity source: {source}")
        self.source = source

    def find_columns(
        self, connection, dialect: CatalogDialect, table: TableIdentifier
    ) -> List[KeyColumn]:
        if self.source == PRIMARY_INDEX_SOURCE:
            sql, params = dialect.primary_index_query(table)
        else:
            sql, params = dialect.identity_columns_query(table)

        with catalog_cursor(connection) as cursor:
            names = dialect.key_columns(run_query(cursor, dialect, sql, params))
            if not names:
                logger.debug(f"No generated columns on {table.qualified_name()}")
                return []

            metadata = TableMetadata(cursor, dialect, table)
            columns = []
            for name in names:
                descriptor = metadata.describe(name)
                if not descriptor.is_auto_increment:
                    logger.debug(
                        f"Skipping {table.qualified_name()}.{name}: not auto-increment"
                    )
                    continue
                columns.append(KeyColumn.from_descriptor(descriptor))
            return columns

    def __repr__(self) -> str:
        return f"IdentityColumnFinder(source={self.source})"
