"""Key finder reading the catalog's declared primary key."""

from typing import List
import logging

from ..catalog.dialects import CatalogDialect
from ..catalog.metadata import TableMetadata, catalog_cursor, run_query
from ..keys.model import KeyColumn, TableIdentifier
from .base import KeyFinder

logger = logging.getLogger(__name__)


class PrimaryKeyConstraintFinder(KeyFinder):
    """Uses the PRIMARY KEY constraint reported by the catalog."""

    name = "primary_key"

    def find_columns(
        self, connection, dialect: CatalogDialect, table: TableIdentifier
    ) -> List[KeyColumn]:
        with catalog_cursor(connection) as cursor:
            sql, params = dialect.primary_key_query(table)
            names = dialect.key_columns(run_query(cursor, dialect, sql, params))
            if not names:
                logger.debug(f"No primary key constraint on {table.qualified_name()}")
                return []

            metadata = TableMetadata(cursor, dialect, table)
            columns = []
            for name in names:
                columns.append(KeyColumn.from_descriptor(metadata.describe(name)))
            return columns
