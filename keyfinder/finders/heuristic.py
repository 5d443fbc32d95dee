"""Last-resort key finder for tables without any key signal."""

from typing import List, Sequence
import logging

from ..catalog.dialects import CatalogDialect
from ..catalog.metadata import TableMetadata, catalog_cursor, run_query
from ..keys.model import KeyColumn, TableIdentifier
from .base import KeyFinder

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_NAMES = ("id",)


class HeuristicKeyFinder(KeyFinder):
    """Guesses a key from unique constraints or column names.

    Rules, first match wins:

    1. If exactly one unique constraint has only NOT NULL columns, its
       columns are the key.
    2. Otherwise the first of ``column_names`` present on the table,
       compared case-insensitively.

    Neither rule is guaranteed by the catalog, so this finder belongs at
    the end of a chain.
    """

    name = "heuristic"

    def __init__(self, column_names: Sequence[str] = DEFAULT_COLUMN_NAMES):
        self.column_names = list(column_names)

    def find_columns(
        self, connection, dialect: CatalogDialect, table: TableIdentifier
    ) -> List[KeyColumn]:
        with catalog_cursor(connection) as cursor:
            sql, params = dialect.unique_constraints_query(table)
            groups = dialect.group_unique_columns(run_query(cursor, dialect, sql, params))
            metadata = TableMetadata(cursor, dialect, table)

            candidates = []
            for group in groups:
                if all(not metadata.is_nullable(metadata.ordinal(name)) for name in group):
                    candidates.append(group)

            if len(candidates) == 1:
                logger.debug(
                    f"Using sole NOT NULL unique constraint {candidates[0]} "
                    f"on {table.qualified_name()}"
                )
                return self._describe(metadata, candidates[0])
            if len(candidates) > 1:
                logger.debug(
                    f"{len(candidates)} NOT NULL unique constraints on "
                    f"{table.qualified_name()}, falling back to column names"
                )

            for name in self.column_names:
                if metadata.has_column(name):
                    logger.debug(f"Using column {name} on {table.qualified_name()}")
                    return self._describe(metadata, [name])
            return []

    def _describe(self, metadata: TableMetadata, names: List[str]) -> List[KeyColumn]:
        columns = []
        for name in names:
            columns.append(KeyColumn.from_descriptor(metadata.describe(name)))
        return columns

    def __repr__(self) -> str:
        return f"HeuristicKeyFinder(column_names={self.column_names})"
