"""Base key finder interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Union

from ..catalog.dialects import CatalogDialect
from ..keys.model import NO_KEY, KeyColumn, NoKeyFound, ResolvedKey, TableIdentifier


class KeyFinder(ABC):
    """One way of discovering the key columns of a table."""

    name = "key_finder"

    @abstractmethod
    def find_columns(
        self, connection, dialect: CatalogDialect, table: TableIdentifier
    ) -> List[KeyColumn]:
        """Find the ordered key columns of a table.

        Args:
            connection: Open DB-API connection, owned by the caller
            dialect: Catalog dialect matching the connection
            table: Target table

        Returns:
            Key columns in key order, or an empty list if this finder
            has no answer for the table
        """
        pass

    def find_key(
        self,
        connection,
        dialect: CatalogDialect,
        schema: Optional[str],
        table: str,
    ) -> Union[ResolvedKey, NoKeyFound]:
        """Resolve the key of a table.

        Returns:
            ResolvedKey, or NO_KEY if no columns were found
        """
        target = TableIdentifier(table=table, schema=schema)
        columns = self.find_columns(connection, dialect, target)
        if not columns:
            return NO_KEY
        return ResolvedKey(table_name=target.table, columns=tuple(columns))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
