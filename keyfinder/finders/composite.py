"""Ordered chain of key finders."""

from typing import List, Optional, Sequence, Union

from ..catalog.dialects import CatalogDialect
from ..keys.model import KeyColumn, NoKeyFound, ResolvedKey, TableIdentifier
from ..utils.logging import get_contextual_logger
from .base import KeyFinder


class CompositeKeyFinder(KeyFinder):
    """Tries finders in order; the first non-empty answer wins.

    Results are never merged across finders.
    """

    name = "composite"

    def __init__(self, finders: Sequence[KeyFinder]):
        self.finders: List[KeyFinder] = list(finders)

    def find_columns(
        self, connection, dialect: CatalogDialect, table: TableIdentifier
    ) -> List[KeyColumn]:
        logger = get_contextual_logger(__name__, {"table": table.qualified_name()})
        for finder in self.finders:
            columns = finder.find_columns(connection, dialect, table)
            if columns:
                names = [column.name for column in columns]
                logger.debug(f"{finder.name} found key {names} for {table.qualified_name()}")
                return columns
            logger.debug(f"{finder.name} found no key for {table.qualified_name()}")
        return []

    def find_key(
        self,
        connection,
        dialect: CatalogDialect,
        schema: Optional[str],
        table: str,
    ) -> Union[ResolvedKey, NoKeyFound]:
        key = super().find_key(connection, dialect, schema, table)
        logger = get_contextual_logger(__name__, {"table": table})
        logger.info(f"Resolved key for {table}: {key!r}")
        return key

    def __repr__(self) -> str:
        return f"CompositeKeyFinder({self.finders!r})"
