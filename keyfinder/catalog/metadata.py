"""Catalog query layer: scoped cursors and table probes."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence
import logging

from ..datatypes import DataType
from ..errors import ClassificationFailure, QueryFailure
from ..keys.model import ColumnDescriptor, TableIdentifier
from .dialects import CatalogDialect

logger = logging.getLogger(__name__)


@contextmanager
def catalog_cursor(connection) -> Iterator[Any]:
    """Open a cursor on an externally owned connection.

    The cursor is closed when the block exits, whether it returns or
    raises. The connection itself is left open.
    """
    cursor = connection.cursor()
    try:
        yield cursor
    finally:
        cursor.close()


def run_query(
    cursor,
    dialect: CatalogDialect,
    sql: str,
    params: Optional[Sequence[Any]] = None,
    fetch: bool = True,
) -> List[Sequence[Any]]:
    """Execute a catalog query and fetch every row.

    With ``fetch=False`` the result is left on the cursor so its
    ``description`` can be read.

    Raises:
        QueryFailure: If the driver rejects or fails the query
    """
    logger.debug(f"Executing catalog query on {dialect.name}: {' '.join(sql.split())[:200]}")
    try:
        if params:
            cursor.execute(sql, params)
        else:
            cursor.execute(sql)
        if not fetch:
            return []
        return cursor.fetchall()
    except dialect.driver_errors as e:
        logger.error(f"Catalog query failed on {dialect.name}: {e}")
        raise QueryFailure(f"Catalog query failed: {e}") from e


def _flag(value: Any) -> bool:
    """Normalize catalog yes/no markers ('YES', 'Y', booleans, 0/1)."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().upper() in ("YES", "Y", "TRUE", "T", "1")
    return bool(value)


@dataclass
class _ColumnInfo:
    type_name: Optional[str]
    nullable: bool
    auto_increment: bool


class TableMetadata:
    """Column metadata of one table, read through a zero-row probe.

    The probe (``SELECT * FROM t WHERE 1 = 2``) fixes the column names and
    their ordinals without scanning data; the dialect's column-info query
    supplies declared types, nullability and the auto-increment flag.
    """

    def __init__(self, cursor, dialect: CatalogDialect, table: TableIdentifier):
        self.dialect = dialect
        self.table = table
        self._columns = self._probe(cursor)
        self._info = self._load_column_info(cursor)

    def _probe(self, cursor) -> List[str]:
        run_query(cursor, self.dialect, self.dialect.probe_query(self.table), fetch=False)
        columns = []
        for desc in cursor.description:
            columns.append(desc[0].strip())
        return columns

    def _load_column_info(self, cursor) -> Dict[str, _ColumnInfo]:
        sql, params = self.dialect.column_info_query(self.table)
        info = {}
        for name, type_name, nullable, auto_increment in run_query(
            cursor, self.dialect, sql, params
        ):
            info[name.strip()] = _ColumnInfo(
                type_name=type_name,
                nullable=_flag(nullable),
                auto_increment=_flag(auto_increment),
            )
        return info

    @property
    def column_names(self) -> List[str]:
        return list(self._columns)

    def has_column(self, column_name: str) -> bool:
        return self._find(column_name) is not None

    def ordinal(self, column_name: str) -> int:
        """Get the 1-based position of a column in the probe result.

        Raises:
            QueryFailure: If the probe has no such column
        """
        ordinal = self._find(column_name)
        if ordinal is None:
            raise QueryFailure(
                f"Column {column_name} not found in {self.table.qualified_name()}"
            )
        return ordinal

    def column_name(self, ordinal: int) -> str:
        return self._columns[ordinal - 1]

    def column_type(self, ordinal: int) -> DataType:
        """Get the semantic type of a column.

        Raises:
            ClassificationFailure: If the type is unknown or unmapped
        """
        info = self._column_info(ordinal)
        try:
            return self.dialect.map_type(info.type_name)
        except ClassificationFailure as e:
            raise ClassificationFailure(
                f"Cannot classify {self.table.qualified_name()}.{self.column_name(ordinal)}: {e}"
            ) from e

    def is_auto_increment(self, ordinal: int) -> bool:
        return self._column_info(ordinal).auto_increment

    def is_nullable(self, ordinal: int) -> bool:
        return self._column_info(ordinal).nullable

    def describe(self, column_name: str) -> ColumnDescriptor:
        """Build the descriptor of a column, named as the probe returned it."""
        ordinal = self.ordinal(column_name)
        return ColumnDescriptor(
            name=self.column_name(ordinal),
            declared_type=self.column_type(ordinal),
            is_auto_increment=self.is_auto_increment(ordinal),
        )

    def _find(self, column_name: str) -> Optional[int]:
        name = column_name.strip()
        for i, col in enumerate(self._columns):
            if col == name:
                return i + 1
        for i, col in enumerate(self._columns):
            if col.lower() == name.lower():
                return i + 1
        return None

    def _column_info(self, ordinal: int) -> _ColumnInfo:
        name = self.column_name(ordinal)
        info = self._info.get(name)
        if info is None:
            for other, candidate in self._info.items():
                if other.lower() == name.lower():
                    info = candidate
                    break
        if info is None:
            raise ClassificationFailure(
                f"Catalog has no type information for {self.table.qualified_name()}.{name}"
            )
        return info

    def __repr__(self) -> str:
        return f"TableMetadata({self.table.qualified_name()}, cols={len(self._columns)})"
