"""Per-database catalog queries used by key discovery."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple, Type

import duckdb
import psycopg2
import teradatasql
from sqlglot import exp

from ..datatypes import DataType, map_type
from ..errors import KeyDiscoveryError
from ..keys.model import TableIdentifier

Query = Tuple[str, List[Any]]


class CatalogDialect(ABC):
    """Catalog SQL and type mapping for one kind of database.

    Every query method returns ``(sql, params)`` with values bound through
    the driver's placeholder. Queries come in two shapes: filtered by schema
    when the identifier carries one, otherwise scoped to the session's
    current schema (or unscoped where the database has no such notion).
    """

    name = "generic"
    sqlglot_dialect = ""
    placeholder = "?"
    driver_errors: Tuple[Type[BaseException], ...] = ()
    supports_primary_index = False

    def probe_query(self, table: TableIdentifier) -> str:
        """Zero-row query exposing the table's result-set metadata."""
        relation = self._relation(table.schema, table.table)
        query = exp.select("*").from_(relation).where("1 = 2")
        return query.sql(dialect=self.sqlglot_dialect)

    def quote_table(self, schema: Optional[str], table: str) -> str:
        """Render a quoted, optionally schema-qualified table reference."""
        return self._relation(schema, table).sql(dialect=self.sqlglot_dialect)

    def map_type(self, type_name: str) -> DataType:
        return map_type(type_name)

    @abstractmethod
    def column_info_query(self, table: TableIdentifier) -> Query:
        """Rows of (column_name, type_name, nullable, auto_increment)."""
        pass

    @abstractmethod
    def primary_key_query(self, table: TableIdentifier) -> Query:
        """Primary-key columns in key-sequence order."""
        pass

    @abstractmethod
    def identity_columns_query(self, table: TableIdentifier) -> Query:
        """Columns the catalog flags as database-generated."""
        pass

    def primary_index_query(self, table: TableIdentifier) -> Query:
        """Columns of the table's primary index.

        Raises:
            KeyDiscoveryError: If the database has no primary index catalog
        """
        raise KeyDiscoveryError(f"{self.name} does not expose a primary index catalog")

    @abstractmethod
    def unique_constraints_query(self, table: TableIdentifier) -> Query:
        """Rows of (constraint, column_name) ordered by constraint and position."""
        pass

    @abstractmethod
    def table_exists_query(self, table: TableIdentifier) -> Query:
        """Query returning at least one row iff the table exists."""
        pass

    def key_columns(self, rows: Sequence[Sequence[Any]]) -> List[str]:
        """Extract column names from single-column catalog rows."""
        names = []
        for row in rows:
            names.append(row[0].strip())
        return names

    def group_unique_columns(self, rows: Sequence[Sequence[Any]]) -> List[List[str]]:
        """Group (constraint, column) rows into per-constraint column lists."""
        groups: List[List[str]] = []
        current = None
        for constraint, column in rows:
            if not groups or constraint != current:
                groups.append([])
                current = constraint
            groups[-1].append(column.strip())
        return groups

    def _relation(self, schema: Optional[str], table: str) -> exp.Table:
        return exp.table_(table, db=schema, quoted=True)

    def _scope(self, table: TableIdentifier, schema_column: str, table_column: str) -> Query:
        """Build the table/schema predicate for catalog views."""
        p = self.placeholder
        clause = f"{table_column} = {p}"
        params: List[Any] = [table.table]
        if table.schema is not None:
            clause += f" AND {schema_column} = {p}"
            params.append(table.schema)
        else:
            unqualified = self._current_schema_predicate(schema_column)
            if unqualified:
                clause += f" AND {unqualified}"
        return clause, params

    def _current_schema_predicate(self, schema_column: str) -> Optional[str]:
        return f"{schema_column} = current_schema()"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class DuckDBDialect(CatalogDialect):
    """DuckDB catalog.

    DuckDB has no identity columns; a column whose default draws from a
    sequence is treated as generated. Catalog views list every attached
    database, so each query is pinned to current_database(), the one the
    probe resolves against.
    """

    name = "duckdb"
    sqlglot_dialect = "duckdb"
    placeholder = "?"
    driver_errors = (duckdb.Error,)

    def column_info_query(self, table: TableIdentifier) -> Query:
        scope, params = self._information_schema_scope(table)
        sql = f"""
            SELECT
                column_name,
                data_type,
                is_nullable,
                coalesce(lower(column_default) LIKE 'nextval(%', false) AS is_auto_increment
            FROM information_schema.columns
            WHERE {scope}
            ORDER BY ordinal_position
        """
        return sql, params

    def primary_key_query(self, table: TableIdentifier) -> Query:
        scope, params = self._constraints_scope(table)
        sql = f"""
            SELECT constraint_column_names
            FROM duckdb_constraints()
            WHERE constraint_type = 'PRIMARY KEY' AND {scope}
        """
        return sql, params

    def identity_columns_query(self, table: TableIdentifier) -> Query:
        scope, params = self._information_schema_scope(table)
        sql = f"""
            SELECT column_name
            FROM information_schema.columns
            WHERE {scope} AND lower(column_default) LIKE 'nextval(%'
            ORDER BY ordinal_position
        """
        return sql, params

    def unique_constraints_query(self, table: TableIdentifier) -> Query:
        scope, params = self._constraints_scope(table)
        sql = f"""
            SELECT constraint_index, constraint_column_names
            FROM duckdb_constraints()
            WHERE constraint_type = 'UNIQUE' AND {scope}
            ORDER BY constraint_index
        """
        return sql, params

    def table_exists_query(self, table: TableIdentifier) -> Query:
        scope, params = self._information_schema_scope(table)
        sql = f"SELECT 1 FROM information_schema.tables WHERE {scope}"
        return sql, params

    def _information_schema_scope(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "table_schema", "table_name")
        return f"{scope} AND table_catalog = current_database()", params

    def _constraints_scope(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "schema_name", "table_name")
        return f"{scope} AND database_name = current_database()", params

    def key_columns(self, rows: Sequence[Sequence[Any]]) -> List[str]:
        # duckdb_constraints() reports each key as one row holding a list
        names = []
        for row in rows:
            for column in row[0]:
                names.append(column.strip())
        return names

    def group_unique_columns(self, rows: Sequence[Sequence[Any]]) -> List[List[str]]:
        groups = []
        for _, columns in rows:
            groups.append([column.strip() for column in columns])
        return groups


class PostgreSQLDialect(CatalogDialect):
    """PostgreSQL catalog via information_schema."""

    name = "postgresql"
    sqlglot_dialect = "postgres"
    placeholder = "%s"
    driver_errors = (psycopg2.Error,)

    def column_info_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "table_schema", "table_name")
        sql = f"""
            SELECT
                column_name,
                data_type,
                is_nullable,
                (is_identity = 'YES'
                 OR coalesce(column_default LIKE 'nextval(%%', false)) AS is_auto_increment
            FROM information_schema.columns
            WHERE {scope}
            ORDER BY ordinal_position
        """
        return sql, params

    def primary_key_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "tc.table_schema", "tc.table_name")
        sql = f"""
            SELECT kcu.column_name
            FROM information_schema.table_constraints tc
            JOIN information_schema.key_column_usage kcu
              ON kcu.constraint_schema = tc.constraint_schema
             AND kcu.constraint_name = tc.constraint_name
            WHERE tc.constraint_type = 'PRIMARY KEY' AND {scope}
            ORDER BY kcu.ordinal_position
        """
        return sql, params

    def identity_columns_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "table_schema", "table_name")
        sql = f"""
            SELECT column_name
            FROM information_schema.columns
            WHERE {scope}
              AND is_identity = 'YES'
              AND identity_generation IN ('ALWAYS', 'BY DEFAULT')
            ORDER BY ordinal_position
        """
        return sql, params

    def unique_constraints_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "tc.table_schema", "tc.table_name")
        sql = f"""
            SELECT tc.constraint_name, kcu.column_name
            FROM information_schema.table_constraints tc
            JOIN information_schema.key_column_usage kcu
              ON kcu.constraint_schema = tc.constraint_schema
             AND kcu.constraint_name = tc.constraint_name
            WHERE tc.constraint_type = 'UNIQUE' AND {scope}
            ORDER BY tc.constraint_name, kcu.ordinal_position
        """
        return sql, params

    def table_exists_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "table_schema", "table_name")
        sql = f"SELECT 1 FROM information_schema.tables WHERE {scope}"
        return sql, params


# DBC.ColumnsV.ColumnType codes
_TERADATA_TYPE_CODES = {
    "I": "INTEGER",
    "I1": "BYTEINT",
    "I2": "SMALLINT",
    "I8": "BIGINT",
    "F": "DOUBLE",
    "D": "DECIMAL",
    "N": "NUMBER",
    "CF": "CHAR",
    "CV": "VARCHAR",
    "CO": "CLOB",
    "DA": "DATE",
    "AT": "TIME",
    "TZ": "TIME WITH TIME ZONE",
    "TS": "TIMESTAMP",
    "SZ": "TIMESTAMP WITH TIME ZONE",
    "BF": "BYTE",
    "BV": "VARBYTE",
    "BO": "BLOB",
}


class TeradataDialect(CatalogDialect):
    """Teradata catalog via the DBC views.

    Teradata often has no primary-key constraint at all, only identity
    columns (IdColType GA/GD) or a primary index. Without a schema the
    queries are not scoped to a database.
    """

    name = "teradata"
    sqlglot_dialect = "teradata"
    placeholder = "?"
    driver_errors = (teradatasql.Error,)
    supports_primary_index = True

    def map_type(self, type_name: str) -> DataType:
        code = (type_name or "").strip()
        return map_type(_TERADATA_TYPE_CODES.get(code, code))

    def column_info_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "DatabaseName", "TableName")
        sql = f"""
            SELECT
                ColumnName,
                ColumnType,
                Nullable,
                CASE WHEN IdColType IN ('GA', 'GD') THEN 'Y' ELSE 'N' END
            FROM DBC.ColumnsV
            WHERE {scope}
            ORDER BY ColumnId
        """
        return sql, params

    def primary_key_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "DatabaseName", "TableName")
        sql = f"""
            SELECT ColumnName
            FROM DBC.IndicesV
            WHERE {scope} AND IndexType = 'K'
            ORDER BY ColumnPosition
        """
        return sql, params

    def identity_columns_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "DatabaseName", "TableName")
        sql = f"""
            SELECT ColumnName
            FROM DBC.ColumnsV
            WHERE {scope} AND IdColType IN ('GA', 'GD')
            ORDER BY ColumnId
        """
        return sql, params

    def primary_index_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "DatabaseName", "TableName")
        sql = f"""
            SELECT ColumnName
            FROM DBC.IndicesV
            WHERE {scope} AND IndexType = 'P'
            ORDER BY ColumnPosition
        """
        return sql, params

    def unique_constraints_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "DatabaseName", "TableName")
        sql = f"""
            SELECT IndexNumber, ColumnName
            FROM DBC.IndicesV
            WHERE {scope} AND UniqueFlag = 'Y' AND IndexType IN ('P', 'S', 'U')
            ORDER BY IndexNumber, ColumnPosition
        """
        return sql, params

    def table_exists_query(self, table: TableIdentifier) -> Query:
        scope, params = self._scope(table, "DatabaseName", "TableName")
        sql = f"SELECT 1 FROM DBC.TablesV WHERE {scope} AND TableKind = 'T'"
        return sql, params

    def _current_schema_predicate(self, schema_column: str) -> Optional[str]:
        return None


_DIALECTS = {
    "duckdb": DuckDBDialect,
    "postgresql": PostgreSQLDialect,
    "postgres": PostgreSQLDialect,
    "teradata": TeradataDialect,
}


def get_dialect(name: str) -> CatalogDialect:
    """Get a catalog dialect by database type name.

    Raises:
        ValueError: If no dialect is registered for the name
    """
    dialect_class = _DIALECTS.get(name.lower())
    if dialect_class is None:
        raise ValueError(f"Unsupported catalog dialect: {name}")
    return dialect_class()
