"""Key finder reading a user-maintained key metadata table."""

from dataclasses import replace
from typing import List, Optional
import logging

from ..catalog.dialects import CatalogDialect, Query
from ..catalog.metadata import TableMetadata, catalog_cursor, run_query
from ..errors import KeyDiscoveryError
from ..keys.model import KeyColumn, TableIdentifier
from .base import KeyFinder

logger = logging.getLogger(__name__)

DEFAULT_METADATA_TABLE = "pk_metadata"

# pk_policy value -> forced auto-increment flag
_POLICIES = {
    "assigned": False,
    "autogenerated": True,
    "sequence": True,
}


class MetadataTableKeyFinder(KeyFinder):
    """Uses key definitions stored in a metadata table.

    The table lets operators declare keys the catalog cannot report::

        CREATE TABLE pk_metadata (
            table_schema  VARCHAR,
            table_name    VARCHAR NOT NULL,
            pk_column     VARCHAR NOT NULL,
            pk_column_idx INTEGER,
            pk_policy     VARCHAR  -- assigned | autogenerated | sequence
        )

    A NULL ``pk_policy`` keeps the catalog's auto-increment flag. Rows with
    a NULL ``table_schema`` describe tables looked up without a schema.
    If the metadata table does not exist the finder has no answer.
    """

    name = "metadata_table"

    def __init__(self, table_name: str = DEFAULT_METADATA_TABLE, schema: Optional[str] = None):
        self.metadata_table = TableIdentifier(table=table_name, schema=schema)

    def find_columns(
        self, connection, dialect: CatalogDialect, table: TableIdentifier
    ) -> List[KeyColumn]:
        with catalog_cursor(connection) as cursor:
            sql, params = dialect.table_exists_query(self.metadata_table)
            if not run_query(cursor, dialect, sql, params):
                logger.debug(
                    f"Key metadata table {self.metadata_table.qualified_name()} not found"
                )
                return []

            sql, params = self._definition_query(dialect, table)
            rows = run_query(cursor, dialect, sql, params)
            if not rows:
                return []

            metadata = TableMetadata(cursor, dialect, table)
            columns = []
            seen = set()
            for column_name, policy in rows:
                descriptor = metadata.describe(column_name)
                if descriptor.name in seen:
                    raise KeyDiscoveryError(
                        f"Duplicate {self.metadata_table.qualified_name()} rows for "
                        f"{table.qualified_name()}.{descriptor.name}"
                    )
                seen.add(descriptor.name)
                forced = self._policy_flag(policy, table, column_name)
                if forced is not None:
                    descriptor = replace(descriptor, is_auto_increment=forced)
                columns.append(KeyColumn.from_descriptor(descriptor))
            return columns

    def _definition_query(self, dialect: CatalogDialect, table: TableIdentifier) -> Query:
        p = dialect.placeholder
        relation = dialect.quote_table(self.metadata_table.schema, self.metadata_table.table)
        params = [table.table]
        if table.schema is not None:
            schema_clause = f"table_schema = {p}"
            params.append(table.schema)
        else:
            schema_clause = "table_schema IS NULL"
        sql = f"""
            SELECT pk_column, pk_policy
            FROM {relation}
            WHERE table_name = {p} AND {schema_clause}
            ORDER BY pk_column_idx
        """
        return sql, params

    def _policy_flag(
        self, policy: Optional[str], table: TableIdentifier, column_name: str
    ) -> Optional[bool]:
        if policy is None or not policy.strip():
            return None
        key = policy.strip().lower()
        if key not in _POLICIES:
            raise KeyDiscoveryError(
                f"Unknown pk_policy '{policy}' for {table.qualified_name()}.{column_name}"
            )
        return _POLICIES[key]

    def __repr__(self) -> str:
        return f"MetadataTableKeyFinder(table={self.metadata_table.qualified_name()})"
