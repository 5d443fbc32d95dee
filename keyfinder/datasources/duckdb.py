"""DuckDB data source implementation."""

from typing import List, Dict, Any, Optional
import duckdb
import logging

from ..catalog.dialects import DuckDBDialect
from ..catalog.metadata import catalog_cursor, run_query
from ..finders.base import KeyFinder
from .base import DataSource

logger = logging.getLogger(__name__)


class DuckDBDataSource(DataSource):
    """DuckDB data source connector."""

    dialect = DuckDBDialect()

    def __init__(
        self,
        name: str,
        config: Dict[str, Any],
        key_finder: Optional[KeyFinder] = None,
    ):
        """Initialize DuckDB data source.

        Config should include:
            - path: Path to DuckDB database file (or :memory: for in-memory)
            - read_only: Whether to open in read-only mode (default: True)
        """
        super().__init__(name, config, key_finder)
        self.db_path = config.get("path", ":memory:")
        self.read_only = config.get("read_only", True)

    def connect(self) -> None:
        """Establish connection to DuckDB."""
        logger.info(f"Connecting to DuckDB at '{self.db_path}'")
        try:
            self.connection = duckdb.connect(self.db_path, read_only=self.read_only)
        except duckdb.Error as e:
            logger.error(f"Failed to connect to DuckDB {self.name}: {e}")
            raise ConnectionError(f"DuckDB connection failed: {e}") from e
        self._connected = True
        logger.info(f"Successfully connected to DuckDB: {self.name}")

    def disconnect(self) -> None:
        """Close DuckDB connection."""
        if self.connection:
            self.connection.close()
            logger.info(f"Disconnected from DuckDB: {self.name}")
            self.connection = None
            self._connected = False

    def list_tables(self, schema: Optional[str] = None) -> List[str]:
        """List base tables in a schema."""
        self.ensure_connected()
        sql = """
            SELECT table_name
            FROM information_schema.tables
            WHERE table_type = 'BASE TABLE'
              AND table_catalog = current_database()
              AND table_schema = {schema}
            ORDER BY table_name
        """
        params = []
        if schema is None:
            sql = sql.format(schema="current_schema()")
        else:
            sql = sql.format(schema="?")
            params.append(schema)

        with catalog_cursor(self.connection) as cursor:
            rows = run_query(cursor, self.dialect, sql, params)
        tables = []
        for row in rows:
            tables.append(row[0])
        return tables
