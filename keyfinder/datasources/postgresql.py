"""PostgreSQL data source implementation."""

from typing import List, Dict, Any, Optional
import psycopg2
import logging

from ..catalog.dialects import PostgreSQLDialect
from ..catalog.metadata import catalog_cursor, run_query
from ..finders.base import KeyFinder
from .base import DataSource

logger = logging.getLogger(__name__)


class PostgreSQLDataSource(DataSource):
    """PostgreSQL data source connector.

    Holds a single autocommit connection; key discovery only reads the
    catalog, so a failed query never leaves a transaction aborted.
    """

    dialect = PostgreSQLDialect()

    def __init__(
        self,
        name: str,
        config: Dict[str, Any],
        key_finder: Optional[KeyFinder] = None,
    ):
        """Initialize PostgreSQL data source.

        Config should include:
            - host: Database host
            - port: Database port (default: 5432)
            - database: Database name
            - user: Username
            - password: Password
            - connect_timeout: Seconds to wait for a connection (optional)
        """
        super().__init__(name, config, key_finder)

    def connect(self) -> None:
        """Establish connection to PostgreSQL."""
        try:
            logger.info(
                f"Connecting to PostgreSQL database '{self.config['database']}' at {self.config['host']}"
            )
            connect_args = {
                "host": self.config["host"],
                "port": self.config.get("port", 5432),
                "dbname": self.config["database"],
                "user": self.config["user"],
                "password": self.config["password"],
            }
            if "connect_timeout" in self.config:
                connect_args["connect_timeout"] = self.config["connect_timeout"]
            self.connection = psycopg2.connect(**connect_args)
            self.connection.autocommit = True
            self._connected = True
            logger.info(f"Successfully connected to PostgreSQL: {self.name}")
        except psycopg2.Error as e:
            logger.error(f"Failed to connect to PostgreSQL {self.name}: {e}")
            raise ConnectionError(f"PostgreSQL connection failed: {e}") from e

    def disconnect(self) -> None:
        """Close the connection."""
        if self.connection:
            self.connection.close()
            logger.info(f"Disconnected from PostgreSQL: {self.name}")
            self.connection = None
            self._connected = False

    def list_tables(self, schema: Optional[str] = None) -> List[str]:
        """List base tables in a schema."""
        self.ensure_connected()
        if schema is None:
            sql = """
                SELECT table_name
                FROM information_schema.tables
                WHERE table_schema = current_schema() AND table_type = 'BASE TABLE'
                ORDER BY table_name
            """
            params = []
        else:
            sql = """
                SELECT table_name
                FROM information_schema.tables
                WHERE table_schema = %s AND table_type = 'BASE TABLE'
                ORDER BY table_name
            """
            params = [schema]

        with catalog_cursor(self.connection) as cursor:
            rows = run_query(cursor, self.dialect, sql, params)
        tables = []
        for row in rows:
            tables.append(row[0])
        return tables
