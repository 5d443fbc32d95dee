"""Base data source interface."""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, Union

from ..catalog.dialects import CatalogDialect
from ..finders.base import KeyFinder
from ..finders.factory import default_key_finder
from ..keys.model import NoKeyFound, ResolvedKey


class DataSource(ABC):
    """Abstract base class for data sources.

    A data source owns one connection and the catalog dialect that matches
    it, and resolves table keys through its key finder.
    """

    dialect: CatalogDialect

    def __init__(
        self,
        name: str,
        config: Dict[str, Any],
        key_finder: Optional[KeyFinder] = None,
    ):
        """Initialize data source.

        Args:
            name: Unique name for this data source
            config: Configuration dictionary
            key_finder: Finder chain, defaults to default_key_finder()
        """
        self.name = name
        self.config = config
        self.connection = None
        self._connected = False
        self.key_finder = key_finder or default_key_finder()

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to the data source."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the data source."""
        pass

    @abstractmethod
    def list_tables(self, schema: Optional[str] = None) -> List[str]:
        """List all tables in a schema.

        Args:
            schema: Schema name, or None for the current schema

        Returns:
            List of table names
        """
        pass

    def find_primary_key(
        self, schema: Optional[str], table: str
    ) -> Union[ResolvedKey, NoKeyFound]:
        """Resolve the key of a table.

        Args:
            schema: Schema name, or None for the current schema
            table: Table name

        Returns:
            ResolvedKey, or NO_KEY if no strategy found one
        """
        self.ensure_connected()
        return self.key_finder.find_key(self.connection, self.dialect, schema, table)

    def is_connected(self) -> bool:
        return self._connected

    def ensure_connected(self) -> None:
        """Ensure data source is connected.

        Raises:
            ConnectionError: If connection cannot be established
        """
        if not self.is_connected():
            self.connect()
            self._connected = True

    def __enter__(self):
        """Context manager entry."""
        self.ensure_connected()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()
        self._connected = False
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"
