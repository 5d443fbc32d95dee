"""Key descriptions produced by primary-key discovery."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..datatypes import DataType


class ColumnRole(Enum):
    """Who supplies the value of a key column."""

    AUTO_GENERATED = "auto_generated"  # assigned by the database, omit from inserts
    EXTERNALLY_SUPPLIED = "externally_supplied"


@dataclass(frozen=True)
class TableIdentifier:
    """Target relation of a key lookup."""

    table: str
    schema: Optional[str] = None

    def __post_init__(self):
        if not self.table:
            raise ValueError("Table name must be a non-empty string")

    def qualified_name(self) -> str:
        """Get schema-qualified table name."""
        if self.schema:
            return f"{self.schema}.{self.table}"
        return self.table

    def __repr__(self) -> str:
        return f"TableIdentifier({self.qualified_name()})"


@dataclass(frozen=True)
class ColumnDescriptor:
    """Column metadata read from the catalog."""

    name: str
    declared_type: DataType
    is_auto_increment: bool


def classify(descriptor: ColumnDescriptor) -> ColumnRole:
    """Classify a column by its auto-increment flag."""
    if descriptor.is_auto_increment:
        return ColumnRole.AUTO_GENERATED
    return ColumnRole.EXTERNALLY_SUPPLIED


@dataclass(frozen=True)
class KeyColumn:
    """A key column with its role."""

    descriptor: ColumnDescriptor
    role: ColumnRole

    def __post_init__(self):
        if self.role is not classify(self.descriptor):
            raise ValueError(
                f"Role {self.role.value} contradicts auto-increment flag "
                f"of column {self.descriptor.name}"
            )

    @classmethod
    def from_descriptor(cls, descriptor: ColumnDescriptor) -> "KeyColumn":
        return cls(descriptor=descriptor, role=classify(descriptor))

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def declared_type(self) -> DataType:
        return self.descriptor.declared_type

    @property
    def is_auto_generated(self) -> bool:
        return self.role is ColumnRole.AUTO_GENERATED

    def __repr__(self) -> str:
        if self.is_auto_generated:
            return f"AutoGenerated({self.name})"
        return f"ExternallySupplied({self.name})"


@dataclass(frozen=True)
class ResolvedKey:
    """Ordered key columns of a table.

    A resolved key always has at least one column; "no key" is expressed
    with the NO_KEY sentinel instead.
    """

    table_name: str
    columns: Tuple[KeyColumn, ...]

    found = True

    def __post_init__(self):
        # Accept any sequence but store a tuple so the key stays hashable
        object.__setattr__(self, "columns", tuple(self.columns))
        if not self.columns:
            raise ValueError(f"Key for {self.table_name} must have at least one column")
        seen = set()
        for column in self.columns:
            if column.name in seen:
                raise ValueError(
                    f"Duplicate key column {column.name} for {self.table_name}"
                )
            seen.add(column.name)

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    def get_column(self, name: str) -> Optional[KeyColumn]:
        """Get key column by name, case-insensitively."""
        for column in self.columns:
            if column.name.lower() == name.lower():
                return column
        return None

    def contains(self, name: str) -> bool:
        return self.get_column(name) is not None

    def is_auto_generated(self, name: str) -> bool:
        """Check whether a key column is assigned by the database.

        Raises:
            KeyError: If the column is not part of the key
        """
        column = self.get_column(name)
        if column is None:
            raise KeyError(f"{name} is not a key column of {self.table_name}")
        return column.is_auto_generated

    def __repr__(self) -> str:
        return f"ResolvedKey({self.table_name}, {list(self.columns)})"


class NoKeyFound:
    """Sentinel type for tables with no discoverable key."""

    found = False
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def contains(self, name: str) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_KEY"


NO_KEY = NoKeyFound()
