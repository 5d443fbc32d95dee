"""Key model and column classification."""

from .model import (
    ColumnRole,
    TableIdentifier,
    ColumnDescriptor,
    KeyColumn,
    ResolvedKey,
    NoKeyFound,
    NO_KEY,
    classify,
)

__all__ = [
    "ColumnRole",
    "TableIdentifier",
    "ColumnDescriptor",
    "KeyColumn",
    "ResolvedKey",
    "NoKeyFound",
    "NO_KEY",
    "classify",
]
