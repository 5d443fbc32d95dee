"""Semantic type tags for catalog-declared column types."""

import re
from enum import Enum

from .errors import ClassificationFailure


class DataType(Enum):
    """SQL data types."""

    INTEGER = "INTEGER"
    SMALLINT = "SMALLINT"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"
    VARCHAR = "VARCHAR"
    TEXT = "TEXT"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    UUID = "UUID"
    BINARY = "BINARY"
    INTERVAL = "INTERVAL"
    ARRAY = "ARRAY"


_TYPE_NAMES = {
    "INTEGER": DataType.INTEGER,
    "INT": DataType.INTEGER,
    "INT4": DataType.INTEGER,
    "SERIAL": DataType.INTEGER,
    "UINTEGER": DataType.INTEGER,
    "SMALLINT": DataType.SMALLINT,
    "INT2": DataType.SMALLINT,
    "TINYINT": DataType.SMALLINT,
    "BYTEINT": DataType.SMALLINT,
    "USMALLINT": DataType.SMALLINT,
    "UTINYINT": DataType.SMALLINT,
    "BIGINT": DataType.BIGINT,
    "INT8": DataType.BIGINT,
    "BIGSERIAL": DataType.BIGINT,
    "HUGEINT": DataType.BIGINT,
    "UBIGINT": DataType.BIGINT,
    "UHUGEINT": DataType.BIGINT,
    "REAL": DataType.FLOAT,
    "FLOAT4": DataType.FLOAT,
    "FLOAT": DataType.FLOAT,
    "DOUBLE": DataType.DOUBLE,
    "DOUBLE PRECISION": DataType.DOUBLE,
    "FLOAT8": DataType.DOUBLE,
    "DECIMAL": DataType.DECIMAL,
    "NUMERIC": DataType.DECIMAL,
    "NUMBER": DataType.DECIMAL,
    "MONEY": DataType.DECIMAL,
    "VARCHAR": DataType.VARCHAR,
    "CHARACTER VARYING": DataType.VARCHAR,
    "NVARCHAR": DataType.VARCHAR,
    "STRING": DataType.VARCHAR,
    # Enums, domains and extension types such as citext
    "ENUM": DataType.VARCHAR,
    "USER-DEFINED": DataType.VARCHAR,
    "INET": DataType.VARCHAR,
    "CIDR": DataType.VARCHAR,
    "MACADDR": DataType.VARCHAR,
    "CHAR": DataType.TEXT,
    "CHARACTER": DataType.TEXT,
    "BPCHAR": DataType.TEXT,
    "TEXT": DataType.TEXT,
    "CLOB": DataType.TEXT,
    "JSON": DataType.TEXT,
    "JSONB": DataType.TEXT,
    "BOOLEAN": DataType.BOOLEAN,
    "BOOL": DataType.BOOLEAN,
    "DATE": DataType.DATE,
    "TIME": DataType.TIME,
    "TIME WITHOUT TIME ZONE": DataType.TIME,
    "TIME WITH TIME ZONE": DataType.TIME,
    "TIMETZ": DataType.TIME,
    "TIMESTAMP": DataType.TIMESTAMP,
    "TIMESTAMP WITHOUT TIME ZONE": DataType.TIMESTAMP,
    "TIMESTAMP WITH TIME ZONE": DataType.TIMESTAMP,
    "TIMESTAMPTZ": DataType.TIMESTAMP,
    "DATETIME": DataType.TIMESTAMP,
    "TIMESTAMP_S": DataType.TIMESTAMP,
    "TIMESTAMP_MS": DataType.TIMESTAMP,
    "TIMESTAMP_NS": DataType.TIMESTAMP,
    "TIMESTAMP_US": DataType.TIMESTAMP,
    "UUID": DataType.UUID,
    "BLOB": DataType.BINARY,
    "BYTEA": DataType.BINARY,
    "BINARY": DataType.BINARY,
    "VARBINARY": DataType.BINARY,
    "BYTE": DataType.BINARY,
    "VARBYTE": DataType.BINARY,
    "INTERVAL": DataType.INTERVAL,
    "ARRAY": DataType.ARRAY,
}


def map_type(type_str: str) -> DataType:
    """Map a catalog type name to a DataType.

    Length, precision and scale arguments are ignored, so ``DECIMAL(18,3)``
    and ``VARCHAR(20)`` map like their bare names. DuckDB list types such
    as ``INTEGER[]`` map to ARRAY.

    Args:
        type_str: Type name as reported by the catalog

    Returns:
        Mapped DataType

    Raises:
        ClassificationFailure: If the type has no mapping
    """
    if not type_str:
        raise ClassificationFailure("Column has no declared type")

    base = re.sub(r"\(.*?\)", "", type_str).upper()
    base = " ".join(base.split())
    if re.search(r"\[\d*\]$", base):
        return DataType.ARRAY
    data_type = _TYPE_NAMES.get(base)
    if data_type is None:
        raise ClassificationFailure(f"Unsupported column type: {type_str}")
    return data_type
