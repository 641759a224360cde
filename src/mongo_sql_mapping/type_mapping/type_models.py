"""Native and SQL type entities."""

from __future__ import annotations

from enum import Enum


class NativeType(str, Enum):
    """BSON value type, named by MongoDB's type alias."""

    DOUBLE = "double"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    BINARY = "binData"
    UNDEFINED = "undefined"
    OBJECT_ID = "objectId"
    BOOLEAN = "bool"
    DATE = "date"
    NULL = "null"
    REGEX = "regex"
    DB_POINTER = "dbPointer"
    JAVASCRIPT = "javascript"
    SYMBOL = "symbol"
    JAVASCRIPT_WITH_SCOPE = "javascriptWithScope"
    INT32 = "int"
    TIMESTAMP = "timestamp"
    INT64 = "long"
    DECIMAL128 = "decimal"
    MIN_KEY = "minKey"
    MAX_KEY = "maxKey"
    # Declared-schema alias matching any numeric type; never sampled.
    NUMBER = "number"


class SqlType(str, Enum):
    """SQL column type assigned to a mapping field."""

    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    DECIMAL = "DECIMAL"
    DOUBLE = "DOUBLE"
    BOOLEAN = "BOOLEAN"
    VARCHAR = "VARCHAR"
    DATE = "DATE"
    TIMESTAMP = "TIMESTAMP"
    TIMESTAMP_WITH_TIME_ZONE = "TIMESTAMP_WITH_TIME_ZONE"
    OBJECT = "OBJECT"
    JSON = "JSON"

    @classmethod
    def parse(cls, name: str) -> SqlType:
        """Parse a SQL type name, accepting common aliases.

        Raises:
          ValueError: If the name is not a known SQL type.
        """
        normalized = name.strip().upper().replace(" ", "_")
        normalized = _SQL_TYPE_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown SQL type '{name}'. Valid types: {valid}") from None


_SQL_TYPE_ALIASES = {
    "INT": "INTEGER",
    "TEXT": "VARCHAR",
    "STRING": "VARCHAR",
    "FLOAT": "DOUBLE",
    "TIMESTAMPTZ": "TIMESTAMP_WITH_TIME_ZONE",
    "TIMESTAMP_WITH_TIMEZONE": "TIMESTAMP_WITH_TIME_ZONE",
    "DOUBLE_PRECISION": "DOUBLE",
}
