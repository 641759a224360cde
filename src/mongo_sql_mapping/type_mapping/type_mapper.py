"""Native type to SQL type mapping service."""

from __future__ import annotations

import datetime
import decimal
import re
import uuid
from collections.abc import Mapping
from typing import Any

from bson.binary import Binary
from bson.code import Code
from bson.dbref import DBRef
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp

from .type_models import NativeType, SqlType

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class UnsupportedNativeTypeError(Exception):
    """Raised when a native type has no SQL counterpart."""

    def __init__(self, tag: object) -> None:
        super().__init__(f"BSON type {tag} is not yet supported")
        self.tag = tag


_SQL_TYPE_BY_NATIVE_TYPE: Mapping[NativeType, SqlType] = {
    NativeType.INT32: SqlType.INTEGER,
    NativeType.INT64: SqlType.BIGINT,
    NativeType.DOUBLE: SqlType.DOUBLE,
    NativeType.BOOLEAN: SqlType.BOOLEAN,
    NativeType.TIMESTAMP: SqlType.TIMESTAMP,
    NativeType.DATE: SqlType.DATE,
    NativeType.STRING: SqlType.VARCHAR,
    NativeType.JAVASCRIPT: SqlType.VARCHAR,
    NativeType.JAVASCRIPT_WITH_SCOPE: SqlType.VARCHAR,
    NativeType.DECIMAL128: SqlType.DECIMAL,
    NativeType.NUMBER: SqlType.DOUBLE,
    NativeType.OBJECT_ID: SqlType.OBJECT,
    NativeType.BINARY: SqlType.OBJECT,
    NativeType.MIN_KEY: SqlType.OBJECT,
    NativeType.MAX_KEY: SqlType.OBJECT,
    NativeType.ARRAY: SqlType.OBJECT,
    NativeType.REGEX: SqlType.OBJECT,
    NativeType.OBJECT: SqlType.JSON,
}

# Types each SQL type may widen into, in addition to OBJECT.
_WIDENINGS: Mapping[SqlType, frozenset[SqlType]] = {
    SqlType.INTEGER: frozenset({SqlType.BIGINT, SqlType.DECIMAL, SqlType.DOUBLE}),
    SqlType.BIGINT: frozenset({SqlType.DECIMAL, SqlType.DOUBLE}),
    SqlType.DECIMAL: frozenset({SqlType.DOUBLE}),
    SqlType.DATE: frozenset({SqlType.TIMESTAMP, SqlType.TIMESTAMP_WITH_TIME_ZONE}),
    SqlType.TIMESTAMP: frozenset({SqlType.TIMESTAMP_WITH_TIME_ZONE}),
}

# Native types standing for several stored types accept each of their columns.
_ACCEPTED_SQL_TYPES: Mapping[NativeType, frozenset[SqlType]] = {
    NativeType.NUMBER: frozenset(
        {SqlType.INTEGER, SqlType.BIGINT, SqlType.DECIMAL, SqlType.DOUBLE}
    ),
}

_JSON_SCHEMA_TYPE_NAMES: Mapping[str, NativeType] = {
    "boolean": NativeType.BOOLEAN,
}


def sql_type_of(native_type: NativeType) -> SqlType:
    """Return the default SQL type of a native type.

    Raises:
      UnsupportedNativeTypeError: If the native type has no SQL mapping.
    """
    try:
        return _SQL_TYPE_BY_NATIVE_TYPE[native_type]
    except KeyError:
        raise UnsupportedNativeTypeError(native_type.value) from None


def native_type_from_name(name: Any, json_type: bool = False) -> NativeType:
    """Parse a `bsonType` alias, or a JSON schema `type` keyword when `json_type` is set."""
    if not isinstance(name, str):
        raise UnsupportedNativeTypeError(name)
    if json_type and name in _JSON_SCHEMA_TYPE_NAMES:
        return _JSON_SCHEMA_TYPE_NAMES[name]
    try:
        return NativeType(name)
    except ValueError:
        raise UnsupportedNativeTypeError(name) from None


def native_tag_of(value: Any) -> NativeType:
    """Return the native type a decoded document value was stored as."""
    # Order matters: bool and Int64 are int subclasses, Code is a str subclass.
    if isinstance(value, bool):
        return NativeType.BOOLEAN
    if isinstance(value, Int64):
        return NativeType.INT64
    if isinstance(value, int):
        return NativeType.INT32 if _INT32_MIN <= value <= _INT32_MAX else NativeType.INT64
    if isinstance(value, float):
        return NativeType.DOUBLE
    if isinstance(value, Code):
        return NativeType.JAVASCRIPT if value.scope is None else NativeType.JAVASCRIPT_WITH_SCOPE
    if isinstance(value, str):
        return NativeType.STRING
    if isinstance(value, datetime.datetime):
        return NativeType.DATE
    if isinstance(value, Timestamp):
        return NativeType.TIMESTAMP
    if isinstance(value, Decimal128 | decimal.Decimal):
        return NativeType.DECIMAL128
    if isinstance(value, ObjectId):
        return NativeType.OBJECT_ID
    if isinstance(value, Binary | bytes | uuid.UUID):
        return NativeType.BINARY
    if isinstance(value, Regex | re.Pattern):
        return NativeType.REGEX
    if isinstance(value, MinKey):
        return NativeType.MIN_KEY
    if isinstance(value, MaxKey):
        return NativeType.MAX_KEY
    if isinstance(value, list | tuple):
        return NativeType.ARRAY
    if isinstance(value, Mapping | DBRef):
        return NativeType.OBJECT
    raise UnsupportedNativeTypeError(type(value).__name__)


def is_compatible(sql_type: SqlType, native_type: NativeType) -> bool:
    """Return whether a column of `sql_type` can hold values of `native_type`.

    The native type's default SQL type must equal `sql_type` or widen into it;
    the `number` alias also accepts every numeric column.
    """
    default_type = sql_type_of(native_type)
    if sql_type == default_type or sql_type == SqlType.OBJECT:
        return True
    if sql_type in _ACCEPTED_SQL_TYPES.get(native_type, frozenset()):
        return True
    return sql_type in _WIDENINGS.get(default_type, frozenset())
