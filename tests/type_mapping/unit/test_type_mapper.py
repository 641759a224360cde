"""Type mapping service tests."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any

import pytest
from bson.binary import Binary
from bson.code import Code
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp
from mongo_sql_mapping.type_mapping import (
    NativeType,
    SqlType,
    UnsupportedNativeTypeError,
    is_compatible,
    native_tag_of,
    native_type_from_name,
    sql_type_of,
)

_SUPPORTED_MAPPING = {
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
    NativeType.OBJECT_ID: SqlType.OBJECT,
    NativeType.BINARY: SqlType.OBJECT,
    NativeType.REGEX: SqlType.OBJECT,
    NativeType.MIN_KEY: SqlType.OBJECT,
    NativeType.MAX_KEY: SqlType.OBJECT,
    NativeType.ARRAY: SqlType.OBJECT,
    NativeType.OBJECT: SqlType.JSON,
    NativeType.NUMBER: SqlType.DOUBLE,
}


@pytest.mark.parametrize(("native_type", "sql_type"), list(_SUPPORTED_MAPPING.items()))
def test_sql_type_of_follows_fixed_mapping_table(native_type: NativeType, sql_type: SqlType) -> None:
    assert sql_type_of(native_type) == sql_type
    assert sql_type_of(native_type) == sql_type_of(native_type)


@pytest.mark.parametrize(
    "native_type",
    [NativeType.UNDEFINED, NativeType.NULL, NativeType.DB_POINTER, NativeType.SYMBOL],
)
def test_sql_type_of_rejects_unsupported_native_types(native_type: NativeType) -> None:
    with pytest.raises(UnsupportedNativeTypeError, match=native_type.value) as exc_info:
        sql_type_of(native_type)

    assert exc_info.value.tag == native_type.value


def test_every_native_type_is_either_mapped_or_rejected() -> None:
    for native_type in NativeType:
        if native_type in _SUPPORTED_MAPPING:
            assert sql_type_of(native_type) == _SUPPORTED_MAPPING[native_type]
        else:
            with pytest.raises(UnsupportedNativeTypeError):
                sql_type_of(native_type)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, NativeType.BOOLEAN),
        (7, NativeType.INT32),
        (-(2**31), NativeType.INT32),
        (2**31, NativeType.INT64),
        (Int64(7), NativeType.INT64),
        (1.5, NativeType.DOUBLE),
        ("text", NativeType.STRING),
        (Code("function() {}"), NativeType.JAVASCRIPT),
        (Code("function() { return x; }", {"x": 1}), NativeType.JAVASCRIPT_WITH_SCOPE),
        (datetime(2024, 5, 1, tzinfo=UTC), NativeType.DATE),
        (Timestamp(1_700_000_000, 1), NativeType.TIMESTAMP),
        (Decimal128("12.50"), NativeType.DECIMAL128),
        (ObjectId("65f1a2b3c4d5e6f7a8b9c0d1"), NativeType.OBJECT_ID),
        (Binary(b"\x00\x01"), NativeType.BINARY),
        (b"raw", NativeType.BINARY),
        (Regex("^a"), NativeType.REGEX),
        (re.compile("^a"), NativeType.REGEX),
        (MinKey(), NativeType.MIN_KEY),
        (MaxKey(), NativeType.MAX_KEY),
        ([1, 2], NativeType.ARRAY),
        ({"nested": 1}, NativeType.OBJECT),
    ],
)
def test_native_tag_of_sampled_values(value: Any, expected: NativeType) -> None:
    assert native_tag_of(value) == expected


def test_native_tag_of_unknown_python_type_names_the_type() -> None:
    class Opaque:
        pass

    with pytest.raises(UnsupportedNativeTypeError, match="Opaque"):
        native_tag_of(Opaque())


def test_sampled_and_declared_tags_agree_for_the_same_value() -> None:
    samples = {
        "int": 3,
        "long": Int64(3),
        "double": 3.0,
        "bool": False,
        "string": "three",
        "date": datetime(2024, 1, 1, tzinfo=UTC),
        "objectId": ObjectId("65f1a2b3c4d5e6f7a8b9c0d1"),
        "decimal": Decimal128("3"),
        "object": {"a": 1},
        "array": [3],
    }

    for declared_name, value in samples.items():
        assert native_tag_of(value) == native_type_from_name(declared_name)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("int", NativeType.INT32),
        ("long", NativeType.INT64),
        ("objectId", NativeType.OBJECT_ID),
        ("javascriptWithScope", NativeType.JAVASCRIPT_WITH_SCOPE),
        ("number", NativeType.NUMBER),
        ("string", NativeType.STRING),
        ("object", NativeType.OBJECT),
    ],
)
def test_native_type_from_name_accepts_bson_aliases(
    name: str, expected: NativeType
) -> None:
    assert native_type_from_name(name) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("number", NativeType.NUMBER),
        ("boolean", NativeType.BOOLEAN),
        ("string", NativeType.STRING),
        ("array", NativeType.ARRAY),
    ],
)
def test_native_type_from_name_accepts_json_schema_type_keywords(
    name: str, expected: NativeType
) -> None:
    assert native_type_from_name(name, json_type=True) == expected


def test_number_alias_accepts_every_numeric_column() -> None:
    for sql_type in (SqlType.INTEGER, SqlType.BIGINT, SqlType.DECIMAL, SqlType.DOUBLE):
        assert is_compatible(sql_type, NativeType.NUMBER)
    assert is_compatible(SqlType.OBJECT, NativeType.NUMBER)
    assert not is_compatible(SqlType.VARCHAR, NativeType.NUMBER)
    assert not is_compatible(SqlType.BOOLEAN, NativeType.NUMBER)


@pytest.mark.parametrize("name", ["int32", "Int", "", None, 5, "boolean"])
def test_native_type_from_name_rejects_unknown_tags(name: Any) -> None:
    with pytest.raises(UnsupportedNativeTypeError) as exc_info:
        native_type_from_name(name)

    assert exc_info.value.tag == name


@pytest.mark.parametrize(
    ("sql_type", "native_type"),
    [
        (SqlType.INTEGER, NativeType.INT32),
        (SqlType.BIGINT, NativeType.INT32),
        (SqlType.DECIMAL, NativeType.INT64),
        (SqlType.DOUBLE, NativeType.DECIMAL128),
        (SqlType.TIMESTAMP, NativeType.DATE),
        (SqlType.TIMESTAMP_WITH_TIME_ZONE, NativeType.TIMESTAMP),
        (SqlType.OBJECT, NativeType.STRING),
        (SqlType.OBJECT, NativeType.OBJECT),
        (SqlType.VARCHAR, NativeType.JAVASCRIPT),
    ],
)
def test_is_compatible_accepts_same_type_and_widening(
    sql_type: SqlType, native_type: NativeType
) -> None:
    assert is_compatible(sql_type, native_type)


@pytest.mark.parametrize(
    ("sql_type", "native_type"),
    [
        (SqlType.INTEGER, NativeType.INT64),
        (SqlType.BIGINT, NativeType.DOUBLE),
        (SqlType.INTEGER, NativeType.DOUBLE),
        (SqlType.DATE, NativeType.TIMESTAMP),
        (SqlType.VARCHAR, NativeType.INT32),
        (SqlType.JSON, NativeType.ARRAY),
        (SqlType.BOOLEAN, NativeType.STRING),
    ],
)
def test_is_compatible_rejects_narrowing_and_unrelated_types(
    sql_type: SqlType, native_type: NativeType
) -> None:
    assert not is_compatible(sql_type, native_type)


def test_is_compatible_fails_for_unsupported_native_type() -> None:
    with pytest.raises(UnsupportedNativeTypeError):
        is_compatible(SqlType.OBJECT, NativeType.SYMBOL)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("integer", SqlType.INTEGER),
        ("INT", SqlType.INTEGER),
        ("varchar", SqlType.VARCHAR),
        ("text", SqlType.VARCHAR),
        (" bigint ", SqlType.BIGINT),
        ("double precision", SqlType.DOUBLE),
        ("float", SqlType.DOUBLE),
        ("timestamptz", SqlType.TIMESTAMP_WITH_TIME_ZONE),
        ("json", SqlType.JSON),
    ],
)
def test_sql_type_parse_accepts_names_and_aliases(name: str, expected: SqlType) -> None:
    assert SqlType.parse(name) == expected


@pytest.mark.parametrize("name", ["money", "smallint", "tinyint", "real"])
def test_sql_type_parse_rejects_unknown_names(name: str) -> None:
    with pytest.raises(ValueError, match=f"Unknown SQL type '{name}'"):
        SqlType.parse(name)


def test_every_sql_type_can_hold_some_native_type() -> None:
    supported = [native_type for native_type in NativeType if native_type in _SUPPORTED_MAPPING]

    for sql_type in SqlType:
        assert any(is_compatible(sql_type, native_type) for native_type in supported), sql_type
