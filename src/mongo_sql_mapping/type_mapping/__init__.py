"""Type mapping exports."""

from .type_mapper import (
    UnsupportedNativeTypeError,
    is_compatible,
    native_tag_of,
    native_type_from_name,
    sql_type_of,
)
from .type_models import NativeType, SqlType

__all__ = [
    "NativeType",
    "SqlType",
    "UnsupportedNativeTypeError",
    "is_compatible",
    "native_tag_of",
    "native_type_from_name",
    "sql_type_of",
]
