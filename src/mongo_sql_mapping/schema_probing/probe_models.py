"""Schema probing entities."""

from __future__ import annotations

from dataclasses import dataclass

from mongo_sql_mapping.type_mapping.type_models import NativeType

STREAM_DOCUMENT_PREFIX = "fullDocument."
OPERATION_TYPE_FIELD = "operationType"
RESUME_TOKEN_FIELD = "resumeToken"
ID_FIELD = "_id"


@dataclass(frozen=True)
class NativeField:
    """Field discovered in the store, identified by its dotted path."""

    path: str
    native_type: NativeType


# Present in every change event regardless of the collection's documents.
SYNTHETIC_STREAM_FIELDS: tuple[NativeField, ...] = (
    NativeField(path=OPERATION_TYPE_FIELD, native_type=NativeType.STRING),
    NativeField(path=RESUME_TOKEN_FIELD, native_type=NativeType.STRING),
)
