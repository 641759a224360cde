"""Schema probing exports."""

from .probe_models import (
    ID_FIELD,
    OPERATION_TYPE_FIELD,
    RESUME_TOKEN_FIELD,
    STREAM_DOCUMENT_PREFIX,
    SYNTHETIC_STREAM_FIELDS,
    NativeField,
)
from .schema_prober import (
    DeclaredSchemaStrategy,
    EmptySchemaError,
    ProbingStrategy,
    SamplingStrategy,
    SchemaNotFoundError,
    SchemaProber,
)
from .store_connection import (
    MongoStoreConnector,
    StoreConnection,
    StoreConnectionError,
    StoreConnector,
)

__all__ = [
    "ID_FIELD",
    "OPERATION_TYPE_FIELD",
    "RESUME_TOKEN_FIELD",
    "STREAM_DOCUMENT_PREFIX",
    "SYNTHETIC_STREAM_FIELDS",
    "NativeField",
    "DeclaredSchemaStrategy",
    "EmptySchemaError",
    "ProbingStrategy",
    "SamplingStrategy",
    "SchemaNotFoundError",
    "SchemaProber",
    "MongoStoreConnector",
    "StoreConnection",
    "StoreConnectionError",
    "StoreConnector",
]
