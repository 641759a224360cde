"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from mongo_sql_mapping.type_mapping.type_models import SqlType

CONNECTION_STRING_OPTION = "connectionString"
DATA_CONNECTION_REF_OPTION = "dataConnectionRef"
DATABASE_NAME_OPTION = "database"
STREAM_MODE_OPTION = "streamMode"
PK_COLUMN_OPTION = "idColumn"

DEFAULT_TIMEOUT_MS = 30_000


@dataclass(frozen=True)
class ConnectorOptions:
    """Validated connector options of one mapping."""

    connection_string: str | None = None
    data_connection_ref: str | None = None
    database_name: str | None = None
    stream_mode: bool = False
    primary_key_column: str | None = None


@dataclass(frozen=True)
class UserField:
    """Column declared by the user in an explicit mapping."""

    name: str
    sql_type: SqlType
    external_name: str | None = None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    connector: ConnectorOptions
    collection: str | None
    data_connections: Mapping[str, str]
    timeout_ms: int
    user_fields: tuple[UserField, ...]
