"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from mongo_sql_mapping.type_mapping.type_models import SqlType

from .runtime_settings import (
    CONNECTION_STRING_OPTION,
    DATA_CONNECTION_REF_OPTION,
    DATABASE_NAME_OPTION,
    DEFAULT_TIMEOUT_MS,
    PK_COLUMN_OPTION,
    STREAM_MODE_OPTION,
    Configuration,
    ConnectorOptions,
    UserField,
)


class ConfigurationError(Exception):
    """Raised when connector options or the configuration file are invalid."""


def build_connector_options(raw: Any) -> ConnectorOptions:
    """Validate a raw connector options mapping.

    Unknown keys are ignored and the given mapping is never modified.

    Raises:
      ConfigurationError: If a recognized option is malformed, or if not exactly one
        of `connectionString` and `dataConnectionRef` is set.
    """
    if not isinstance(raw, Mapping):
        raise ConfigurationError("Connector options must be a mapping.")

    connection_string = _optional_string(
        raw.get(CONNECTION_STRING_OPTION), CONNECTION_STRING_OPTION
    )
    data_connection_ref = _optional_string(
        raw.get(DATA_CONNECTION_REF_OPTION), DATA_CONNECTION_REF_OPTION
    )
    if connection_string and data_connection_ref:
        raise ConfigurationError(
            f"Only one of {CONNECTION_STRING_OPTION} and {DATA_CONNECTION_REF_OPTION} may be set."
        )
    if not connection_string and not data_connection_ref:
        raise ConfigurationError(
            f"Either {CONNECTION_STRING_OPTION} or {DATA_CONNECTION_REF_OPTION} is required."
        )

    return ConnectorOptions(
        connection_string=connection_string,
        data_connection_ref=data_connection_ref,
        database_name=_optional_string(raw.get(DATABASE_NAME_OPTION), DATABASE_NAME_OPTION),
        stream_mode=_parse_bool(raw.get(STREAM_MODE_OPTION, False), STREAM_MODE_OPTION),
        primary_key_column=_optional_string(raw.get(PK_COLUMN_OPTION), PK_COLUMN_OPTION),
    )


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    connector = build_connector_options(_require_mapping(parsed.get("connector"), "connector"))
    collection = _optional_string(parsed.get("collection"), "collection")
    data_connections = _parse_data_connections_section(parsed.get("data_connections"))
    timeout_ms = _parse_store_section(parsed.get("store"))
    user_fields = _parse_fields_section(parsed.get("fields"))

    if connector.data_connection_ref and connector.data_connection_ref not in data_connections:
        raise ConfigurationError(
            f"{DATA_CONNECTION_REF_OPTION} '{connector.data_connection_ref}' "
            "is not defined in data_connections."
        )

    return Configuration(
        path=path,
        connector=connector,
        collection=collection,
        data_connections=data_connections,
        timeout_ms=timeout_ms,
        user_fields=user_fields,
    )


def _parse_data_connections_section(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    section = _require_mapping(value, "data_connections")
    data_connections: dict[str, str] = {}
    for name, connection_string in section.items():
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("data_connections names must be non-empty strings.")
        data_connections[name.strip()] = _require_non_empty_string(
            connection_string, f"data_connections.{name}"
        )
    return data_connections


def _parse_store_section(value: Any) -> int:
    if value is None:
        return DEFAULT_TIMEOUT_MS
    section = _require_mapping(value, "store")
    return _require_positive_int(section.get("timeout_ms", DEFAULT_TIMEOUT_MS), "store.timeout_ms")


def _parse_fields_section(value: Any) -> tuple[UserField, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError("fields must be a list of field definitions.")

    user_fields: list[UserField] = []
    seen_names: set[str] = set()
    for index, entry in enumerate(value):
        label = f"fields[{index}]"
        definition = _require_mapping(entry, label)
        name = _require_non_empty_string(definition.get("name"), f"{label}.name")
        type_name = _require_non_empty_string(definition.get("type"), f"{label}.type")
        try:
            sql_type = SqlType.parse(type_name)
        except ValueError as exc:
            raise ConfigurationError(f"{label}.type: {exc}") from exc
        external_name = _optional_string(definition.get("external_name"), f"{label}.external_name")
        if name in seen_names:
            raise ConfigurationError(f"Duplicate field name in fields: {name}")
        seen_names.add(name)
        user_fields.append(UserField(name=name, sql_type=sql_type, external_name=external_name))
    return tuple(user_fields)


def _parse_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ConfigurationError(f"{field_name} must be a boolean.")


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
