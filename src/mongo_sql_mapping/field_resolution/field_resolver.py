"""Mapping field resolution service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace

from mongo_sql_mapping.configuration.runtime_settings import ConnectorOptions, UserField
from mongo_sql_mapping.schema_probing.probe_models import (
    ID_FIELD,
    STREAM_DOCUMENT_PREFIX,
    SYNTHETIC_STREAM_FIELDS,
)
from mongo_sql_mapping.schema_probing.schema_prober import SchemaProber
from mongo_sql_mapping.schema_probing.store_connection import MongoStoreConnector, StoreConnector
from mongo_sql_mapping.type_mapping.type_mapper import is_compatible, sql_type_of
from mongo_sql_mapping.type_mapping.type_models import NativeType, SqlType

from .mapping_models import MappingField

logger = logging.getLogger(__name__)

PrimaryKeyChecker = Callable[[MappingField], bool]


class UnresolvedFieldError(Exception):
    """Raised when a user-declared field does not exist in the collection."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Could not resolve field with name {path}")
        self.path = path


class TypeMismatchError(Exception):
    """Raised when a declared SQL type cannot hold the field's native type."""

    def __init__(self, field_name: str, declared: SqlType, native: NativeType) -> None:
        super().__init__(
            f"Type {declared.value} of field {field_name} does not match db type "
            f"{sql_type_of(native).value} (BSON {native.value})"
        )
        self.field_name = field_name
        self.declared = declared
        self.native = native


class DuplicateFieldError(Exception):
    """Raised when user-declared fields collide on a column or a source path."""


def is_identifier_path(path: str, stream: bool) -> bool:
    """Return whether `path` is the document identifier, ignoring case."""
    identifier = STREAM_DOCUMENT_PREFIX + ID_FIELD if stream else ID_FIELD
    return path.casefold() == identifier.casefold()


def primary_key_checker(options: ConnectorOptions, stream: bool) -> PrimaryKeyChecker:
    """Build the predicate marking primary key columns.

    Change streams are always keyed by the document identifier. In batch mode the
    `idColumn` option names the source path of the key, otherwise the identifier
    is the key.
    """
    if stream:
        return lambda field: is_identifier_path(field.external_name, stream=True)
    if options.primary_key_column:
        key_path = options.primary_key_column.casefold()
        return lambda field: field.external_name.casefold() == key_path
    return lambda field: is_identifier_path(field.external_name, stream=False)


class FieldResolver:
    """Combines probed collection fields with the user's mapping."""

    def __init__(self, prober: SchemaProber) -> None:
        self._prober = prober

    def resolve_fields(
        self,
        collection_name: str,
        options: ConnectorOptions,
        user_fields: Sequence[UserField] = (),
        stream: bool | None = None,
    ) -> list[MappingField]:
        """Resolve the columns of a mapping over `collection_name`.

        Without user fields every discovered field becomes a column, in discovery
        order. Otherwise each user field is matched with the discovered field at its
        external name (or its name, nested under `fullDocument` in stream mode) and
        the columns keep the user's order. Stream mode always ends with the
        `operationType` and `resumeToken` columns.

        Args:
          collection_name: Name of the mapped collection.
          options: Validated connector options.
          user_fields: Columns declared by the user, possibly empty.
          stream: Resolve change events instead of documents; defaults to
            `options.stream_mode`.

        Returns:
          The resolved columns. No partial result is returned on failure.

        Raises:
          UnresolvedFieldError: If a user field has no discovered counterpart.
          TypeMismatchError: If a user field's type cannot hold the native type.
          DuplicateFieldError: If user fields collide.
          UnsupportedNativeTypeError: If a mapped native type has no SQL type.
        """
        stream_mode = options.stream_mode if stream is None else stream
        is_primary_key = primary_key_checker(options, stream_mode)
        discovered = self._prober.probe(collection_name, options, stream_mode)

        if user_fields:
            resolved = _map_user_fields(user_fields, discovered, stream_mode, is_primary_key)
        else:
            resolved = _map_discovered_fields(discovered, is_primary_key)

        logger.debug(
            "Resolved %d fields of collection %s (user_fields=%d, stream=%s)",
            len(resolved),
            collection_name,
            len(user_fields),
            stream_mode,
        )
        return resolved

    @staticmethod
    def is_identifier_path(path: str, stream: bool) -> bool:
        """Return whether `path` is the document identifier, ignoring case."""
        return is_identifier_path(path, stream)


def resolve_fields(
    collection_name: str,
    options: ConnectorOptions,
    user_fields: Sequence[UserField] = (),
    stream: bool | None = None,
    *,
    connector: StoreConnector | None = None,
    data_connections: Mapping[str, str] | None = None,
) -> list[MappingField]:
    """Resolve mapping fields, connecting with pymongo unless a connector is given.

    `data_connections` names the connection strings `dataConnectionRef` may point
    to; it is only used for the default pymongo connector.
    """
    prober = SchemaProber(connector or MongoStoreConnector(data_connections))
    return FieldResolver(prober).resolve_fields(collection_name, options, user_fields, stream)


def _map_discovered_fields(
    discovered: Mapping[str, NativeType], is_primary_key: PrimaryKeyChecker
) -> list[MappingField]:
    return [
        _with_primary_key(
            MappingField(name=path, sql_type=sql_type_of(native_type), external_name=path),
            is_primary_key,
        )
        for path, native_type in discovered.items()
    ]


def _map_user_fields(
    user_fields: Sequence[UserField],
    discovered: Mapping[str, NativeType],
    stream: bool,
    is_primary_key: PrimaryKeyChecker,
) -> list[MappingField]:
    synthetic_paths = {field.path for field in SYNTHETIC_STREAM_FIELDS} if stream else set()
    names_by_path: dict[str, str] = {}
    resolved: list[MappingField] = []

    for user_field in user_fields:
        path = _source_path(user_field, stream)
        native_type = None if path in synthetic_paths else discovered.get(path)
        if native_type is None:
            raise UnresolvedFieldError(path)
        if not is_compatible(user_field.sql_type, native_type):
            raise TypeMismatchError(user_field.name, user_field.sql_type, native_type)
        if path in names_by_path:
            raise DuplicateFieldError(
                f"Fields {names_by_path[path]} and {user_field.name} both map to {path}"
            )
        if user_field.name in synthetic_paths:
            raise DuplicateFieldError(
                f"Field name {user_field.name} is reserved for change stream events"
            )
        if user_field.name in names_by_path.values():
            raise DuplicateFieldError(f"Field name {user_field.name} is declared twice")
        names_by_path[path] = user_field.name
        resolved.append(
            _with_primary_key(
                MappingField(name=user_field.name, sql_type=user_field.sql_type, external_name=path),
                is_primary_key,
            )
        )

    if stream:
        resolved.extend(
            _map_discovered_fields(
                {field.path: field.native_type for field in SYNTHETIC_STREAM_FIELDS},
                is_primary_key,
            )
        )
    return resolved


def _source_path(user_field: UserField, stream: bool) -> str:
    if user_field.external_name is not None:
        return user_field.external_name
    return STREAM_DOCUMENT_PREFIX + user_field.name if stream else user_field.name


def _with_primary_key(field: MappingField, is_primary_key: PrimaryKeyChecker) -> MappingField:
    return replace(field, is_primary_key=is_primary_key(field))
