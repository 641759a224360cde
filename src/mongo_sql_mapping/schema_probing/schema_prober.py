"""Collection schema probing service."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Protocol

from mongo_sql_mapping.configuration.runtime_settings import ConnectorOptions
from mongo_sql_mapping.type_mapping.type_mapper import native_tag_of, native_type_from_name
from mongo_sql_mapping.type_mapping.type_models import NativeType

from .probe_models import STREAM_DOCUMENT_PREFIX, SYNTHETIC_STREAM_FIELDS, NativeField
from .store_connection import StoreConnection, StoreConnectionError, StoreConnector

logger = logging.getLogger(__name__)


class SchemaNotFoundError(Exception):
    """Raised when the mapped collection does not exist."""


class EmptySchemaError(Exception):
    """Raised when no schema can be inferred for an existing collection."""


class ProbingStrategy(Protocol):  # pylint: disable=too-few-public-methods
    """One source of collection fields, tried in priority order."""

    name: str

    def discover(
        self,
        connection: StoreConnection,
        collection_name: str,
        collection_info: Mapping[str, Any],
    ) -> list[NativeField] | None:
        """Return the discovered fields, or None when the strategy does not apply."""
        ...


class DeclaredSchemaStrategy:  # pylint: disable=too-few-public-methods
    """Reads the top-level properties of the collection's `$jsonSchema` validator."""

    name = "declared-schema"

    def discover(
        self,
        connection: StoreConnection,
        collection_name: str,
        collection_info: Mapping[str, Any],
    ) -> list[NativeField] | None:
        properties = _get_ignoring_nulls(
            collection_info, "options", "validator", "$jsonSchema", "properties"
        )
        if not properties:
            return None
        return [
            NativeField(path=str(key), native_type=_declared_native_type(definition))
            for key, definition in properties.items()
        ]


class SamplingStrategy:  # pylint: disable=too-few-public-methods
    """Infers field types from one stored document."""

    name = "sampling"

    def __init__(self, sample_size: int = 1) -> None:
        self._sample_size = sample_size

    def discover(
        self,
        connection: StoreConnection,
        collection_name: str,
        collection_info: Mapping[str, Any],
    ) -> list[NativeField] | None:
        samples = connection.sample(collection_name, self._sample_size)
        if not samples:
            raise EmptySchemaError(
                f"Cannot infer schema of collection {collection_name}: no records found"
            )
        return [
            NativeField(path=str(key), native_type=native_tag_of(value))
            for key, value in samples[0].items()
            if value is not None
        ]


DEFAULT_STRATEGIES: tuple[ProbingStrategy, ...] = (DeclaredSchemaStrategy(), SamplingStrategy())


class SchemaProber:
    """Discovers field paths and native types of a collection.

    Strategies are tried in order and the first one that applies wins; results of
    different strategies are never merged.
    """

    def __init__(
        self,
        connector: StoreConnector,
        strategies: Sequence[ProbingStrategy] | None = None,
    ) -> None:
        self._connector = connector
        self._strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    def probe(
        self, collection_name: str, options: ConnectorOptions, stream: bool
    ) -> dict[str, NativeType]:
        """Return discovered field paths mapped to native types, in discovery order.

        In stream mode paths are nested under the change event's `fullDocument` and
        the `operationType` and `resumeToken` event fields are appended.

        Raises:
          StoreConnectionError: If the store cannot be reached.
          SchemaNotFoundError: If the collection does not exist.
          EmptySchemaError: If the collection has no validator and no documents.
          UnsupportedNativeTypeError: If a declared or sampled type is unknown.
        """
        with _scoped_connection(self._connector, options) as connection:
            collection_info = _find_collection(connection, collection_name)
            fields = self._discover(connection, collection_name, collection_info)

        discovered: dict[str, NativeType] = {}
        for field in fields:
            path = STREAM_DOCUMENT_PREFIX + field.path if stream else field.path
            discovered[path] = field.native_type
        if stream:
            for synthetic in SYNTHETIC_STREAM_FIELDS:
                discovered[synthetic.path] = synthetic.native_type

        logger.info(
            "Discovered %d fields in collection %s (stream=%s)",
            len(discovered),
            collection_name,
            stream,
        )
        return discovered

    def _discover(
        self,
        connection: StoreConnection,
        collection_name: str,
        collection_info: Mapping[str, Any],
    ) -> list[NativeField]:
        for strategy in self._strategies:
            fields = strategy.discover(connection, collection_name, collection_info)
            if fields is not None:
                logger.debug(
                    "Schema of collection %s resolved by %s strategy", collection_name, strategy.name
                )
                return fields
        raise EmptySchemaError(f"Cannot infer schema of collection {collection_name}")


@contextmanager
def _scoped_connection(
    connector: StoreConnector, options: ConnectorOptions
) -> Iterator[StoreConnection]:
    connection = connector.open_connection(options)
    try:
        yield connection
    finally:
        try:
            connection.close()
        except StoreConnectionError as exc:
            logger.debug("Closing store connection failed: %s", exc)


def _find_collection(connection: StoreConnection, collection_name: str) -> Mapping[str, Any]:
    collections = connection.list_collections({"name": collection_name})
    if not collections:
        raise SchemaNotFoundError(f"Collection {collection_name} was not found")
    return collections[0]


def _get_ignoring_nulls(document: Mapping[str, Any], *keys: str) -> Mapping[str, Any] | None:
    current: Any = document
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current if isinstance(current, Mapping) else None


def _declared_native_type(definition: Any) -> NativeType:
    if not isinstance(definition, Mapping):
        return native_type_from_name(definition)
    if "bsonType" in definition:
        return native_type_from_name(_first_non_null(definition["bsonType"]))
    return native_type_from_name(_first_non_null(definition.get("type")), json_type=True)


def _first_non_null(declared: Any) -> Any:
    if isinstance(declared, list):
        # Nullable properties are declared as ["<type>", "null"].
        non_null = [name for name in declared if name != "null"]
        return non_null[0] if non_null else "null"
    return declared
