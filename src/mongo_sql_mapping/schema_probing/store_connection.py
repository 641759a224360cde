"""MongoDB store connection service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from mongo_sql_mapping.configuration.runtime_settings import DEFAULT_TIMEOUT_MS, ConnectorOptions

logger = logging.getLogger(__name__)


class StoreConnectionError(Exception):
    """Raised when the document store cannot be reached or authenticated."""


class StoreConnection(Protocol):
    """Protocol implemented by both real and fake store connections."""

    def list_collections(self, name_filter: Mapping[str, Any]) -> list[Mapping[str, Any]]: ...

    def sample(self, collection_name: str, limit: int) -> list[Mapping[str, Any]]: ...

    def close(self) -> None: ...


class StoreConnector(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for factories opening one transient store connection."""

    def open_connection(self, options: ConnectorOptions) -> StoreConnection: ...


ClientFactory = Callable[..., Any]


class MongoStoreConnector:  # pylint: disable=too-few-public-methods
    """Store connector backed by pymongo."""

    def __init__(
        self,
        data_connections: Mapping[str, str] | None = None,
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._data_connections = dict(data_connections or {})
        self._timeout_ms = timeout_ms
        self._client_factory = client_factory or MongoClient

    def open_connection(self, options: ConnectorOptions) -> StoreConnection:
        connection_string = self._resolve_connection_string(options)
        try:
            client = self._client_factory(
                connection_string,
                serverSelectionTimeoutMS=self._timeout_ms,
                connectTimeoutMS=self._timeout_ms,
            )
        except PyMongoError as exc:
            raise StoreConnectionError(f"Cannot connect to MongoDB: {exc}") from exc

        try:
            if options.database_name:
                database = client.get_database(options.database_name)
            else:
                database = client.get_default_database()
        except PyMongoError as exc:
            client.close()
            raise StoreConnectionError(
                f"Cannot select MongoDB database, database was not provided: {exc}"
            ) from exc

        logger.debug("Opened MongoDB connection to database %s", database.name)
        return _MongoStoreConnection(client, database)

    def _resolve_connection_string(self, options: ConnectorOptions) -> str:
        if options.data_connection_ref:
            connection_string = self._data_connections.get(options.data_connection_ref)
            if connection_string is None:
                raise StoreConnectionError(
                    f"Data connection '{options.data_connection_ref}' is not defined."
                )
            return connection_string
        if not options.connection_string:
            raise StoreConnectionError(
                "Cannot connect to MongoDB, connectionString was not provided."
            )
        return options.connection_string


class _MongoStoreConnection:
    """Connection holding one MongoClient and the database of the mapping."""

    def __init__(self, client: Any, database: Any) -> None:
        self._client = client
        self._database = database

    def list_collections(self, name_filter: Mapping[str, Any]) -> list[Mapping[str, Any]]:
        try:
            return list(self._database.list_collections(filter=dict(name_filter)))
        except PyMongoError as exc:
            raise StoreConnectionError(f"Listing MongoDB collections failed: {exc}") from exc

    def sample(self, collection_name: str, limit: int) -> list[Mapping[str, Any]]:
        try:
            return list(self._database[collection_name].find().limit(limit))
        except PyMongoError as exc:
            raise StoreConnectionError(
                f"Sampling MongoDB collection {collection_name} failed: {exc}"
            ) from exc

    def close(self) -> None:
        try:
            self._client.close()
        except PyMongoError as exc:
            raise StoreConnectionError(f"Closing MongoDB client failed: {exc}") from exc
