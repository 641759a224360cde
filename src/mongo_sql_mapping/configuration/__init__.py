"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, build_connector_options, load_configuration
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

__all__ = [
    "CONNECTION_STRING_OPTION",
    "DATA_CONNECTION_REF_OPTION",
    "DATABASE_NAME_OPTION",
    "PK_COLUMN_OPTION",
    "STREAM_MODE_OPTION",
    "Configuration",
    "ConnectorOptions",
    "UserField",
    "ConfigurationError",
    "build_connector_options",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_TIMEOUT_MS",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
