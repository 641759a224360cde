"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime

import click

from mongo_sql_mapping.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from mongo_sql_mapping.field_resolution import (
    DuplicateFieldError,
    FieldResolver,
    MappingField,
    TypeMismatchError,
    UnresolvedFieldError,
)
from mongo_sql_mapping.mapping_export import ResolutionMetadata, write_mapping_workbook
from mongo_sql_mapping.schema_probing import (
    EmptySchemaError,
    MongoStoreConnector,
    SchemaNotFoundError,
    SchemaProber,
    StoreConnectionError,
)
from mongo_sql_mapping.type_mapping import UnsupportedNativeTypeError

_RESOLUTION_ERRORS = (
    ConfigurationError,
    StoreConnectionError,
    SchemaNotFoundError,
    EmptySchemaError,
    UnresolvedFieldError,
    TypeMismatchError,
    DuplicateFieldError,
    UnsupportedNativeTypeError,
    OSError,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="mongo-sql-mapping")
def cli() -> None:
    """Resolve SQL mapping columns of MongoDB collections."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML mapping configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML mapping configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="resolve")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON mapping configuration file",
)
@click.option(
    "--collection",
    "collection_name",
    required=False,
    help="Collection to resolve, overriding the configured collection",
)
@click.option(
    "--mode",
    type=click.Choice(["batch", "stream"]),
    default=None,
    help="Resolve documents (batch) or change events (stream); defaults to connector.streamMode",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path of an Excel workbook listing the resolved fields",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution steps.")
def resolve(
    config_path: str,
    collection_name: str | None,
    mode: str | None,
    output_path: str | None,
    verbose: bool,
) -> None:
    """Resolve and print the columns of a mapping over a collection."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )
    try:
        configuration = load_configuration(config_path)
        collection = collection_name or configuration.collection
        if not collection:
            raise CliError("No collection given: use --collection or set collection in the config.")
        stream = configuration.connector.stream_mode if mode is None else mode == "stream"
        connector = MongoStoreConnector(
            configuration.data_connections, timeout_ms=configuration.timeout_ms
        )
        fields = FieldResolver(SchemaProber(connector)).resolve_fields(
            collection, configuration.connector, configuration.user_fields, stream
        )
        if output_path:
            write_mapping_workbook(
                fields,
                output_path,
                ResolutionMetadata(
                    collection=collection,
                    database=configuration.connector.database_name,
                    stream=stream,
                    resolved_at=datetime.now(UTC),
                ),
            )
    except _RESOLUTION_ERRORS as exc:
        raise CliError(str(exc)) from exc

    for field in fields:
        click.echo(_format_field(field))


def _format_field(field: MappingField) -> str:
    primary_key = "PK" if field.is_primary_key else ""
    return "\t".join((field.name, field.sql_type.value, field.external_name, primary_key)).rstrip()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
