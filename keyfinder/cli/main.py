"""Command line interface for primary-key discovery."""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

import click

from ..config import Config, DataSourceConfig, KeyFinderConfig, load_config
from ..datasources.base import DataSource
from ..datasources.duckdb import DuckDBDataSource
from ..datasources.postgresql import PostgreSQLDataSource
from ..errors import KeyDiscoveryError
from ..finders.factory import default_key_finder
from ..keys.model import NoKeyFound, ResolvedKey
from ..utils.logging import setup_logging

DEMO_NOTE = "No config supplied; using in-memory DuckDB demo tables."


def split_table_ref(table_ref: str) -> Tuple[Optional[str], str]:
    """Split ``schema.table`` or ``table`` into its parts.

    Raises:
        ValueError: If the reference is empty or has more than two parts
    """
    parts = table_ref.split(".")
    if any(not part for part in parts) or len(parts) > 2:
        raise ValueError(f"Expected 'schema.table' or 'table', got '{table_ref}'")
    if len(parts) == 2:
        return parts[0], parts[1]
    return None, parts[0]


def format_key(table_ref: str, key: Union[ResolvedKey, NoKeyFound]) -> List[str]:
    """Render a resolved key as display lines."""
    if not key:
        return [f"{table_ref}: no key found (rows identified by all columns)"]
    lines = [f"{table_ref}:"]
    for column in key.columns:
        role = "auto-generated" if column.is_auto_generated else "externally supplied"
        lines.append(f"  {column.name} {column.declared_type.value} ({role})")
    return lines


def create_datasource(
    ds_config: DataSourceConfig, key_finder_config: Optional[KeyFinderConfig] = None
) -> DataSource:
    """Instantiate a data source and its finder chain from configuration.

    Raises:
        ValueError: If the data source type is unknown or the finder
            configuration does not fit its database
    """
    if ds_config.type == "duckdb":
        datasource_class = DuckDBDataSource
    elif ds_config.type in ("postgresql", "postgres"):
        datasource_class = PostgreSQLDataSource
    else:
        raise ValueError(f"Unsupported data source type: {ds_config.type}")
    key_finder = default_key_finder(key_finder_config, datasource_class.dialect)
    return datasource_class(ds_config.name, ds_config.config, key_finder)


def _select_datasource_config(config: Config, name: Optional[str]) -> DataSourceConfig:
    if not config.datasources:
        raise click.UsageError("Config defines no datasources")
    if name is None:
        if len(config.datasources) > 1:
            names = ", ".join(sorted(config.datasources))
            raise click.UsageError(f"Several datasources configured, pick one with -d: {names}")
        return next(iter(config.datasources.values()))
    if name not in config.datasources:
        raise click.UsageError(f"Unknown datasource: {name}")
    return config.datasources[name]


def _prepare_datasource(
    config_path: Optional[str], datasource_name: Optional[str], verbose: bool
) -> Tuple[DataSource, Optional[str]]:
    if config_path is None:
        setup_logging("DEBUG" if verbose else "WARNING")
        datasource = DuckDBDataSource(
            "demo", {"path": ":memory:", "read_only": False}, default_key_finder()
        )
        datasource.connect()
        seed_demo_data(datasource.connection)
        return datasource, DEMO_NOTE

    config = load_config(config_path)
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(level, config.logging.structured, config.logging.log_file)
    ds_config = _select_datasource_config(config, datasource_name)
    try:
        datasource = create_datasource(ds_config, config.key_finder)
    except ValueError as e:
        raise click.UsageError(str(e))
    datasource.connect()
    return datasource, None


def seed_demo_data(connection) -> None:
    """Create demo tables covering each discovery strategy."""
    statements = [
        'CREATE SCHEMA IF NOT EXISTS "SALES"',
        'CREATE SEQUENCE IF NOT EXISTS "SALES".order_seq',
        """
        CREATE TABLE IF NOT EXISTS "SALES"."ORDERS" (
            "ORDER_ID" INTEGER PRIMARY KEY DEFAULT nextval('SALES.order_seq'),
            "CUSTOMER" VARCHAR,
            "AMOUNT" DECIMAL(12, 2)
        )
        """,
        "CREATE SEQUENCE IF NOT EXISTS event_seq",
        """
        CREATE TABLE IF NOT EXISTS "EVENTS" (
            "EVENT_ID" BIGINT DEFAULT nextval('event_seq'),
            "PAYLOAD" VARCHAR
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS "LOOKUP" (
            "CODE" VARCHAR NOT NULL UNIQUE,
            "LABEL" VARCHAR
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS "SCRATCH" (
            "NOTE" VARCHAR,
            "CREATED" TIMESTAMP
        )
        """,
    ]
    for sql in statements:
        connection.execute(sql)


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Path to YAML config file. Defaults to an in-memory DuckDB demo.",
)
@click.option("-d", "--datasource", "datasource_name", help="Datasource name from the config.")
@click.option("-v", "--verbose", is_flag=True, help="Log every strategy attempt.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    datasource_name: Optional[str],
    verbose: bool,
) -> None:
    """Discover primary keys of database tables."""
    datasource, note = _prepare_datasource(config_path, datasource_name, verbose)
    ctx.call_on_close(datasource.disconnect)
    if note:
        click.echo(note)
    ctx.obj = datasource


@cli.command()
@click.argument("tables", nargs=-1, required=True)
@click.pass_obj
def resolve(datasource: DataSource, tables: Tuple[str, ...]) -> None:
    """Resolve the key of each TABLE (schema.table or table)."""
    failed = False
    for table_ref in tables:
        try:
            schema, table = split_table_ref(table_ref)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="TABLES")
        try:
            key = datasource.find_primary_key(schema, table)
        except KeyDiscoveryError as e:
            click.echo(f"{table_ref}: error: {e}", err=True)
            failed = True
            continue
        for line in format_key(table_ref, key):
            click.echo(line)
    if failed:
        raise SystemExit(1)


@cli.command()
@click.option("-s", "--schema", default=None, help="Schema to scan, defaults to the current one.")
@click.pass_obj
def tables(datasource: DataSource, schema: Optional[str]) -> None:
    """List the tables of a schema with their keys."""
    for table in datasource.list_tables(schema):
        table_ref = f"{schema}.{table}" if schema else table
        key = datasource.find_primary_key(schema, table)
        for line in format_key(table_ref, key):
            click.echo(line)
