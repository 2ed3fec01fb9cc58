import asyncio
import importlib
import importlib.util
import json
import logging
import sys
from pathlib import Path
from typing import Any

import rich_click as click
import yaml
from graphql import GraphQLEnumType, GraphQLInputObjectType, GraphQLInterfaceType, GraphQLObjectType, GraphQLUnionType
from pydantic import ValidationError
from rich.traceback import install

from semibricks import __version__, log
from semibricks.config import FactoryConfig, load_factory_config
from semibricks.errors import SemiBrickError
from semibricks.factory import SemiBrickFactory
from semibricks.schema import AssembledSchema


def load_target(target: str, config: FactoryConfig | None = None) -> AssembledSchema:
    """Resolve ``module:attribute`` or ``path/to/file.py:attribute`` into an assembled schema.

    The attribute may be a SemiBrickFactory, an AssembledSchema, or a callable returning
    either; callables receive ``config`` as a keyword argument when one is given.
    """
    module_ref, _, attribute = target.rpartition(":")
    if not module_ref or not attribute:
        raise click.BadParameter(f"'{target}' must look like 'module:attribute' or 'file.py:attribute'")

    if module_ref.endswith(".py"):
        path = Path(module_ref)
        if not path.is_file():
            raise click.BadParameter(f"File '{path}' does not exist")
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise click.BadParameter(f"Cannot import '{path}'")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    else:
        module = importlib.import_module(module_ref)

    try:
        value: Any = getattr(module, attribute)
    except AttributeError:
        raise click.BadParameter(f"'{module_ref}' has no attribute '{attribute}'") from None

    if callable(value) and not isinstance(value, SemiBrickFactory):
        value = value(config=config) if config is not None else value()
    elif config is not None:
        log.warning(f"Ignoring --config: '{target}' is not a builder callable, only those receive the config")

    if isinstance(value, SemiBrickFactory):
        return value.assemble_schema()
    if isinstance(value, AssembledSchema):
        return value
    raise click.BadParameter(f"'{target}' is a {type(value).__name__}, expected a SemiBrickFactory or AssembledSchema")


def describe_shape(graphql_type: Any) -> str:
    for cls, shape in (
        (GraphQLObjectType, "object"),
        (GraphQLInterfaceType, "interface"),
        (GraphQLUnionType, "union"),
        (GraphQLEnumType, "enum"),
        (GraphQLInputObjectType, "input_object"),
    ):
        if isinstance(graphql_type, cls):
            return shape
    return "scalar"


target_argument = click.argument("target", type=str)


output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    required=False,
    help="Output file",
)


@click.group(context_settings={"auto_envvar_prefix": "semibricks"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with the factory configuration, passed to factory builder callables",
)
@click.version_option(__version__)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_file: Path | None, config_path: Path | None) -> None:
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)

    try:
        ctx.obj = load_factory_config(config_path)
    except (OSError, TypeError, ValidationError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid factory config: {e}") from e


@click.group()
def schema() -> None:
    """Inspect the assembled schema of a factory."""
    pass


def assemble_or_exit(target: str, config: FactoryConfig | None) -> AssembledSchema:
    try:
        return load_target(target, config)
    except SemiBrickError as e:
        log.error(f"Schema assembly failed: {e}")
        sys.exit(1)


@schema.command(name="print")
@target_argument
@output_option
@click.pass_obj
def print_schema_command(config: FactoryConfig | None, target: str, output: Path | None) -> None:
    """Print the SDL of the schema assembled from TARGET."""
    assembled = assemble_or_exit(target, config)
    sdl = assembled.print_schema()

    if output:
        output.write_text(sdl + "\n")
        log.success(f"Schema written to {output}")
    else:
        click.echo(sdl)


@schema.command(name="types")
@target_argument
@click.pass_obj
def types_command(config: FactoryConfig | None, target: str) -> None:
    """List the named types of the schema assembled from TARGET."""
    assembled = assemble_or_exit(target, config)
    log.rule(f"Types of '{target}'")
    for graphql_type in assembled.types:
        log.key_value(graphql_type.name, describe_shape(graphql_type))
    for operation, fields in assembled.resolvers.items():
        log.key_value(operation, ", ".join(fields) or "-")


@click.command()
@target_argument
@click.option(
    "--query-file",
    "-q",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File containing the GraphQL operation",
)
@click.option("--query", "query_text", type=str, help="GraphQL operation text")
@click.option("--variables", type=str, help="Variables as a JSON object")
@click.option("--operation-name", type=str, help="Operation to run when the document holds several")
@output_option
@click.pass_obj
def query(
    config: FactoryConfig | None,
    target: str,
    query_file: Path | None,
    query_text: str | None,
    variables: str | None,
    operation_name: str | None,
    output: Path | None,
) -> None:
    """Execute a GraphQL operation against the schema assembled from TARGET."""
    if bool(query_file) == bool(query_text):
        raise click.UsageError("Pass exactly one of --query-file or --query")
    source = query_file.read_text() if query_file else query_text

    try:
        variable_values = json.loads(variables) if variables else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"--variables is not valid JSON: {e}") from e

    assembled = assemble_or_exit(target, config)
    result = asyncio.run(assembled.execute(source or "", variables=variable_values, operation_name=operation_name))

    response: dict[str, Any] = {"data": result.data}
    if result.errors:
        response["errors"] = [error.formatted for error in result.errors]
        for error in result.errors:
            log.error(error.message)

    if output:
        output.write_text(json.dumps(response, indent=2, default=str))
        log.success(f"Result written to {output}")
    else:
        click.echo(json.dumps(response, indent=2, default=str))

    if result.errors:
        sys.exit(1)


cli.add_command(schema)
cli.add_command(query)

if __name__ == "__main__":
    cli()
