"""Defines the command-line interface for the pysysctl application.

This module uses the `click` library to expose the parser, the schema
validator and the hierarchy renderer. Configuration documents are read from a
file path or from standard input when the path is `-`.
"""
import json
import logging
import sys
from typing import IO, Dict, NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .core.config import Config
from .core.errors import HierarchyError, ParseError, SchemaLoadError, ValidationError
from .core.parser import parse_stream
from .core.schema import Schema
from .core.store import ConfigStore
from .core.validator import validate
from .utils.output import OUTPUT_FORMATS, render

# Human-readable messages go through rich; structured output uses click.echo.
console = Console(emoji=True, highlight=False, soft_wrap=True)
err_console = Console(stderr=True, emoji=True, highlight=False, soft_wrap=True)

logger = logging.getLogger(__name__)


class AliasedGroup(click.Group):
    """A click Group that accepts short aliases and any letter case for commands."""

    ALIASES: Dict[str, str] = {
        "p": "parse",
        "v": "validate",
    }

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        name = cmd_name.lower()
        return super().get_command(ctx, self.ALIASES.get(name, name))


def _apply_settings(config: Config) -> None:
    """Applies the console and logging settings from the loaded configuration."""
    if not config.get("colors", True):
        console.no_color = True
        err_console.no_color = True
    # The --verbose/--debug flags already configured the root logger.
    if config.get("verbose", False) and logging.getLogger().getEffectiveLevel() > logging.INFO:
        logging.getLogger("pysysctl").setLevel(logging.INFO)


def _fail(message: str) -> NoReturn:
    err_console.print(message)
    sys.exit(1)


def _load_store(source: IO[str], config: Config) -> ConfigStore:
    """Parses a configuration source, exiting with a message on failure."""
    try:
        return parse_stream(source, config.comment_prefixes)
    except ParseError as e:
        _fail(f"[red]Parse error at line {e.line_number}: {escape(e.message)}[/red]")
    except UnicodeDecodeError as e:
        name = getattr(source, "name", "input")
        _fail(f"[red]Could not decode {escape(name)} as UTF-8: {escape(str(e))}[/red]")


def _load_schema(schema_path: str) -> Schema:
    """Loads a schema file, exiting with a message on failure."""
    try:
        return Schema.from_file(schema_path)
    except SchemaLoadError as e:
        _fail(f"[red]Schema error: {escape(str(e))}[/red]")
    except OSError as e:
        _fail(f"[red]Could not read schema file {escape(schema_path)}: {escape(str(e))}[/red]")


def _run_validation(store: ConfigStore, schema_path: str) -> None:
    """Validates a store against a schema file and reports the outcome.

    Every violation is listed before exiting with a non-zero status.
    """
    console.print(f"Loading schema: {escape(schema_path)}")
    schema = _load_schema(schema_path)
    console.print("Validating settings against schema...")
    try:
        validate(store, schema)
    except ValidationError as e:
        table = Table(title=f"Schema validation failed ({len(e.errors)} error(s))")
        table.add_column("Key", style="cyan")
        table.add_column("Problem")
        for error in e.errors:
            table.add_row(escape(error.field), escape(error.describe()))
        err_console.print(table)
        _fail(f"[red]❌ Schema validation error: {escape(str(e))}[/red]")
    console.print("[green]✅ Schema validation passed![/green]")


@click.group(cls=AliasedGroup, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="pysysctl")
@click.option("--verbose", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
def main(verbose: bool, debug: bool) -> None:
    """Parse, validate and convert sysctl-style configuration files.

    Files hold one `key = value` assignment per line. Lines starting with
    `#` or `;` are comments. Dotted keys such as `net.ipv4.ip_forward` become
    nested objects in structured output.
    """
    log_level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=log_level, format='%(asctime)s - %(levelname)s - %(message)s')
    logger.debug("Debug mode enabled.")


@main.command(name="parse")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--schema", "-s", "schema_path", type=click.Path(exists=True, dir_okay=False), help="Path to a schema file to validate against.")
@click.option("--format", "-f", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None, help="Structured output format.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a custom settings file.")
def parse_command(source: IO[str], schema_path: Optional[str], output_format: Optional[str], config_path: Optional[str]) -> None:
    """Parse SOURCE and print its settings as structured data.

    SOURCE is a file path, or `-` to read standard input. With --schema the
    settings are validated first, and nothing is printed if validation fails.
    """
    config_obj = Config(config_path=config_path)
    _apply_settings(config_obj)
    store = _load_store(source, config_obj)

    if schema_path:
        _run_validation(store, schema_path)

    try:
        tree = store.to_hierarchy()
    except HierarchyError as e:
        _fail(f"[red]Structure error: {escape(str(e))}[/red]")

    console.print(f"Loaded {len(store)} setting(s)\n")
    for key, value in store.items():
        console.print(f"{key} = {value}", markup=False, emoji=False)

    fmt = output_format or config_obj.get("output.format", "json")
    try:
        rendered = render(tree, fmt, config_obj.get("output.indent", 2))
    except ValueError as e:
        _fail(f"[red]{escape(str(e))}[/red]")
    console.print(f"\n{fmt.upper()}:")
    click.echo(rendered)


@main.command(name="validate")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--schema", "-s", "schema_path", type=click.Path(exists=True, dir_okay=False), required=True, help="Path to the schema file.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a custom settings file.")
def validate_command(source: IO[str], schema_path: str, config_path: Optional[str]) -> None:
    """Validate SOURCE against a schema without printing its settings."""
    config_obj = Config(config_path=config_path)
    _apply_settings(config_obj)
    store = _load_store(source, config_obj)
    _run_validation(store, schema_path)


@main.command(name="get")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.argument("key", type=str)
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a custom settings file.")
def get_command(source: IO[str], key: str, config_path: Optional[str]) -> None:
    """Print the value of KEY from SOURCE.

    Exits with a non-zero status if the key is not set.
    """
    config_obj = Config(config_path=config_path)
    _apply_settings(config_obj)
    store = _load_store(source, config_obj)
    value = store.get(key)
    if value is None:
        _fail(f"[red]Key not found: {escape(key)}[/red]")
    click.echo(value)


@main.command()
@click.argument("action", type=click.Choice(['get', 'list']), required=True)
@click.argument("key", type=str, required=False)
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a custom settings file.")
def config(action: str, key: Optional[str], config_path: Optional[str]) -> None:
    """Show the pysysctl application settings.

    \b
    ACTION:
        get <key>       Get a setting value.
        list            List all current settings.
    """
    config_obj = Config(config_path=config_path)
    _apply_settings(config_obj)
    if action == "list":
        console.print(Panel(escape(json.dumps(config_obj.config, indent=2)), title="Current Settings"))
    elif action == "get":
        if not key:
            _fail("[red]Error: 'get' action requires a key.[/red]")
        value = config_obj.get(key)
        if value is None:
            _fail(f"[red]Unknown setting: {escape(key)}[/red]")
        click.echo(json.dumps(value))


if __name__ == "__main__":
    main()
