"""
Command-line interface for spec helpers.

This module provides a small Click CLI for inspecting how a dataset
expands into data groups before it is used in a test file, plus a
version command.
"""

import json
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from spechelpers.dataprovider import InvalidArgumentError, normalize_dataset
from spechelpers.models import DataGroup
from spechelpers.utils import configure_logging, debug_object, read_json_file

# Set up shared context for CLI commands
CONTEXT_SETTINGS = {
    'help_option_names': ['-h', '--help'],
    'auto_envvar_prefix': 'SPECHELPERS',
}


def _package_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "not installed"


def _groups_table(groups: List[DataGroup], source: str) -> Table:
    table = Table(title=f"Data groups for {source}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Group", style="cyan")
    table.add_column("Arguments")
    for index, group in enumerate(groups, start=1):
        table.add_row(str(index), group.label, ", ".join(repr(arg) for arg in group.args))
    return table


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="spec-helpers")
@click.option("--debug", is_flag=True, help="Enable debug mode with verbose output")
@click.option("--quiet", is_flag=True, help="Suppress all console output except errors")
@click.option("--log-file", help="Save logs to specified file")
@click.pass_context
def cli(ctx: click.Context, debug: bool, quiet: bool, log_file: Optional[str]) -> None:
    """
    Helpers for authoring data-driven browser tests.

    Preview how datasets expand into test groups.
    """
    ctx.ensure_object(dict)
    ctx.obj['DEBUG'] = debug
    ctx.obj['QUIET'] = quiet
    ctx.obj['LOG_FILE'] = log_file

    # Load environment variables from .env file
    load_dotenv()

    log_level = "debug" if debug else "info"
    if quiet:
        log_level = "error"
    # stdout carries command output only, e.g. preview --format json
    configure_logging(level=log_level, log_file=log_file, console=not quiet, stream=sys.stderr)


@cli.command("preview")
@click.argument("dataset_file", type=click.Path(dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def preview(ctx: click.Context, dataset_file: str, output_format: str) -> None:
    """
    Preview the data groups a dataset expands into.

    DATASET_FILE is a JSON file holding either an array of values or an
    object mapping names to a value or a list of arguments.

    \b
    Examples:
        spechelpers preview sizes.json
        spechelpers preview sizes.json --format json
    """
    debug = ctx.obj.get('DEBUG', False)
    logger = logging.getLogger(__name__)

    try:
        logger.info(f"Reading dataset from {dataset_file}")
        raw = read_json_file(dataset_file)
        debug_object(raw, "Dataset")

        named = normalize_dataset(raw)
        groups = [DataGroup(name=name, args=args) for name, args in named.items()]
        logger.info(f"Dataset expands into {len(groups)} data groups")

        if output_format == "json":
            click.echo(json.dumps([group.to_dict() for group in groups], indent=2, default=str))
        else:
            Console().print(_groups_table(groups, dataset_file))

    except (FileNotFoundError, PermissionError) as e:
        error_msg = f"File access problem: {str(e)}"
        logger.error(error_msg)
        click.echo(f"Error: {error_msg}", err=True)
        sys.exit(1)
    except json.JSONDecodeError as e:
        error_msg = f"Invalid JSON: {str(e)}"
        logger.error(error_msg)
        click.echo(f"Error: {error_msg}", err=True)
        sys.exit(1)
    except InvalidArgumentError as e:
        error_msg = f"Invalid dataset: {str(e)}"
        logger.error(error_msg)
        click.echo(f"Error: {error_msg}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error during dataset preview: {str(e)}")
        if debug:
            # In debug mode, reraise to show traceback
            raise
        click.echo(f"Error: {str(e)}", err=True)
        sys.exit(1)


@cli.command("version")
def version_cmd() -> None:
    """Display detailed version information."""
    click.echo(f"Spec-helpers version: {_package_version('spec-helpers')}")
    click.echo(f"Python version: {sys.version.split()[0]}")
    click.echo(f"Pytest version: {_package_version('pytest')}")
    click.echo(f"Playwright version: {_package_version('playwright')}")
    click.echo(f"Click version: {_package_version('click')}")


def main() -> None:
    """Entry point for the CLI."""
    cli()
