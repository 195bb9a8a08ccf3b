"""Check command."""

import logging
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...config import ConfigurationError
from ...di import Container
from ...factory import list_object_factories

logger = logging.getLogger(__name__)
console = Console()


def _parse_overrides(values: Tuple[str, ...]) -> dict:
    overrides = {}
    for value in values:
        key, sep, setting = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(
                f"expected KEY=VALUE, got {value!r}", param_hint="--set"
            )
        overrides[key.strip()] = setting
    return overrides


@click.command()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file (YAML or JSON)",
)
@click.option(
    "--config-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory searched for connector.yaml and .env",
)
@click.option(
    "--set",
    "overrides",
    multiple=True,
    metavar="KEY=VALUE",
    help="Override a configuration value",
)
def check(
    config_file: Optional[str],
    config_dir: Optional[str],
    overrides: Tuple[str, ...],
) -> None:
    """Validate connector configuration and show resolved values."""
    container = Container()
    container.settings.from_dict({
        "config_file": config_file,
        "config_dir": config_dir,
        "config_overrides": _parse_overrides(overrides),
    })

    try:
        options = container.config_options()
    except ConfigurationError as e:
        logger.debug("Configuration rejected", exc_info=True)
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        if e.__cause__ is not None:
            console.print(f"[red]Caused by:[/red] {escape(repr(e.__cause__))}")
        if isinstance(e.__cause__, LookupError):
            available = ", ".join(list_object_factories()) or "none registered"
            console.print(f"Available object factories: {escape(available)}")
        raise click.exceptions.Exit(1)

    resolved = options.resolved
    table = Table(title="Connector configuration", show_header=True)
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")
    for name, value in resolved.model_dump().items():
        if name == "password":
            value = "********"
        elif isinstance(value, frozenset):
            value = ", ".join(sorted(value))
        table.add_row(name, escape(str(value)))
    console.print(table)
    console.print("[green]Configuration is valid[/green]")
