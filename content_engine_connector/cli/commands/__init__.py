"""CLI commands package."""

import click

from ...logging import init_logging
from .check import check


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity")
def cli(verbose: int) -> None:
    """Content Engine Connector CLI."""
    init_logging({0: "WARNING", 1: "INFO"}.get(verbose, "DEBUG"))


cli.add_command(check)
