"""
Main Entry Point for the Content Engine Connector

Example Usage:
    $ python -m content_engine_connector check --config connector.yaml
    $ python -m content_engine_connector -v check --set feed.maxUrls=100
"""

import sys
from typing import Optional, Sequence

import click

from .cli import cli


def main(args: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Args:
        args: Command line arguments.
            Defaults to sys.argv[1:].

    Returns:
        Exit code.
    """
    try:
        # Without standalone mode click returns the code of an Exit
        exit_code = cli(args=args, standalone_mode=False)
        return exit_code if isinstance(exit_code, int) else 0
    except click.exceptions.Exit as e:
        return e.exit_code
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
