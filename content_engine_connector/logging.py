"""
Logging Configuration for the Content Engine Connector

Every module logs through ``logging.getLogger(__name__)``. This module only
configures handlers for processes that run the connector, such as the CLI.

Example Usage:
    from content_engine_connector.logging import init_logging

    init_logging(level="INFO")
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def init_logging(
    level: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Initialize logging configuration.

    Args:
        level: Optional logging level (default: INFO)
        console: Console to log to (default: stderr console)
    """
    if level is None:
        level = "INFO"

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level.upper())

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root_logger.addHandler(console_handler)
