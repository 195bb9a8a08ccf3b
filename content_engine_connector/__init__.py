"""
Content Engine Connector - Configuration Core

This package validates and resolves the startup configuration of a connector
that feeds documents from a content engine repository into a search system.

Key Features:
- Fail-fast validation of every connector setting
- Display URL templates resolved against the content engine URL
- Pluggable object factories selected by name
- Java-style metadata date patterns, one formatter per thread
- Best-effort host reachability diagnostics

Version: 1.0.0
License: MIT
"""

import logging
from importlib.metadata import version

__version__ = version("content-engine-connector")

logger = logging.getLogger(__name__)

__all__ = ["__version__"]
