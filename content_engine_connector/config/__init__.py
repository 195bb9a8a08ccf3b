"""
Configuration Package for the Content Engine Connector

This package loads, validates and exposes the connector's startup
configuration. Configuration is resolved exactly once; the resulting
``ConfigOptions`` is passed to every component that needs it.

Key Components:
1. Loading (loader.py):
   - Built in defaults
   - YAML/JSON configuration files
   - Environment variable overrides

2. Validation (validation.py, options.py):
   - Content engine URL syntax and reachability
   - Object store and object factory
   - Display URL template resolution
   - Metadata filters, date format and feed size

Example Usage:
    from content_engine_connector.config import ConfigOptions, load_raw_config
    from content_engine_connector.security import PrefixedValueDecoder

    options = ConfigOptions(load_raw_config(), PrefixedValueDecoder())
    print(options.max_feed_urls)
"""

from .base import (
    ConfigurationError,
    InvalidConfiguration,
    MissingConfiguration,
    ResolvedConfig,
)
from .loader import ConfigLoader, RawConfig, load_raw_config
from .options import ConfigOptions

__all__ = [
    "ConfigLoader",
    "ConfigOptions",
    "ConfigurationError",
    "InvalidConfiguration",
    "MissingConfiguration",
    "RawConfig",
    "ResolvedConfig",
    "load_raw_config",
]
