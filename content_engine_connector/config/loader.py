"""Configuration loader module.

Raw configuration is a flat mapping of dotted keys to strings. Values come
from, in increasing priority:

1. Built in defaults
2. ``connector.yaml`` or ``connector.json`` in the configuration directory
3. Environment variables (``.env`` is loaded first when present)
4. Explicit overrides passed by the caller

Environment variable names are the key upper-cased with dots replaced by
underscores and a ``CONNECTOR_`` prefix, so ``filenet.objectStore`` is read
from ``CONNECTOR_FILENET_OBJECTSTORE``.
"""

import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Union

import yaml
from dotenv import load_dotenv

from .base import ConfigurationError, MissingConfiguration

logger = logging.getLogger(__name__)

ENV_PREFIX = "CONNECTOR_"
CONFIG_FILES = ("connector.yaml", "connector.yml", "connector.json")

CONTENT_ENGINE_URL = "filenet.contentEngineUrl"
USERNAME = "filenet.username"
PASSWORD = "filenet.password"
OBJECT_STORE = "filenet.objectStore"
OBJECT_FACTORY = "filenet.objectFactory"
DISPLAY_URL_PATTERN = "filenet.displayUrlPattern"
MARK_ALL_DOCS_AS_PUBLIC = "adaptor.markAllDocsAsPublic"
AUTHENTICATED_USERS_GROUP = "filenet.authenticatedUsersGroup"
NAMESPACE = "adaptor.namespace"
ADDITIONAL_WHERE_CLAUSE = "filenet.additionalWhereClause"
EXCLUDED_METADATA = "filenet.excludedMetadata"
INCLUDED_METADATA = "filenet.includedMetadata"
METADATA_DATE_FORMAT = "filenet.metadataDateFormat"
MAX_FEED_URLS = "feed.maxUrls"

REQUIRED_KEYS = (
    CONTENT_ENGINE_URL,
    USERNAME,
    PASSWORD,
    OBJECT_STORE,
    OBJECT_FACTORY,
)

DEFAULTS: Mapping[str, str] = MappingProxyType({
    DISPLAY_URL_PATTERN: (
        "/WorkplaceXT/getContent?objectStoreName={2}"
        "&objectType=document&versionStatus=1&vsId={1}"
    ),
    MARK_ALL_DOCS_AS_PUBLIC: "false",
    AUTHENTICATED_USERS_GROUP: "#AUTHENTICATED-USERS",
    NAMESPACE: "Default",
    ADDITIONAL_WHERE_CLAUSE: "",
    EXCLUDED_METADATA: "",
    INCLUDED_METADATA: "",
    METADATA_DATE_FORMAT: "yyyy-MM-dd",
    MAX_FEED_URLS: "5000",
})


def env_var_name(key: str) -> str:
    """Environment variable that overrides ``key``."""
    return ENV_PREFIX + key.replace(".", "_").upper()


class RawConfig(Mapping[str, str]):
    """Read-only string configuration with defaults applied."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        merged = dict(DEFAULTS)
        for key, value in (values or {}).items():
            merged[str(key)] = _to_string(value)
        self._values = MappingProxyType(merged)

    def get_value(self, key: str) -> str:
        """Return a value.

        Raises:
            MissingConfiguration: If the key is not set and has no default.
        """
        try:
            return self._values[key]
        except KeyError:
            raise MissingConfiguration(key) from None

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        shown = {
            key: ("***" if key == PASSWORD else value)
            for key, value in self._values.items()
        }
        return f"RawConfig({shown!r})"


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_to_string(item) for item in value)
    return str(value)


def flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested mappings into dotted keys.

    Example:
        >>> flatten({"feed": {"maxUrls": 10}})
        {'feed.maxUrls': 10}
    """
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, name))
        else:
            flat[name] = value
    return flat


class ConfigLoader:
    """Configuration loader class."""

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize configuration loader.

        Args:
            config_dir: Directory containing configuration files.
                Defaults to current directory.
            environ: Environment to read overrides from.
                Defaults to ``os.environ`` after loading ``.env``.
        """
        self.config_dir = Path(config_dir or os.getcwd())

        if environ is None:
            env_file = self.config_dir / ".env"
            if env_file.exists():
                load_dotenv(env_file)
            environ = os.environ
        self.environ = environ

    def load(
        self,
        path: Optional[Union[str, Path]] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> RawConfig:
        """Load raw configuration.

        Args:
            path: Explicit configuration file. When omitted the first of
                ``CONFIG_FILES`` found in the configuration directory is
                used, if any.
            overrides: Values that take precedence over everything else.

        Returns:
            Raw configuration.

        Raises:
            ConfigurationError: If a configuration file cannot be read.
        """
        file_path = Path(path) if path else self._find_config_file()
        values: Dict[str, Any] = {}
        if file_path is not None:
            values.update(flatten(self._load_file(file_path)))
            logger.info(f"Loaded configuration from {file_path}")

        for key in set(DEFAULTS) | set(REQUIRED_KEYS) | set(values):
            name = env_var_name(key)
            if name in self.environ:
                logger.debug(f"{key} overridden by {name}")
                values[key] = self.environ[name]

        values.update(overrides or {})
        return RawConfig(values)

    def _find_config_file(self) -> Optional[Path]:
        for filename in CONFIG_FILES:
            candidate = self.config_dir / filename
            if candidate.exists():
                return candidate
        return None

    def _load_file(self, path: Path) -> Dict[str, Any]:
        """Load configuration file.

        Args:
            path: File to load.

        Returns:
            Configuration data.

        Raises:
            ConfigurationError: If file loading fails.
        """
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path) as f:
                if path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f) or {}
                elif path.suffix == ".json":
                    data = json.load(f)
                else:
                    raise ValueError(f"Unsupported file format: {path.suffix}")
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load {path}: {e}") from e

        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Configuration in {path} is not a mapping")
        return data


def load_raw_config(
    path: Optional[Union[str, Path]] = None,
    config_dir: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> RawConfig:
    """Create a loader and load configuration in one step."""
    return ConfigLoader(config_dir).load(path, overrides)
