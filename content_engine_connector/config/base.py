"""Base configuration classes and errors."""

from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field


class ConfigurationError(Exception):
    """Base configuration error."""
    pass


class InvalidConfiguration(ConfigurationError):
    """Invalid configuration error.

    Raised for every validation failure. When an underlying error caused the
    failure it is chained and available as ``__cause__``.
    """
    pass


class MissingConfiguration(InvalidConfiguration):
    """Required configuration key is not set."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing required configuration key: {key}")
        self.key = key


class ResolvedConfig(BaseModel):
    """Validated connector settings.

    Built once by ``ConfigOptions`` after every rule has passed. The model is
    frozen so the values cannot change after startup.
    """

    model_config = ConfigDict(frozen=True)

    content_engine_url: str = Field(..., description="Content engine base URL")
    object_store_name: str = Field(..., min_length=1, description="Object store name")
    username: str = Field(..., description="Repository user")
    password: str = Field(..., repr=False, description="Encoded repository password")
    object_factory_name: str = Field(..., min_length=1, description="Object factory identifier")
    display_url_pattern: str = Field(..., description="Absolute display URL template")
    mark_all_docs_as_public: bool = False
    authenticated_users_group: str = ""
    global_namespace: str = ""
    additional_where_clause: str = ""
    excluded_metadata: FrozenSet[str] = frozenset()
    included_metadata: FrozenSet[str] = frozenset()
    metadata_date_format: str = Field(..., description="Date pattern for metadata values")
    max_feed_urls: int = Field(..., ge=3, description="Maximum URLs per feed")
