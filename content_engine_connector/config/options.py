"""Validated connector configuration.

``ConfigOptions`` is built once at startup from a ``RawConfig``. Every
setting is validated in a fixed order and the first failure raises
``InvalidConfiguration``; no partially validated instance is ever returned.

Example Usage:
    from content_engine_connector.config import ConfigOptions, load_raw_config
    from content_engine_connector.security import PrefixedValueDecoder

    options = ConfigOptions(load_raw_config(), PrefixedValueDecoder())
    url = options.get_display_url(doc_id, version_series_id)
"""

import logging
import threading
from typing import Any, FrozenSet

from ..dateformat import MetadataDateFormat
from ..display_url import fill_display_url, resolve_display_url_pattern
from ..factory import ObjectFactory, create_object_factory
from ..security import SensitiveValueDecoder
from ..uri import InvalidUri, ValidatedUri
from . import loader
from .base import InvalidConfiguration, ResolvedConfig
from .loader import RawConfig
from .validation import (
    parse_bool,
    parse_max_feed_urls,
    parse_name_set,
    require_non_empty,
    validate_date_format,
)

logger = logging.getLogger(__name__)


class ConfigOptions:
    """Connector settings resolved from raw configuration."""

    def __init__(
        self,
        raw_config: RawConfig,
        sensitive_value_decoder: SensitiveValueDecoder,
    ) -> None:
        """Validate and resolve configuration.

        Args:
            raw_config: Raw key/value configuration.
            sensitive_value_decoder: Decoder for the stored password.

        Raises:
            InvalidConfiguration: If any setting is invalid.
        """
        self._decoder = sensitive_value_decoder
        get = raw_config.get_value

        content_engine_url = get(loader.CONTENT_ENGINE_URL)
        logger.info(f"{loader.CONTENT_ENGINE_URL}: {content_engine_url}")
        try:
            ce_uri = ValidatedUri(content_engine_url).log_unreachable_host()
        except InvalidUri as e:
            raise InvalidConfiguration(
                f"Invalid {loader.CONTENT_ENGINE_URL}: {e}"
            ) from e

        object_store_name = require_non_empty(
            loader.OBJECT_STORE, get(loader.OBJECT_STORE)
        )
        logger.info(f"{loader.OBJECT_STORE}: {object_store_name}")

        username = get(loader.USERNAME)
        password = get(loader.PASSWORD)

        object_factory_name = require_non_empty(
            loader.OBJECT_FACTORY, get(loader.OBJECT_FACTORY)
        )
        try:
            self._object_factory = create_object_factory(object_factory_name)
        except Exception as e:
            raise InvalidConfiguration(
                f"Unable to instantiate object factory: {object_factory_name}"
            ) from e
        logger.info(f"{loader.OBJECT_FACTORY}: {object_factory_name}")

        try:
            display_url_pattern = resolve_display_url_pattern(
                get(loader.DISPLAY_URL_PATTERN), ce_uri, object_store_name
            )
        except ValueError as e:
            raise InvalidConfiguration(f"Invalid displayUrlPattern: {e}") from e
        logger.info(f"displayUrlPattern: {display_url_pattern}")

        mark_all_docs_as_public = parse_bool(get(loader.MARK_ALL_DOCS_AS_PUBLIC))
        logger.info(
            f"{loader.MARK_ALL_DOCS_AS_PUBLIC}: {mark_all_docs_as_public}"
        )

        authenticated_users_group = get(loader.AUTHENTICATED_USERS_GROUP)
        logger.info(
            f"{loader.AUTHENTICATED_USERS_GROUP}: {authenticated_users_group}"
        )

        global_namespace = get(loader.NAMESPACE)
        logger.info(f"{loader.NAMESPACE}: {global_namespace}")

        # TODO: validate where clause syntax against the content engine
        additional_where_clause = get(loader.ADDITIONAL_WHERE_CLAUSE)
        logger.info(
            f"{loader.ADDITIONAL_WHERE_CLAUSE}: {additional_where_clause}"
        )

        excluded_metadata = parse_name_set(get(loader.EXCLUDED_METADATA))
        logger.info(f"{loader.EXCLUDED_METADATA}: {sorted(excluded_metadata)}")

        included_metadata = parse_name_set(get(loader.INCLUDED_METADATA))
        logger.info(f"{loader.INCLUDED_METADATA}: {sorted(included_metadata)}")

        metadata_date_format = validate_date_format(
            loader.METADATA_DATE_FORMAT, get(loader.METADATA_DATE_FORMAT)
        )
        logger.info(f"{loader.METADATA_DATE_FORMAT}: {metadata_date_format}")

        max_feed_urls = parse_max_feed_urls(
            loader.MAX_FEED_URLS, get(loader.MAX_FEED_URLS)
        )
        logger.info(f"{loader.MAX_FEED_URLS}: {max_feed_urls}")

        self._resolved = ResolvedConfig(
            content_engine_url=content_engine_url,
            object_store_name=object_store_name,
            username=username,
            password=password,
            object_factory_name=object_factory_name,
            display_url_pattern=display_url_pattern,
            mark_all_docs_as_public=mark_all_docs_as_public,
            authenticated_users_group=authenticated_users_group,
            global_namespace=global_namespace,
            additional_where_clause=additional_where_clause,
            excluded_metadata=excluded_metadata,
            included_metadata=included_metadata,
            metadata_date_format=metadata_date_format,
            max_feed_urls=max_feed_urls,
        )
        self._date_formats = threading.local()

    @property
    def resolved(self) -> ResolvedConfig:
        """The validated settings."""
        return self._resolved

    @property
    def content_engine_url(self) -> str:
        return self._resolved.content_engine_url

    @property
    def username(self) -> str:
        return self._resolved.username

    @property
    def password(self) -> str:
        """Encoded password, as configured."""
        return self._resolved.password

    @property
    def object_store_name(self) -> str:
        return self._resolved.object_store_name

    @property
    def object_factory(self) -> ObjectFactory:
        return self._object_factory

    @property
    def display_url_pattern(self) -> str:
        return self._resolved.display_url_pattern

    @property
    def mark_all_docs_as_public(self) -> bool:
        return self._resolved.mark_all_docs_as_public

    @property
    def authenticated_users_group(self) -> str:
        return self._resolved.authenticated_users_group

    @property
    def global_namespace(self) -> str:
        return self._resolved.global_namespace

    @property
    def additional_where_clause(self) -> str:
        return self._resolved.additional_where_clause

    @property
    def excluded_metadata(self) -> FrozenSet[str]:
        return self._resolved.excluded_metadata

    @property
    def included_metadata(self) -> FrozenSet[str]:
        return self._resolved.included_metadata

    @property
    def max_feed_urls(self) -> int:
        return self._resolved.max_feed_urls

    @property
    def metadata_date_format(self) -> MetadataDateFormat:
        """Date formatter owned by the calling thread."""
        formatter = getattr(self._date_formats, "formatter", None)
        if formatter is None:
            formatter = MetadataDateFormat(self._resolved.metadata_date_format)
            self._date_formats.formatter = formatter
        return formatter

    def get_connection(self) -> Any:
        """Open a content engine connection.

        The password is decoded on every call. Errors from the decoder or
        the object factory propagate unchanged.
        """
        return self._object_factory.connect(
            self._resolved.content_engine_url,
            self._resolved.username,
            self._decoder.decode(self._resolved.password),
        )

    def get_object_store(self, connection: Any) -> Any:
        """Open the configured object store on ``connection``."""
        return self._object_factory.open_object_store(
            connection, self._resolved.object_store_name
        )

    def get_display_url(self, document_id: str, version_series_id: str) -> str:
        """Absolute display URL for a document version."""
        return fill_display_url(
            self._resolved.display_url_pattern,
            document_id,
            version_series_id,
            self._resolved.object_store_name,
        )
