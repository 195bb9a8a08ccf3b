"""Dependency injection container."""

from dependency_injector import containers, providers

from ..config.loader import load_raw_config
from ..config.options import ConfigOptions
from ..security import PrefixedValueDecoder


class Container(containers.DeclarativeContainer):
    """Dependency injection container.

    ``config_options`` is a singleton, so configuration is validated once and
    the same instance is shared by every consumer.
    """

    settings = providers.Configuration()

    raw_config = providers.Singleton(
        load_raw_config,
        path=settings.config_file,
        config_dir=settings.config_dir,
        overrides=settings.config_overrides,
    )

    sensitive_value_decoder = providers.Singleton(PrefixedValueDecoder)

    config_options = providers.Singleton(
        ConfigOptions,
        raw_config=raw_config,
        sensitive_value_decoder=sensitive_value_decoder,
    )


__all__ = ["Container"]
