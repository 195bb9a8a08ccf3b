import pytest

from content_engine_connector.config import ConfigOptions, InvalidConfiguration
from content_engine_connector.di import Container
from content_engine_connector.security import PrefixedValueDecoder


@pytest.fixture
def container(raw_values, tmp_path):
    container = Container()
    container.settings.from_dict({
        "config_file": None,
        "config_dir": str(tmp_path),
        "config_overrides": raw_values,
    })
    return container


def test_config_options_is_singleton(container):
    options = container.config_options()

    assert isinstance(options, ConfigOptions)
    assert container.config_options() is options
    assert options.object_store_name == "ObjectStore1"


def test_default_decoder(container):
    assert isinstance(container.sensitive_value_decoder(), PrefixedValueDecoder)
    assert container.config_options().get_connection().password == "secret"


def test_invalid_configuration_propagates(container, raw_values):
    container.settings.config_overrides.from_value({**raw_values, "feed.maxUrls": "1"})

    with pytest.raises(InvalidConfiguration):
        container.config_options()


def test_overrides_reach_raw_config(container, raw_values):
    container.settings.config_overrides.from_value({**raw_values, "feed.maxUrls": "10"})

    assert container.raw_config()["feed.maxUrls"] == "10"
    assert container.config_options().max_feed_urls == 10
