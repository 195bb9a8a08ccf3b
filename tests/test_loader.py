import json

import pytest
import yaml

from content_engine_connector.config import (
    ConfigLoader,
    ConfigurationError,
    MissingConfiguration,
    RawConfig,
)
from content_engine_connector.config.loader import DEFAULTS, env_var_name, flatten


def test_env_var_name():
    assert env_var_name("filenet.objectStore") == "CONNECTOR_FILENET_OBJECTSTORE"
    assert env_var_name("feed.maxUrls") == "CONNECTOR_FEED_MAXURLS"


def test_flatten_nested_mapping():
    data = {"filenet": {"objectStore": "OS1", "nested": {"key": 1}}, "feed.maxUrls": 10}
    assert flatten(data) == {
        "filenet.objectStore": "OS1",
        "filenet.nested.key": 1,
        "feed.maxUrls": 10,
    }


def test_raw_config_applies_defaults():
    raw = RawConfig({"filenet.objectStore": "OS1"})

    assert raw.get_value("filenet.objectStore") == "OS1"
    assert raw.get_value("feed.maxUrls") == "5000"
    assert raw.get_value("filenet.metadataDateFormat") == "yyyy-MM-dd"
    assert set(DEFAULTS) <= set(raw)


def test_raw_config_converts_values_to_strings():
    raw = RawConfig({
        "adaptor.markAllDocsAsPublic": True,
        "feed.maxUrls": 10,
        "filenet.excludedMetadata": ["a", "b"],
        "filenet.additionalWhereClause": None,
    })

    assert raw["adaptor.markAllDocsAsPublic"] == "true"
    assert raw["feed.maxUrls"] == "10"
    assert raw["filenet.excludedMetadata"] == "a,b"
    assert raw["filenet.additionalWhereClause"] == ""


def test_missing_required_key_names_key():
    with pytest.raises(MissingConfiguration, match="filenet.contentEngineUrl") as excinfo:
        RawConfig().get_value("filenet.contentEngineUrl")

    assert excinfo.value.key == "filenet.contentEngineUrl"


def test_raw_config_is_read_only():
    raw = RawConfig({"filenet.objectStore": "OS1"})
    with pytest.raises(TypeError):
        raw["filenet.objectStore"] = "other"


def test_raw_config_repr_hides_password():
    raw = RawConfig({"filenet.password": "pl:secret"})
    assert "secret" not in repr(raw)


def test_load_yaml_file(tmp_path):
    (tmp_path / "connector.yaml").write_text(yaml.safe_dump({
        "filenet": {"objectStore": "OS1", "contentEngineUrl": "http://ce.example.com/"},
        "feed": {"maxUrls": 100},
    }))

    raw = ConfigLoader(tmp_path, environ={}).load()

    assert raw["filenet.objectStore"] == "OS1"
    assert raw["feed.maxUrls"] == "100"
    assert raw["adaptor.namespace"] == "Default"


def test_load_explicit_json_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"filenet.objectStore": "OS2"}))

    raw = ConfigLoader(tmp_path, environ={}).load(path)

    assert raw["filenet.objectStore"] == "OS2"


def test_precedence_overrides_env_file_defaults(tmp_path):
    (tmp_path / "connector.yaml").write_text(yaml.safe_dump({
        "filenet.objectStore": "FromFile",
        "feed.maxUrls": 100,
        "adaptor.namespace": "FromFile",
    }))
    environ = {
        "CONNECTOR_FILENET_OBJECTSTORE": "FromEnv",
        "CONNECTOR_FEED_MAXURLS": "200",
        "CONNECTOR_FILENET_USERNAME": "envuser",
    }

    raw = ConfigLoader(tmp_path, environ=environ).load(overrides={"feed.maxUrls": "300"})

    assert raw["filenet.objectStore"] == "FromEnv"
    assert raw["feed.maxUrls"] == "300"
    assert raw["filenet.username"] == "envuser"
    assert raw["adaptor.namespace"] == "FromFile"
    assert raw["filenet.metadataDateFormat"] == "yyyy-MM-dd"


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    name = "CONNECTOR_FILENET_OBJECTSTORE"
    # Registers cleanup so the value loaded from .env is removed afterwards
    monkeypatch.setenv(name, "placeholder")
    monkeypatch.delenv(name)
    (tmp_path / ".env").write_text(f"{name}=FromDotenv\n")

    raw = ConfigLoader(tmp_path).load()

    assert raw["filenet.objectStore"] == "FromDotenv"


def test_missing_explicit_file_fails(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigLoader(tmp_path, environ={}).load(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "filename,content",
    [
        ("connector.toml", "a = 1"),
        ("broken.yaml", "filenet: [unclosed"),
        ("broken.json", "{not json"),
        ("list.yaml", "- a\n- b\n"),
    ],
)
def test_unreadable_file_fails(tmp_path, filename, content):
    path = tmp_path / filename
    path.write_text(content)

    with pytest.raises(ConfigurationError):
        ConfigLoader(tmp_path, environ={}).load(path)
