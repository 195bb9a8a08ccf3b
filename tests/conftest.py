"""Shared fixtures."""

import socket

import pytest

from content_engine_connector.config import RawConfig
from content_engine_connector.factory import (
    register_object_factory,
    unregister_object_factory,
)
from content_engine_connector.security import PrefixedValueDecoder
from fake_factories import RecordingFactory

REACHABLE_HOSTS = {"ce.example.com", "display.example.com", "localhost"}

CONTENT_ENGINE_URL = "http://ce.example.com:9080/wsi/FNCEWS40MTOM"


@pytest.fixture(autouse=True)
def fake_dns(monkeypatch):
    """Resolve only the hosts in REACHABLE_HOSTS, without touching the network."""

    def getaddrinfo(host, port, *args, **kwargs):
        if host in REACHABLE_HOSTS:
            return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("127.0.0.1", port or 0))]
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(socket, "getaddrinfo", getaddrinfo)


@pytest.fixture
def factory_name():
    register_object_factory("recording", RecordingFactory)
    yield "recording"
    unregister_object_factory("recording")


@pytest.fixture
def raw_values(factory_name):
    return {
        "filenet.contentEngineUrl": CONTENT_ENGINE_URL,
        "filenet.username": "indexer",
        "filenet.password": "pl:secret",
        "filenet.objectStore": "ObjectStore1",
        "filenet.objectFactory": factory_name,
    }


@pytest.fixture
def make_raw_config(raw_values):
    def make(changes=None):
        values = dict(raw_values)
        values.update(changes or {})
        return RawConfig(values)

    return make


@pytest.fixture
def decoder():
    return PrefixedValueDecoder()
