"""Pluggable object factories.

An object factory knows how to authenticate against the content engine and
open object store handles. The connector selects one by name at startup:

1. Names registered with ``register_object_factory``.
2. Names published under the ``content_engine_connector.object_factories``
   entry point group.
3. Dotted import paths, ``package.module.ClassName`` or
   ``package.module:ClassName``.

Example Usage:
    from content_engine_connector.factory import (
        ObjectFactory,
        register_object_factory,
    )

    class MyFactory(ObjectFactory):
        def connect(self, base_url, username, password):
            ...

        def open_object_store(self, connection, store_name):
            ...

    register_object_factory("my-factory", MyFactory)
"""

import importlib
import logging
import threading
from abc import ABC, abstractmethod
from importlib import metadata
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "content_engine_connector.object_factories"

_REGISTRY_LOCK = threading.Lock()
_REGISTRY: Dict[str, Callable[[], "ObjectFactory"]] = {}


class ObjectFactory(ABC):
    """Base interface for content engine object factories."""

    @abstractmethod
    def connect(self, base_url: str, username: str, password: str) -> Any:
        """Open a connection to the content engine.

        Args:
            base_url: Content engine URL
            username: Repository user
            password: Decoded password

        Returns:
            Connection object understood by ``open_object_store``
        """
        pass

    @abstractmethod
    def open_object_store(self, connection: Any, store_name: str) -> Any:
        """Open a named object store.

        Args:
            connection: Connection returned by ``connect``
            store_name: Object store name

        Returns:
            Object store handle
        """
        pass


def register_object_factory(
    name: str, constructor: Callable[[], ObjectFactory]
) -> None:
    """Register a no-argument constructor under a name."""
    if not name:
        raise ValueError("Object factory name may not be empty")
    with _REGISTRY_LOCK:
        if name in _REGISTRY and _REGISTRY[name] is not constructor:
            logger.warning(f"Replacing object factory registered as {name}")
        _REGISTRY[name] = constructor


def unregister_object_factory(name: str) -> None:
    with _REGISTRY_LOCK:
        _REGISTRY.pop(name, None)


def list_object_factories() -> List[str]:
    """Names available from the registry and entry points."""
    with _REGISTRY_LOCK:
        names = set(_REGISTRY)
    names.update(ep.name for ep in _entry_points())
    return sorted(names)


def _entry_points() -> List[metadata.EntryPoint]:
    return list(metadata.entry_points(group=ENTRY_POINT_GROUP))


def _import_dotted(name: str) -> Callable[[], ObjectFactory]:
    if ":" in name:
        module_name, _, attr_path = name.partition(":")
    else:
        module_name, _, attr_path = name.rpartition(".")
    if not module_name or not attr_path:
        raise LookupError(f"Object factory not found: {name}")
    try:
        target: Any = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            target = getattr(target, attr)
    except (ImportError, AttributeError) as e:
        raise LookupError(f"Object factory not found: {name}") from e
    return target


def find_object_factory(name: str) -> Callable[[], ObjectFactory]:
    """Look up a factory constructor by name.

    Raises:
        LookupError: If no registered name, entry point or importable
            attribute matches.
    """
    with _REGISTRY_LOCK:
        constructor = _REGISTRY.get(name)
    if constructor is not None:
        return constructor

    for entry_point in _entry_points():
        if entry_point.name == name:
            try:
                return entry_point.load()
            except (ImportError, AttributeError) as e:
                raise LookupError(f"Object factory not found: {name}") from e

    return _import_dotted(name)


def create_object_factory(name: str) -> ObjectFactory:
    """Instantiate the factory named ``name``.

    Args:
        name: Registered name, entry point name or dotted path.

    Returns:
        A new factory instance.

    Raises:
        LookupError: If the name does not resolve.
        TypeError: If the target cannot be called without arguments or
            does not produce an ``ObjectFactory``.
        Exception: Anything the constructor itself raises.
    """
    constructor = find_object_factory(name)
    if not callable(constructor):
        raise TypeError(f"{name} is not callable")
    instance = constructor()
    if not isinstance(instance, ObjectFactory):
        raise TypeError(
            f"{name} produced {type(instance).__name__}, not an ObjectFactory"
        )
    logger.debug(f"Created object factory {type(instance).__name__} for {name}")
    return instance
