#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Host framework adapters.

Concrete adapters import their framework, so they are resolved lazily: only
the adapter a handler actually uses gets imported.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from importlib import import_module
from typing import Any, Dict, Tuple, Type, Union

from ..core.models import AdapterName
from ..core.utils.exceptions import AdapterConfigurationError
from .base import FrameworkAdapter

_ADAPTER_MAP: Dict[AdapterName, Tuple[str, str]] = {
    AdapterName.STARLETTE: ("modular_rpc.adapters.starlette", "StarletteAdapter"),
    AdapterName.FLASK: ("modular_rpc.adapters.flask", "FlaskAdapter"),
    AdapterName.AIOHTTP: ("modular_rpc.adapters.aiohttp", "AiohttpAdapter"),
    AdapterName.ASGI: ("modular_rpc.adapters.asgi", "ASGIAdapter"),
    AdapterName.WSGI: ("modular_rpc.adapters.wsgi", "WSGIAdapter"),
    AdapterName.SERVERLESS: ("modular_rpc.adapters.serverless", "ServerlessAdapter"),
}

AdapterSpec = Union[AdapterName, str, Type[FrameworkAdapter]]


def resolve_adapter(adapter: AdapterSpec) -> Type[FrameworkAdapter]:
    """
    Resolve an adapter name or a custom ``FrameworkAdapter`` subclass.
    """
    if isinstance(adapter, type):
        if issubclass(adapter, FrameworkAdapter):
            return adapter
        raise AdapterConfigurationError(
            "Adapter class must subclass FrameworkAdapter: {0}".format(adapter.__name__)
        )

    try:
        adapter_name = AdapterName.from_value(adapter)
    except ValueError as exc:
        raise AdapterConfigurationError(
            "Unknown adapter: {0!r} (available: {1})".format(
                adapter, ", ".join(supported_adapters())
            ),
            cause=exc,
        ) from exc

    module_name, attr_name = _ADAPTER_MAP[adapter_name]
    return getattr(import_module(module_name), attr_name)


def supported_adapters() -> list:
    return sorted(name.value for name in _ADAPTER_MAP)


def __getattr__(name: str) -> Any:
    for module_name, attr_name in _ADAPTER_MAP.values():
        if attr_name == name:
            value = getattr(import_module(module_name), attr_name)
            globals()[name] = value
            return value
    raise AttributeError(
        "module 'modular_rpc.adapters' has no attribute '{0}'".format(name)
    )


__all__ = [
    "FrameworkAdapter",
    "resolve_adapter",
    "supported_adapters",
    *sorted(attr for _, attr in _ADAPTER_MAP.values()),
]
