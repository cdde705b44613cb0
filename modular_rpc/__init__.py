#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
modular-rpc public API with lazy imports.

Host framework adapters import their framework only when selected, so
importing this package never pulls in Starlette, Flask or aiohttp.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from importlib import import_module
from typing import Any, Dict, Tuple

from ._version import __version__

__author__ = "Silan Hu"
__email__ = "silan.hu@u.nus.edu"

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "modular": ("modular_rpc.core.dispatcher", "modular"),
    "Dispatcher": ("modular_rpc.core.dispatcher", "Dispatcher"),
    "context": ("modular_rpc.core.capsule", "context"),
    "ContextCapsule": ("modular_rpc.core.capsule", "ContextCapsule"),
    "FunctionRegistry": ("modular_rpc.core.registry", "FunctionRegistry"),
    "RequestContext": ("modular_rpc.core.models", "RequestContext"),
    "AdapterName": ("modular_rpc.core.models", "AdapterName"),
    "ErrorKind": ("modular_rpc.core.models", "ErrorKind"),
    "ModularConfig": ("modular_rpc.core.config", "ModularConfig"),
    "get_config": ("modular_rpc.core.config", "get_config"),
    "create_config": ("modular_rpc.core.config", "create_config"),
    "FrameworkAdapter": ("modular_rpc.adapters.base", "FrameworkAdapter"),
}

__all__ = ["__version__", *sorted(_EXPORT_MAP.keys())]


def __getattr__(name: str) -> Any:
    """
    Resolve public API symbols lazily.
    """
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'modular_rpc' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
