#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
modular-rpc core module exports (lazy-loaded).

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from importlib import import_module
from typing import Any, Dict, Tuple

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "Dispatcher": ("modular_rpc.core.dispatcher", "Dispatcher"),
    "modular": ("modular_rpc.core.dispatcher", "modular"),
    "FunctionRegistry": ("modular_rpc.core.registry", "FunctionRegistry"),
    "ContextCapsule": ("modular_rpc.core.capsule", "ContextCapsule"),
    "context": ("modular_rpc.core.capsule", "context"),
    "CallEnvelope": ("modular_rpc.core.models", "CallEnvelope"),
    "RequestContext": ("modular_rpc.core.models", "RequestContext"),
    "AdapterName": ("modular_rpc.core.models", "AdapterName"),
    "ErrorKind": ("modular_rpc.core.models", "ErrorKind"),
    "ModularConfig": ("modular_rpc.core.config", "ModularConfig"),
    "get_config": ("modular_rpc.core.config", "get_config"),
    "create_config": ("modular_rpc.core.config", "create_config"),
}

__all__ = sorted(_EXPORT_MAP.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'modular_rpc.core' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
