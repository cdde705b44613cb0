#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Runtime configuration for modular-rpc handlers.

Values come from keyword overrides first, then ``MODULAR_RPC_*`` environment
variables, then the dataclass defaults.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import os
import threading
from dataclasses import dataclass, fields, replace
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from .utils.logger import resolve_log_level

ENV_PREFIX = "MODULAR_RPC_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}

_DEFAULT_CONFIG: Optional["ModularConfig"] = None
_DEFAULT_CONFIG_LOCK = threading.Lock()


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError("{0} must be a boolean, got {1!r}".format(name, value))


def _normalize_methods(
    methods: Union[None, str, Iterable[str]]
) -> Optional[Tuple[str, ...]]:
    if methods is None:
        return None
    if isinstance(methods, str):
        methods = methods.split(",")
    normalized = tuple(
        sorted({str(item).strip().upper() for item in methods if str(item).strip()})
    )
    return normalized or None


@dataclass(frozen=True)
class ModularConfig:
    """
    Handler configuration.

    ``allowed_methods`` of ``None`` accepts every HTTP method routed to the
    handler.
    """

    log_level: str = "warning"
    allowed_methods: Optional[Tuple[str, ...]] = None
    offload_sync_calls: bool = False
    expose_error_type: bool = False

    def __post_init__(self) -> None:
        resolve_log_level(self.log_level)
        object.__setattr__(
            self, "allowed_methods", _normalize_methods(self.allowed_methods)
        )

    def allows_method(self, method: str) -> bool:
        if self.allowed_methods is None:
            return True
        return method.upper() in self.allowed_methods

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ModularConfig":
        """
        Build configuration from ``MODULAR_RPC_*`` environment variables.
        """
        env = os.environ if environ is None else environ
        values: dict = {}

        log_level = env.get(ENV_PREFIX + "LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level.strip().lower()

        allowed_methods = env.get(ENV_PREFIX + "ALLOWED_METHODS")
        if allowed_methods:
            values["allowed_methods"] = allowed_methods

        for flag in ("offload_sync_calls", "expose_error_type"):
            key = ENV_PREFIX + flag.upper()
            if key in env:
                values[flag] = _parse_bool(key, env[key])

        return cls(**values)


def get_config() -> ModularConfig:
    """
    Process-wide default configuration, read from the environment once.
    """
    global _DEFAULT_CONFIG

    if _DEFAULT_CONFIG is None:
        with _DEFAULT_CONFIG_LOCK:
            if _DEFAULT_CONFIG is None:
                _DEFAULT_CONFIG = ModularConfig.from_env()
    return _DEFAULT_CONFIG


def create_config(base: Optional[ModularConfig] = None, **overrides: Any) -> ModularConfig:
    """
    Derive a configuration from ``base`` (default: ``get_config()``).
    """
    known = {item.name for item in fields(ModularConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError("Unknown configuration option(s): {0}".format(", ".join(unknown)))
    return replace(base or get_config(), **overrides)


def reset_config() -> None:
    """
    Forget the cached default configuration.
    """
    global _DEFAULT_CONFIG

    with _DEFAULT_CONFIG_LOCK:
        _DEFAULT_CONFIG = None
