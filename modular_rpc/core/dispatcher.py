#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Dispatch core: one HTTP request in, one function call, one response out.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from typing import Any, Callable, Mapping, Optional, Tuple, Union

from .capsule import ContextCapsule
from .config import ModularConfig, get_config
from .models import CallEnvelope
from .registry import FunctionRegistry, RegistryEntry
from .utils.async_helpers import AsyncExecutionHelper
from .utils.exceptions import (
    CallFailureError,
    DispatchError,
    ExceptionFormatter,
    ExceptionTranslator,
    MethodNotAllowedError,
    ResultEncodingError,
    UnknownFunctionError,
)
from .utils.logger import ModernLogger
from ..adapters import AdapterSpec, resolve_adapter
from ..adapters.base import FrameworkAdapter

Resolution = Tuple[str, RegistryEntry, Optional[CallEnvelope]]


class Dispatcher(ModernLogger):
    """
    Resolves, invokes and answers one request at a time.

    A dispatcher holds only its read-only registry and configuration, so one
    instance serves any number of concurrent requests.
    """

    def __init__(
        self,
        registry: Union[FunctionRegistry, Mapping[str, RegistryEntry]],
        config: Optional[ModularConfig] = None,
    ) -> None:
        self._config = config or get_config()
        ModernLogger.__init__(self, name="modular_rpc.dispatcher", level=self._config.log_level)
        self._registry = FunctionRegistry.from_value(registry)

    @property
    def registry(self) -> FunctionRegistry:
        return self._registry

    @property
    def config(self) -> ModularConfig:
        return self._config

    async def dispatch(self, adapter: FrameworkAdapter) -> Any:
        """
        Serve one request through ``adapter``.

        Every failure is answered through ``adapter.send_error``; the return
        value is whatever the adapter's native write produced.
        """
        function_name: Optional[str] = None
        try:
            self._check_method(adapter)
            function_name, entry, envelope = await self._resolve(adapter)
            result = await self._invoke(function_name, entry, envelope, adapter)
        except DispatchError as exc:
            return await self._respond_error(adapter, exc)

        try:
            return await adapter.send_result(result)
        except ResultEncodingError as exc:
            self.warning(f"Result of '{function_name}' could not be encoded: {exc.message}")
            return await self._respond_error(adapter, exc)

    def _check_method(self, adapter: FrameworkAdapter) -> None:
        method = adapter.get_method()
        if not self._config.allows_method(method):
            raise MethodNotAllowedError(method, allowed=self._config.allowed_methods)

    async def _read_envelope(self, adapter: FrameworkAdapter) -> CallEnvelope:
        if not await adapter.has_body():
            try:
                return CallEnvelope.from_query(adapter.get_query())
            except ValueError as exc:
                raise ExceptionTranslator.as_malformed_payload(exc) from exc

        body = await adapter.get_body()
        try:
            return CallEnvelope.from_payload(body)
        except ValueError as exc:
            raise ExceptionTranslator.as_malformed_payload(exc) from exc

    async def _resolve(self, adapter: FrameworkAdapter) -> Resolution:
        if self._registry.is_single:
            name, entry = self._registry.single_entry
            if self._registry.is_context_entry(entry):
                return name, entry, None
            return name, entry, await self._read_envelope(adapter)

        envelope = await self._read_envelope(adapter)
        if not envelope.name:
            raise UnknownFunctionError(
                "A function name is required when more than one function is exposed"
            )
        entry = self._registry.get(envelope.name)
        if entry is None:
            raise UnknownFunctionError(
                "Unknown function: {0}".format(envelope.name),
                function_name=envelope.name,
            )
        return envelope.name, entry, envelope

    async def _invoke(
        self,
        name: str,
        entry: RegistryEntry,
        envelope: Optional[CallEnvelope],
        adapter: FrameworkAdapter,
    ) -> Any:
        raw_context = None
        if self._registry.is_context_entry(entry):
            raw_context = await adapter.get_raw_context()

        try:
            if self._registry.is_context_entry(entry):
                # Projection failures count as call failures, same as the target.
                projected = await AsyncExecutionHelper.call(entry.project, raw_context)
                func: Callable[..., Any] = entry.target
                args = ContextCapsule.as_arguments(projected)
                kwargs: dict = {}
            else:
                func = entry
                args = envelope.args if envelope is not None else ()
                kwargs = envelope.kwargs if envelope is not None else {}

            self.debug(f"Invoking '{name}' with {len(args)} positional argument(s)")
            return await AsyncExecutionHelper.call(
                func, *args, offload=self._config.offload_sync_calls, **kwargs
            )
        except Exception as exc:
            failure = ExceptionTranslator.as_call_failure(exc, function_name=name)
            self.warning(
                f"Call to '{name}' failed: {ExceptionFormatter.format_exception_summary(exc)}"
            )
            raise failure from exc

    async def _respond_error(self, adapter: FrameworkAdapter, error: DispatchError) -> Any:
        if not isinstance(error, CallFailureError):
            self.debug(f"Rejected request ({error.kind.value}): {error.message}")
        return await adapter.send_error(error, include_type=self._config.expose_error_type)


def modular(
    registry: Optional[Union[FunctionRegistry, Mapping[str, RegistryEntry]]] = None,
    adapter: AdapterSpec = "starlette",
    config: Optional[ModularConfig] = None,
    **functions: RegistryEntry,
) -> Callable[..., Any]:
    """
    Expose ``registry`` as one framework-native request handler.

    Example::

        from modular_rpc import modular

        def add(x, y):
            return x + y

        app.add_route("/rpc", modular({"add": add}, adapter="starlette"), methods=["POST"])

    Each call builds a fresh registry and dispatcher, so handlers never share
    mutable state.

    ``adapter`` is a built-in adapter name or a ``FrameworkAdapter`` subclass.
    Classes that only mimic the adapter hooks without subclassing are rejected
    with ``AdapterConfigurationError``, since handler construction and body
    caching live on the base class.
    """
    if isinstance(registry, FunctionRegistry) and not functions:
        function_registry = registry
    else:
        function_registry = FunctionRegistry(
            dict(registry) if registry is not None else None, **functions
        )

    adapter_cls = resolve_adapter(adapter)
    dispatcher = Dispatcher(function_registry, config=config)
    return adapter_cls.create_handler(dispatcher)


__all__ = ["Dispatcher", "modular"]
