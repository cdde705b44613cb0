#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Helpers for running sync and async callables behind one await point.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import asyncio
import inspect
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


class AsyncExecutionHelper:
    """
    Uniform invocation of sync/async callables.
    """

    @staticmethod
    def is_async_callable(func: Callable[..., Any]) -> bool:
        target = func
        while hasattr(target, "__wrapped__"):
            target = target.__wrapped__
        if inspect.iscoroutinefunction(target):
            return True
        call = getattr(target, "__call__", None)
        return call is not None and inspect.iscoroutinefunction(call)

    @staticmethod
    async def resolve(value: Any) -> Any:
        """
        Await ``value`` if it is awaitable, otherwise return it unchanged.
        """
        if inspect.isawaitable(value):
            return await value
        return value

    @classmethod
    async def call(
        cls,
        func: Callable[..., Any],
        *args: Any,
        offload: bool = False,
        **kwargs: Any,
    ) -> Any:
        """
        Call ``func`` and await its result when it produces an awaitable.

        With ``offload`` a plain sync callable runs in a worker thread so it
        does not block the event loop.
        """
        if offload and not cls.is_async_callable(func):
            result = await asyncio.to_thread(func, *args, **kwargs)
        else:
            result = func(*args, **kwargs)
        return await cls.resolve(result)

    @staticmethod
    def run_sync(coroutine: Coroutine[Any, Any, T]) -> T:
        """
        Drive a coroutine to completion from synchronous code.

        Uses a private event loop, or a worker thread when the calling thread
        is already running one.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coroutine)

        with ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(asyncio.run, coroutine).result()
