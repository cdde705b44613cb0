#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for sync/async invocation helpers.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import asyncio
import functools
import threading

from modular_rpc.core.utils.async_helpers import AsyncExecutionHelper


async def _double(value):
    await asyncio.sleep(0)
    return value * 2


def test_call_awaits_async_results():
    assert asyncio.run(AsyncExecutionHelper.call(_double, 21)) == 42


def test_call_returns_sync_results():
    assert asyncio.run(AsyncExecutionHelper.call(lambda a, b=1: a + b, 1, b=2)) == 3


def test_sync_callable_returning_awaitable_is_resolved():
    assert asyncio.run(AsyncExecutionHelper.call(lambda: _double(5))) == 10


def test_is_async_callable_sees_through_wraps():
    @functools.wraps(_double)
    def wrapper(value):
        return _double(value)

    class AsyncCallable:
        async def __call__(self):
            return None

    assert AsyncExecutionHelper.is_async_callable(_double) is True
    assert AsyncExecutionHelper.is_async_callable(wrapper) is True
    assert AsyncExecutionHelper.is_async_callable(AsyncCallable()) is True
    assert AsyncExecutionHelper.is_async_callable(len) is False


def test_run_sync_without_running_loop():
    assert AsyncExecutionHelper.run_sync(_double(4)) == 8


def test_run_sync_inside_running_loop_uses_worker_thread():
    main_thread = threading.get_ident()
    seen = []

    async def record():
        seen.append(threading.get_ident())
        return "done"

    async def run_case():
        return AsyncExecutionHelper.run_sync(record())

    assert asyncio.run(run_case()) == "done"
    assert seen and seen[0] != main_thread
