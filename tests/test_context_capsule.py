#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for context capsules and context injection.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import asyncio

import pytest

from conftest import FakeAdapter

from modular_rpc.core.capsule import ContextCapsule, context
from modular_rpc.core.dispatcher import Dispatcher


def _dispatch(dispatcher, adapter):
    return asyncio.run(dispatcher.dispatch(adapter))


def test_unbound_capsule_answers_with_projected_host(config):
    dispatcher = Dispatcher({"host": context(lambda ctx: [ctx.host])}, config=config)

    status, body = _dispatch(
        dispatcher,
        FakeAdapter.with_json({"args": ["ignored", 1, 2]}, host="tenant.example.com"),
    )

    assert status == 200
    assert body == "tenant.example.com"


def test_bound_capsule_receives_projection_not_envelope_args(config):
    received = []

    @context(lambda ctx: [ctx.host, ctx.headers.get("x-user")])
    def whoami(host, user):
        received.append((host, user))
        return {"host": host, "user": user}

    dispatcher = Dispatcher(
        {"whoami": whoami, "add": lambda a, b: a + b}, config=config
    )

    status, body = _dispatch(
        dispatcher,
        FakeAdapter.with_json(
            {"name": "whoami", "args": ["should", "be", "ignored"]},
            host="api.example.com",
            headers={"x-user": "ada"},
        ),
    )

    assert status == 200
    assert body == {"host": "api.example.com", "user": "ada"}
    assert received == [("api.example.com", "ada")]


def test_scalar_projection_is_the_sole_argument(config):
    capsule = context(lambda ctx: {"path": ctx.path}, lambda info: info["path"])
    dispatcher = Dispatcher({"path": capsule}, config=config)

    status, body = _dispatch(dispatcher, FakeAdapter())

    assert (status, body) == (200, "/rpc")


def test_unbound_capsule_with_several_values_answers_a_list(config):
    dispatcher = Dispatcher(
        {"meta": context(lambda ctx: (ctx.method, ctx.host))}, config=config
    )

    status, body = _dispatch(dispatcher, FakeAdapter(host="h.example"))

    assert (status, body) == (200, ["POST", "h.example"])


def test_async_projection_is_awaited(config):
    async def project(ctx):
        await asyncio.sleep(0)
        return [ctx.host]

    dispatcher = Dispatcher({"host": context(project)}, config=config)

    status, body = _dispatch(dispatcher, FakeAdapter(host="async.example"))

    assert (status, body) == (200, "async.example")


def test_single_capsule_does_not_require_a_valid_envelope(config):
    dispatcher = Dispatcher({"host": context(lambda ctx: [ctx.host])}, config=config)

    status, body = _dispatch(dispatcher, FakeAdapter(body=b"not json at all"))

    assert (status, body) == (200, "api.example.test")


def test_capsule_exposes_raw_body_to_projection(config):
    dispatcher = Dispatcher(
        {"size": context(lambda ctx: [len(ctx.body)], lambda size: size)},
        config=config,
    )

    status, body = _dispatch(dispatcher, FakeAdapter(body=b"0123456789"))

    assert (status, body) == (200, 10)


def test_projection_failure_is_reported_as_call_failure(config):
    # Assumed contract: a raising projection is handled like a raising function.
    def project(ctx):
        raise LookupError("no tenant for host")

    called = []
    dispatcher = Dispatcher(
        {"tenant": context(project, lambda tenant: called.append(tenant))},
        config=config,
    )

    status, body = _dispatch(dispatcher, FakeAdapter())

    assert status == 500
    assert body == {"error": {"message": "no tenant for host", "code": "CALL_FAILURE"}}
    assert called == []


def test_context_rejects_non_callables():
    with pytest.raises(TypeError):
        context("not callable")
    with pytest.raises(TypeError):
        context(lambda ctx: ctx, function=42)


def test_capsule_cannot_be_bound_twice():
    capsule = context(lambda ctx: ctx)(lambda value: value)

    with pytest.raises(TypeError):
        capsule(lambda value: value)


def test_as_arguments_spreads_only_sequences():
    assert ContextCapsule.as_arguments([1, 2]) == (1, 2)
    assert ContextCapsule.as_arguments((1,)) == (1,)
    assert ContextCapsule.as_arguments({"a": 1}) == ({"a": 1},)
    assert ContextCapsule.as_arguments("text") == ("text",)
    assert ContextCapsule.as_arguments(None) == (None,)
