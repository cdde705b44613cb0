#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for the Starlette / FastAPI adapter through the framework test client.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import asyncio

import pytest

pytest.importorskip("starlette")
pytest.importorskip("httpx")

from starlette.applications import Starlette  # noqa: E402
from starlette.routing import Route  # noqa: E402
from starlette.testclient import TestClient  # noqa: E402

from modular_rpc import context, modular  # noqa: E402
from modular_rpc.core.config import ModularConfig  # noqa: E402

QUIET = ModularConfig(log_level="critical")


async def greet(name):
    await asyncio.sleep(0)
    return {"hi": name}


def _client(handler, methods=("POST",)):
    app = Starlette(routes=[Route("/rpc", handler, methods=list(methods))])
    return TestClient(app)


def test_single_function_call():
    client = _client(modular({"add": lambda x, y: x + y}, adapter="starlette", config=QUIET))

    response = client.post("/rpc", json={"args": [2, 3]})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == 5


def test_named_async_call_and_unknown_function():
    client = _client(
        modular({"greet": greet, "add": lambda x, y: x + y}, adapter="starlette", config=QUIET)
    )

    ok = client.post("/rpc", json={"name": "greet", "args": ["there"]})
    missing = client.post("/rpc", json={"name": "nope", "args": []})

    assert ok.status_code == 200
    assert ok.json() == {"hi": "there"}
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "UNKNOWN_FUNCTION"


def test_malformed_body_is_a_structured_400():
    client = _client(
        modular({"greet": greet, "add": lambda x, y: x + y}, adapter="starlette", config=QUIET)
    )

    response = client.post(
        "/rpc", content=b"{broken", headers={"content-type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MALFORMED_PAYLOAD"


def test_failure_is_a_structured_500():
    def explode():
        raise ValueError("bad")

    client = _client(modular({"explode": explode}, adapter="starlette", config=QUIET))

    response = client.post("/rpc", json={})

    assert response.status_code == 500
    assert response.json() == {"error": {"message": "bad", "code": "CALL_FAILURE"}}


def test_context_capsule_sees_host_and_headers():
    whoami = context(
        lambda ctx: [ctx.host, ctx.headers.get("x-team"), ctx.path],
        lambda host, team, path: {"host": host, "team": team, "path": path},
    )
    client = _client(modular({"whoami": whoami}, adapter="starlette", config=QUIET))

    response = client.post("/rpc", json={"args": [1]}, headers={"x-team": "core"})

    assert response.status_code == 200
    assert response.json() == {"host": "testserver", "team": "core", "path": "/rpc"}


def test_get_with_query_string():
    client = _client(
        modular({"add": lambda x, y: x + y, "neg": lambda x: -x}, adapter="starlette", config=QUIET),
        methods=("GET", "POST"),
    )

    response = client.get("/rpc", params={"name": "neg", "args": "[7]"})

    assert response.status_code == 200
    assert response.json() == -7


def test_fastapi_route_registration():
    fastapi = pytest.importorskip("fastapi")

    app = fastapi.FastAPI()
    app.add_api_route(
        "/rpc",
        modular({"add": lambda x, y: x + y}, adapter="starlette", config=QUIET),
        methods=["POST"],
    )
    client = TestClient(app)

    response = client.post("/rpc", json={"args": [20, 22]})

    assert response.status_code == 200
    assert response.json() == 42
