#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pytest bootstrap for local package imports and shared test doubles.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import json
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from modular_rpc.adapters.base import FrameworkAdapter  # noqa: E402
from modular_rpc.core.config import ModularConfig  # noqa: E402
from modular_rpc.core.models import RequestContext  # noqa: E402


class FakeAdapter(FrameworkAdapter):
    """
    In-memory adapter recording what the dispatcher writes.
    """

    def __init__(
        self,
        body=None,
        method="POST",
        query=None,
        host="api.example.test",
        headers=None,
    ):
        super().__init__()
        self.body = body
        self.method = method
        self.query = dict(query or {})
        self.host = host
        self.headers = dict(headers or {})
        self.body_reads = 0
        self.responses = []

    @classmethod
    def with_json(cls, payload, **kwargs):
        return cls(body=json.dumps(payload).encode("utf-8"), **kwargs)

    def get_method(self):
        return self.method

    async def read_body(self):
        self.body_reads += 1
        return self.body

    def get_query(self):
        return dict(self.query)

    async def get_raw_context(self):
        return RequestContext(
            method=self.method,
            host=self.host,
            path="/rpc",
            headers=self.headers,
            query=self.query,
            body=await self.get_raw_body(),
            native=self,
        )

    async def write_response(self, status, body):
        response = (status, json.loads(body.decode("utf-8")))
        self.responses.append(response)
        return response


@pytest.fixture
def config():
    return ModularConfig(log_level="critical")
