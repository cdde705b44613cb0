#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
aiohttp.web adapter.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from typing import Dict, Optional

from aiohttp import web

from ..core.models import AdapterName, RequestContext
from .base import JSON_CONTENT_TYPE, FrameworkAdapter, build_context, normalize_headers


class AiohttpAdapter(FrameworkAdapter):
    name = AdapterName.AIOHTTP

    def __init__(self, request: web.Request) -> None:
        super().__init__()
        self.request = request

    def get_method(self) -> str:
        return self.request.method.upper()

    async def read_body(self) -> Optional[bytes]:
        if not self.request.body_exists:
            return None
        return await self.request.read()

    def get_query(self) -> Dict[str, str]:
        return dict(self.request.query)

    async def get_raw_context(self) -> RequestContext:
        return build_context(
            method=self.request.method,
            host=self.request.host,
            path=self.request.path,
            headers=normalize_headers(self.request.headers.items()),
            query=self.get_query(),
            cookies=dict(self.request.cookies),
            body=await self.get_raw_body(),
            native=self.request,
        )

    async def write_response(self, status: int, body: bytes) -> web.Response:
        return web.Response(body=body, status=status, content_type=JSON_CONTENT_TYPE)
