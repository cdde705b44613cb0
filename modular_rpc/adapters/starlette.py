#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Starlette / FastAPI adapter.

The handler is an endpoint taking the ``Request`` and returning a
``Response``, so it can be mounted with ``Route``, ``app.add_route`` or
FastAPI's ``app.add_api_route``.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from typing import Any, Callable, Dict, TYPE_CHECKING

from starlette.requests import Request
from starlette.responses import Response

from ..core.models import AdapterName, RequestContext
from .base import JSON_CONTENT_TYPE, FrameworkAdapter, build_context

if TYPE_CHECKING:
    from ..core.dispatcher import Dispatcher


class StarletteAdapter(FrameworkAdapter):
    name = AdapterName.STARLETTE

    def __init__(self, request: Request) -> None:
        super().__init__()
        self.request = request

    def get_method(self) -> str:
        return self.request.method.upper()

    async def read_body(self) -> bytes:
        return await self.request.body()

    def get_query(self) -> Dict[str, str]:
        return dict(self.request.query_params)

    async def get_raw_context(self) -> RequestContext:
        return build_context(
            method=self.request.method,
            host=self.request.headers.get("host"),
            path=self.request.url.path,
            headers=dict(self.request.headers),
            query=self.get_query(),
            cookies=dict(self.request.cookies),
            body=await self.get_raw_body(),
            native=self.request,
        )

    async def write_response(self, status: int, body: bytes) -> Response:
        return Response(content=body, status_code=status, media_type=JSON_CONTENT_TYPE)

    @classmethod
    def create_handler(cls, dispatcher: "Dispatcher") -> Callable[..., Any]:
        # FastAPI injects by annotation, so the parameter must be typed.
        async def handler(request: Request) -> Response:
            return await dispatcher.dispatch(cls(request))

        return cls._finalize_handler(handler, dispatcher)
