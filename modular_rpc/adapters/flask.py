#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Flask adapter.

The handler is a regular view function. Flask views are synchronous, so each
call runs the dispatch coroutine to completion before returning the response.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from typing import Any, Dict

from flask import current_app, request

from ..core.models import AdapterName, RequestContext
from .base import JSON_CONTENT_TYPE, FrameworkAdapter, build_context, normalize_headers


class FlaskAdapter(FrameworkAdapter):
    name = AdapterName.FLASK
    asynchronous = False

    def __init__(self, **view_args: Any) -> None:
        super().__init__()
        # Bound here, in the request thread, so dispatch may run elsewhere.
        self.request = request._get_current_object()
        self.app = current_app._get_current_object()
        self.view_args = view_args

    def get_method(self) -> str:
        return self.request.method.upper()

    async def read_body(self) -> bytes:
        return self.request.get_data(cache=True)

    def get_query(self) -> Dict[str, str]:
        return self.request.args.to_dict()

    async def get_raw_context(self) -> RequestContext:
        return build_context(
            method=self.request.method,
            host=self.request.host,
            path=self.request.path,
            headers=normalize_headers(self.request.headers.items()),
            query=self.get_query(),
            cookies=self.request.cookies.to_dict(),
            body=await self.get_raw_body(),
            native=self.request,
        )

    async def write_response(self, status: int, body: bytes) -> Any:
        return self.app.response_class(body, status=status, mimetype=JSON_CONTENT_TYPE)
