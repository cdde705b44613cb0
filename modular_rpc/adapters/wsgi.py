#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Bare WSGI adapter.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from http import HTTPStatus
from typing import Any, Callable, Dict, List, Mapping

from ..core.models import AdapterName, RequestContext
from .base import (
    JSON_CONTENT_TYPE,
    FrameworkAdapter,
    build_context,
    normalize_headers,
    parse_query_string,
)

_UNPREFIXED_HEADERS = {"CONTENT_TYPE": "content-type", "CONTENT_LENGTH": "content-length"}


def _environ_headers(environ: Mapping[str, Any]) -> Dict[str, str]:
    pairs = []
    for key, value in environ.items():
        if key.startswith("HTTP_"):
            pairs.append((key[5:].replace("_", "-"), str(value)))
        elif key in _UNPREFIXED_HEADERS and value:
            pairs.append((_UNPREFIXED_HEADERS[key], str(value)))
    return normalize_headers(pairs)


class WSGIAdapter(FrameworkAdapter):
    name = AdapterName.WSGI
    asynchronous = False

    def __init__(self, environ: Dict[str, Any], start_response: Callable[..., Any]) -> None:
        super().__init__()
        self.environ = environ
        self.start_response = start_response
        self.headers = _environ_headers(environ)

    def get_method(self) -> str:
        return str(self.environ.get("REQUEST_METHOD", "GET")).upper()

    async def read_body(self) -> bytes:
        stream = self.environ["wsgi.input"]
        raw_length = self.environ.get("CONTENT_LENGTH")
        if not raw_length:
            # Chunked bodies carry no length; the server marks the stream as terminated.
            if self.environ.get("wsgi.input_terminated"):
                return stream.read()
            return b""
        try:
            length = int(raw_length)
        except ValueError:
            length = 0
        if length <= 0:
            return b""
        return stream.read(length)

    def get_query(self) -> Dict[str, str]:
        return parse_query_string(self.environ.get("QUERY_STRING"))

    def _host(self) -> Any:
        host = self.environ.get("HTTP_HOST")
        if host:
            return host
        name = self.environ.get("SERVER_NAME")
        port = self.environ.get("SERVER_PORT")
        if name and port and port not in ("80", "443"):
            return "{0}:{1}".format(name, port)
        return name

    async def get_raw_context(self) -> RequestContext:
        return build_context(
            method=self.get_method(),
            host=self._host(),
            path=self.environ.get("PATH_INFO", "/"),
            headers=self.headers,
            query=self.get_query(),
            body=await self.get_raw_body(),
            native=self.environ,
        )

    async def write_response(self, status: int, body: bytes) -> List[bytes]:
        self.start_response(
            "{0} {1}".format(status, HTTPStatus(status).phrase),
            [("Content-Type", JSON_CONTENT_TYPE), ("Content-Length", str(len(body)))],
        )
        return [body]
