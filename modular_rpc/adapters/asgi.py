#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Bare ASGI adapter.

The handler is itself an ASGI application: the response is written with
explicit ``send`` calls instead of being returned.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from typing import Any, Awaitable, Callable, Dict, MutableMapping, TYPE_CHECKING

from ..core.models import AdapterName, RequestContext
from .base import (
    JSON_CONTENT_TYPE,
    FrameworkAdapter,
    build_context,
    normalize_headers,
    parse_query_string,
)

if TYPE_CHECKING:
    from ..core.dispatcher import Dispatcher

Scope = MutableMapping[str, Any]
Message = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]


class ASGIAdapter(FrameworkAdapter):
    name = AdapterName.ASGI

    def __init__(self, scope: Scope, receive: Receive, send: Send) -> None:
        super().__init__()
        self.scope = scope
        self.receive = receive
        self.send = send
        self.headers = normalize_headers(
            (key.decode("latin-1"), value.decode("latin-1"))
            for key, value in scope.get("headers", [])
        )

    def get_method(self) -> str:
        return str(self.scope.get("method", "GET")).upper()

    async def read_body(self) -> bytes:
        chunks = []
        while True:
            message = await self.receive()
            if message["type"] == "http.disconnect":
                break
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        return b"".join(chunks)

    def get_query(self) -> Dict[str, str]:
        return parse_query_string(self.scope.get("query_string", b"").decode("latin-1"))

    def _host(self) -> Any:
        host = self.headers.get("host")
        if host:
            return host
        server = self.scope.get("server")
        if server:
            name, port = server
            return "{0}:{1}".format(name, port) if port else name
        return None

    async def get_raw_context(self) -> RequestContext:
        return build_context(
            method=self.get_method(),
            host=self._host(),
            path=self.scope.get("path", "/"),
            headers=self.headers,
            query=self.get_query(),
            body=await self.get_raw_body(),
            native=self.scope,
        )

    async def write_response(self, status: int, body: bytes) -> None:
        await self.send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": [
                    (b"content-type", JSON_CONTENT_TYPE.encode("latin-1")),
                    (b"content-length", str(len(body)).encode("latin-1")),
                ],
            }
        )
        await self.send({"type": "http.response.body", "body": body})

    @staticmethod
    async def serve_lifespan(receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    @classmethod
    def create_handler(cls, dispatcher: "Dispatcher") -> Callable[..., Any]:
        async def handler(scope: Scope, receive: Receive, send: Send) -> None:
            if scope["type"] == "lifespan":
                await cls.serve_lifespan(receive, send)
                return
            if scope["type"] != "http":
                raise ValueError("Unsupported ASGI scope type: {0}".format(scope["type"]))
            await dispatcher.dispatch(cls(scope, receive, send))

        return cls._finalize_handler(handler, dispatcher)
