#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Serverless function adapter.

Serves API Gateway / Lambda proxy events (payload format 1.0 and 2.0) and the
similar ``{method, headers, query, body}`` events of function platforms. The
handler returns the proxy response dict.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import base64
import binascii
from typing import Any, Dict, Mapping, Optional

from ..core.models import AdapterName, RequestContext
from ..core.utils.exceptions import ExceptionTranslator
from .base import (
    JSON_CONTENT_TYPE,
    FrameworkAdapter,
    build_context,
    normalize_headers,
    parse_cookie_header,
)


class ServerlessAdapter(FrameworkAdapter):
    name = AdapterName.SERVERLESS
    asynchronous = False

    def __init__(self, event: Mapping[str, Any], context: Any = None) -> None:
        super().__init__()
        self.event = event
        self.context = context
        self.headers = normalize_headers(
            (str(key), str(value)) for key, value in (event.get("headers") or {}).items()
        )

    def get_method(self) -> str:
        http = (self.event.get("requestContext") or {}).get("http") or {}
        method = (
            self.event.get("httpMethod")
            or http.get("method")
            or self.event.get("method")
            or "POST"
        )
        return str(method).upper()

    async def read_body(self) -> Any:
        body = self.event.get("body")
        if self.event.get("isBase64Encoded") and isinstance(body, str):
            try:
                return base64.b64decode(body, validate=True)
            except binascii.Error as exc:
                raise ExceptionTranslator.as_malformed_payload(
                    exc, "Request body is not valid base64"
                ) from exc
        return body

    def get_query(self) -> Dict[str, str]:
        query = self.event.get("queryStringParameters") or self.event.get("query") or {}
        return {str(key): str(value) for key, value in query.items()}

    def _cookies(self) -> Dict[str, str]:
        cookies = self.event.get("cookies")
        if isinstance(cookies, list):
            return parse_cookie_header("; ".join(cookies))
        return parse_cookie_header(self.headers.get("cookie"))

    def _path(self) -> Optional[str]:
        return self.event.get("rawPath") or self.event.get("path") or "/"

    async def get_raw_context(self) -> RequestContext:
        return build_context(
            method=self.get_method(),
            host=self.headers.get("host"),
            path=self._path(),
            headers=self.headers,
            query=self.get_query(),
            cookies=self._cookies(),
            body=await self.get_raw_body(),
            native=self.event,
        )

    async def write_response(self, status: int, body: bytes) -> Dict[str, Any]:
        return {
            "statusCode": status,
            "headers": {"Content-Type": JSON_CONTENT_TYPE},
            "body": body.decode("utf-8"),
            "isBase64Encoded": False,
        }
