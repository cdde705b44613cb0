#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Framework adapter contract.

Every host framework integration implements ``FrameworkAdapter``. An adapter
only translates between the host's native request/response objects and the
small capability set the dispatcher uses; it never decides what to call.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import json
from abc import ABC, abstractmethod
from http.cookies import CookieError, SimpleCookie
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, Iterable, Mapping, Optional, Tuple
from urllib.parse import parse_qsl

from ..core.models import AdapterName, RequestContext
from ..core.utils.async_helpers import AsyncExecutionHelper
from ..core.utils.exceptions import DispatchError, ExceptionTranslator

if TYPE_CHECKING:
    from ..core.dispatcher import Dispatcher

JSON_CONTENT_TYPE = "application/json"

_UNREAD = object()


class FrameworkAdapter(ABC):
    """
    Per-request bridge between one host framework and the dispatcher.

    Subclasses are constructed with the exact arguments the host passes to
    its handler, and implement the abstract hooks below.
    """

    name: ClassVar[Optional[AdapterName]] = None
    asynchronous: ClassVar[bool] = True

    def __init__(self) -> None:
        self._raw_body: Any = _UNREAD

    # -- request side --------------------------------------------------

    @abstractmethod
    def get_method(self) -> str:
        """
        HTTP method of the request, upper-case.
        """

    @abstractmethod
    async def read_body(self) -> Any:
        """
        Raw request body from the host: bytes, str, ``None``, or an already
        decoded payload.
        """

    @abstractmethod
    def get_query(self) -> Mapping[str, str]:
        """
        Query string parameters.
        """

    @abstractmethod
    async def get_raw_context(self) -> Any:
        """
        Request metadata handed unmodified to context projections.
        """

    async def get_raw_body(self) -> Any:
        """
        Raw body, read from the host at most once per request.
        """
        if self._raw_body is _UNREAD:
            self._raw_body = await self.read_body()
        return self._raw_body

    async def has_body(self) -> bool:
        """
        Whether the request carries a body. Empty or whitespace-only bodies do not count.
        """
        raw = await self.get_raw_body()
        if raw is None:
            return False
        if isinstance(raw, (bytes, bytearray)):
            return bool(raw.strip())
        if isinstance(raw, str):
            return bool(raw.strip())
        return True

    async def get_body(self) -> Any:
        """
        JSON-decoded request body, or ``None`` when the request has none.
        """
        raw = await self.get_raw_body()
        if raw is None:
            return None
        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ExceptionTranslator.as_malformed_payload(
                    exc, "Request body is not valid UTF-8"
                ) from exc
        if isinstance(raw, str):
            if not raw.strip():
                return None
            try:
                return json.loads(raw)
            except ValueError as exc:
                raise ExceptionTranslator.as_malformed_payload(
                    exc, "Request body is not valid JSON"
                ) from exc
        return raw

    # -- response side -------------------------------------------------

    @abstractmethod
    async def write_response(self, status: int, body: bytes) -> Any:
        """
        Write a JSON response through the host, honoring its convention.

        Whatever this returns is returned from the native handler.
        """

    @staticmethod
    def encode(value: Any) -> bytes:
        return json.dumps(value, ensure_ascii=False, allow_nan=False).encode("utf-8")

    async def send_result(self, value: Any) -> Any:
        try:
            body = self.encode(value)
        except (TypeError, ValueError) as exc:
            raise ExceptionTranslator.as_result_encoding_error(exc) from exc
        return await self.write_response(200, body)

    async def send_error(self, error: DispatchError, include_type: bool = False) -> Any:
        body = self.encode(error.to_payload(include_type=include_type))
        return await self.write_response(error.status_code, body)

    # -- handler construction ------------------------------------------

    @classmethod
    def create_handler(cls, dispatcher: "Dispatcher") -> Callable[..., Any]:
        """
        Build the framework-native handler serving ``dispatcher``.
        """
        if cls.asynchronous:

            async def handler(*args: Any, **kwargs: Any) -> Any:
                return await dispatcher.dispatch(cls(*args, **kwargs))

        else:

            def handler(*args: Any, **kwargs: Any) -> Any:
                return AsyncExecutionHelper.run_sync(
                    dispatcher.dispatch(cls(*args, **kwargs))
                )

        return cls._finalize_handler(handler, dispatcher)

    @classmethod
    def _finalize_handler(
        cls, handler: Callable[..., Any], dispatcher: "Dispatcher"
    ) -> Callable[..., Any]:
        handler.__name__ = handler.__qualname__ = "modular_{0}_handler".format(
            cls.name.value if cls.name is not None else cls.__name__.lower()
        )
        handler.dispatcher = dispatcher  # type: ignore[attr-defined]
        handler.adapter = cls  # type: ignore[attr-defined]
        return handler


# -- helpers shared by adapters that parse raw HTTP pieces themselves -----


def parse_query_string(query_string: Optional[str]) -> Dict[str, str]:
    if not query_string:
        return {}
    return dict(parse_qsl(query_string, keep_blank_values=True))


def parse_cookie_header(header: Optional[str]) -> Dict[str, str]:
    if not header:
        return {}
    cookie = SimpleCookie()
    try:
        cookie.load(header)
    except CookieError:
        return {}
    return {key: morsel.value for key, morsel in cookie.items()}


def normalize_headers(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for key, value in pairs:
        name = key.lower()
        if name in headers:
            headers[name] = "{0}, {1}".format(headers[name], value)
        else:
            headers[name] = value
    return headers


def build_context(
    method: str,
    host: Optional[str],
    path: str,
    headers: Mapping[str, str],
    query: Mapping[str, str],
    body: Any,
    native: Any,
    cookies: Optional[Mapping[str, str]] = None,
) -> RequestContext:
    return RequestContext(
        method=method.upper(),
        host=host,
        path=path or "/",
        headers=dict(headers),
        query=dict(query),
        cookies=dict(cookies) if cookies is not None else parse_cookie_header(headers.get("cookie")),
        body=body,
        native=native,
    )


__all__ = [
    "FrameworkAdapter",
    "JSON_CONTENT_TYPE",
    "build_context",
    "normalize_headers",
    "parse_cookie_header",
    "parse_query_string",
]
