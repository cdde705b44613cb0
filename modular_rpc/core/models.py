#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Wire-level data structures shared by the dispatcher and framework adapters.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Tuple, Union


class AdapterName(str, Enum):
    """
    Built-in host framework adapters.
    """

    STARLETTE = "starlette"
    FLASK = "flask"
    AIOHTTP = "aiohttp"
    ASGI = "asgi"
    WSGI = "wsgi"
    SERVERLESS = "serverless"

    @classmethod
    def from_value(cls, value: Union["AdapterName", str]) -> "AdapterName":
        """
        Parse adapter name from enum/string.
        """
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class ErrorKind(str, Enum):
    """
    Failure kinds surfaced to remote callers.
    """

    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    UNKNOWN_FUNCTION = "UNKNOWN_FUNCTION"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CALL_FAILURE = "CALL_FAILURE"

    @property
    def status(self) -> HTTPStatus:
        return _ERROR_STATUS[self]


_ERROR_STATUS: Dict[ErrorKind, HTTPStatus] = {
    ErrorKind.MALFORMED_PAYLOAD: HTTPStatus.BAD_REQUEST,
    ErrorKind.UNKNOWN_FUNCTION: HTTPStatus.NOT_FOUND,
    ErrorKind.METHOD_NOT_ALLOWED: HTTPStatus.METHOD_NOT_ALLOWED,
    ErrorKind.CALL_FAILURE: HTTPStatus.INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class RequestContext:
    """
    Request metadata handed to context capsule projections.

    ``host`` is the Host header as the framework reports it (port included
    when the client sent one). ``native`` is the untouched framework request
    object for anything the normalized fields do not cover.
    """

    method: str
    host: Optional[str] = None
    path: str = "/"
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    native: Any = None


@dataclass
class CallEnvelope:
    """
    Normalized call request: which function and with which arguments.
    """

    name: Optional[str] = None
    args: Tuple[Any, ...] = field(default_factory=tuple)
    kwargs: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "CallEnvelope":
        """
        Build an envelope from a decoded JSON body.

        Raises ``ValueError`` describing the first invalid field.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Call envelope must be a JSON object")

        name = payload.get("name")
        if name is not None and not isinstance(name, str):
            raise ValueError("Call envelope 'name' must be a string")

        raw_args = payload.get("args")
        if raw_args is None:
            raw_args = ()
        elif not isinstance(raw_args, (list, tuple)):
            raise ValueError("Call envelope 'args' must be an array")

        raw_kwargs = payload.get("kwargs")
        if raw_kwargs is None:
            raw_kwargs = {}
        elif not isinstance(raw_kwargs, Mapping):
            raise ValueError("Call envelope 'kwargs' must be an object")

        return cls(
            name=name.strip() if name is not None else None,
            args=tuple(raw_args),
            kwargs=dict(raw_kwargs),
        )

    @classmethod
    def from_query(cls, query: Mapping[str, str]) -> "CallEnvelope":
        """
        Build an envelope from query parameters (``?name=add&args=[2,3]``).
        """
        raw_args = query.get("args")
        args: Any = ()
        if raw_args:
            try:
                args = json.loads(raw_args)
            except ValueError as exc:
                raise ValueError("Query parameter 'args' is not valid JSON") from exc

        return cls.from_payload({"name": query.get("name") or None, "args": args})
