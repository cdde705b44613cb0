#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Structured exception hierarchy for modular-rpc.

Dispatch errors describe request-level failures and know how to render
themselves as wire payloads. Construction-time errors (registry, adapter
selection) are raised straight to the integrator.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from http import HTTPStatus
from typing import Any, Dict, Optional

from ..models import ErrorKind

__all__ = [
    "ModularRpcError",
    "DispatchError",
    "MalformedPayloadError",
    "UnknownFunctionError",
    "MethodNotAllowedError",
    "CallFailureError",
    "ResultEncodingError",
    "RegistryError",
    "AdapterConfigurationError",
    "ExceptionFormatter",
    "ExceptionTranslator",
]


class ModularRpcError(Exception):
    """
    Base class for all modular-rpc errors.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context: Dict[str, Any] = {
            key: value for key, value in context.items() if value is not None
        }

    def __str__(self) -> str:
        return self.message


class DispatchError(ModularRpcError):
    """
    Failure of a single dispatched request.
    """

    kind: ErrorKind = ErrorKind.CALL_FAILURE

    @property
    def status_code(self) -> int:
        return int(self.kind.status)

    @property
    def error_type(self) -> str:
        """
        Class name of the underlying failure, or of this error when none.
        """
        if self.cause is not None:
            return self.cause.__class__.__name__
        return self.__class__.__name__

    def to_payload(self, include_type: bool = False) -> Dict[str, Any]:
        error: Dict[str, Any] = {
            "message": self.message,
            "code": self.kind.value,
        }
        if include_type:
            error["type"] = self.error_type
        return {"error": error}


class MalformedPayloadError(DispatchError):
    """
    Request body is not valid JSON or not a valid call envelope.
    """

    kind = ErrorKind.MALFORMED_PAYLOAD


class UnknownFunctionError(DispatchError):
    """
    Requested function name is not registered.
    """

    kind = ErrorKind.UNKNOWN_FUNCTION

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause=cause, function_name=function_name)
        self.function_name = function_name


class MethodNotAllowedError(DispatchError):
    """
    HTTP method is outside the configured allow-list.
    """

    kind = ErrorKind.METHOD_NOT_ALLOWED

    def __init__(self, method: str, allowed: Any = None) -> None:
        super().__init__(
            "HTTP method not allowed: {0}".format(method),
            method=method,
            allowed=allowed,
        )
        self.method = method


class CallFailureError(DispatchError):
    """
    Registered function (or its context projection) raised.
    """

    kind = ErrorKind.CALL_FAILURE

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause=cause, function_name=function_name)
        self.function_name = function_name


class ResultEncodingError(CallFailureError):
    """
    Function result could not be encoded as JSON.
    """


class RegistryError(ModularRpcError, ValueError):
    """
    Invalid function registry passed at construction time.
    """


class AdapterConfigurationError(ModularRpcError, ValueError):
    """
    Unknown adapter name or invalid adapter object.
    """


class ExceptionFormatter:
    """
    Formatting helpers for log output.
    """

    @staticmethod
    def exception_message(exc: BaseException) -> str:
        message = str(exc).strip()
        return message or exc.__class__.__name__

    @classmethod
    def format_exception_summary(cls, exc: BaseException) -> str:
        return "{0}: {1}".format(exc.__class__.__name__, cls.exception_message(exc))


class ExceptionTranslator:
    """
    Convert arbitrary exceptions into dispatch errors.

    Only the exception message crosses the wire; tracebacks stay server-side.
    """

    @staticmethod
    def as_call_failure(
        exc: BaseException, function_name: Optional[str] = None
    ) -> CallFailureError:
        if isinstance(exc, CallFailureError):
            return exc
        return CallFailureError(
            message=ExceptionFormatter.exception_message(exc),
            function_name=function_name,
            cause=exc,
        )

    @staticmethod
    def as_malformed_payload(
        exc: BaseException, detail: Optional[str] = None
    ) -> MalformedPayloadError:
        if isinstance(exc, MalformedPayloadError):
            return exc
        return MalformedPayloadError(
            message=detail or ExceptionFormatter.exception_message(exc),
            cause=exc,
        )

    @staticmethod
    def as_result_encoding_error(
        exc: BaseException, function_name: Optional[str] = None
    ) -> ResultEncodingError:
        if isinstance(exc, ResultEncodingError):
            return exc
        return ResultEncodingError(
            message="Result is not JSON serializable: {0}".format(
                ExceptionFormatter.exception_message(exc)
            ),
            function_name=function_name,
            cause=exc,
        )
