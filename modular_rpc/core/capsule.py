#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Context capsules: registry entries whose arguments come from the request.

A capsule pairs a projection ``project(raw_context)`` with the function that
receives its result. The dispatcher calls the projection instead of reading
``args`` from the call envelope, so the function never has to know which
host framework served the request::

    @context(lambda ctx: [ctx.host])
    def whoami(host):
        return host

Registered without a function, a capsule answers with the projected value
itself.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Tuple


def _echo_arguments(*args: Any) -> Any:
    if len(args) == 1:
        return args[0]
    return list(args)


@dataclass(frozen=True)
class ContextCapsule:
    """
    Registry entry tagged for context injection.
    """

    project: Callable[[Any], Any]
    function: Optional[Callable[..., Any]] = None

    def __post_init__(self) -> None:
        if not callable(self.project):
            raise TypeError("context projection must be callable")
        if self.function is not None and not callable(self.function):
            raise TypeError("context function must be callable")

    def __call__(self, function: Callable[..., Any]) -> "ContextCapsule":
        """
        Decorator form: bind ``function`` to this capsule's projection.
        """
        if self.function is not None:
            raise TypeError("context capsule is already bound to a function")
        return replace(self, function=function)

    @property
    def target(self) -> Callable[..., Any]:
        return self.function if self.function is not None else _echo_arguments

    @staticmethod
    def as_arguments(projected: Any) -> Tuple[Any, ...]:
        """
        Lists and tuples spread positionally; anything else is the sole argument.
        """
        if isinstance(projected, (list, tuple)):
            return tuple(projected)
        return (projected,)


def context(
    project: Callable[[Any], Any],
    function: Optional[Callable[..., Any]] = None,
) -> ContextCapsule:
    """
    Mark a registry entry as needing request context.
    """
    return ContextCapsule(project=project, function=function)
