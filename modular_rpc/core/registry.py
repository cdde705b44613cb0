#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Immutable function registry for one deployed handler.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional, Tuple, Union

from .capsule import ContextCapsule
from .utils.exceptions import RegistryError

RegistryEntry = Union[Callable[..., Any], ContextCapsule]


class FunctionRegistry(Mapping):
    """
    Read-only mapping from exposed name to callable or context capsule.

    The input mapping is copied at construction; later changes to it are not
    visible through the registry.
    """

    def __init__(
        self,
        functions: Optional[Mapping[str, RegistryEntry]] = None,
        **named: RegistryEntry,
    ) -> None:
        entries = dict(functions or {})
        for name, entry in named.items():
            if name in entries:
                raise RegistryError(
                    "Function registered twice: {0}".format(name), function_name=name
                )
            entries[name] = entry

        if not entries:
            raise RegistryError("At least one function must be registered")

        for name, entry in entries.items():
            self._validate_entry(name, entry)

        self._entries: Mapping[str, RegistryEntry] = MappingProxyType(entries)

    @staticmethod
    def _validate_entry(name: Any, entry: Any) -> None:
        if not isinstance(name, str) or not name.strip():
            raise RegistryError(
                "Function names must be non-empty strings, got {0!r}".format(name)
            )
        if not isinstance(entry, ContextCapsule) and not callable(entry):
            raise RegistryError(
                "Registry entry {0!r} is not callable".format(name), function_name=name
            )

    @classmethod
    def from_value(
        cls, value: Union["FunctionRegistry", Mapping[str, RegistryEntry]]
    ) -> "FunctionRegistry":
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise RegistryError(
                "Registry must be a mapping of name to function, got {0}".format(
                    type(value).__name__
                )
            )
        return cls(value)

    def __getitem__(self, name: str) -> RegistryEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return "FunctionRegistry({0})".format(", ".join(self._entries))

    @property
    def is_single(self) -> bool:
        """
        Single-function shorthand: every request targets the only entry.
        """
        return len(self._entries) == 1

    @property
    def single_entry(self) -> Tuple[str, RegistryEntry]:
        if not self.is_single:
            raise RegistryError("Registry holds {0} functions".format(len(self)))
        return next(iter(self._entries.items()))

    @staticmethod
    def is_context_entry(entry: RegistryEntry) -> bool:
        return isinstance(entry, ContextCapsule)
