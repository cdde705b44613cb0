#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for the immutable function registry.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import pytest

from modular_rpc.core.capsule import context
from modular_rpc.core.registry import FunctionRegistry
from modular_rpc.core.utils.exceptions import RegistryError


def add(x, y):
    return x + y


def test_registry_accepts_functions_and_capsules():
    host = context(lambda ctx: [ctx.host])
    registry = FunctionRegistry({"add": add}, host=host)

    assert sorted(registry) == ["add", "host"]
    assert registry["add"] is add
    assert FunctionRegistry.is_context_entry(registry["host"]) is True
    assert FunctionRegistry.is_context_entry(registry["add"]) is False


def test_registry_copies_its_input():
    functions = {"add": add}
    registry = FunctionRegistry(functions)

    functions["other"] = add

    assert "other" not in registry
    assert len(registry) == 1


def test_registry_cannot_be_mutated():
    registry = FunctionRegistry({"add": add})

    with pytest.raises(TypeError):
        registry["other"] = add
    with pytest.raises(TypeError):
        registry._entries["other"] = add


def test_empty_registry_is_rejected():
    with pytest.raises(RegistryError):
        FunctionRegistry({})


@pytest.mark.parametrize("name", ["", "   ", 3, None])
def test_invalid_names_are_rejected(name):
    with pytest.raises(RegistryError):
        FunctionRegistry({name: add})


def test_non_callable_entry_is_rejected():
    with pytest.raises(RegistryError) as excinfo:
        FunctionRegistry({"value": 42})

    assert excinfo.value.context["function_name"] == "value"


def test_duplicate_keyword_entry_is_rejected():
    with pytest.raises(RegistryError):
        FunctionRegistry({"add": add}, add=add)


def test_single_entry_shorthand():
    registry = FunctionRegistry({"add": add})

    assert registry.is_single is True
    assert registry.single_entry == ("add", add)

    multi = FunctionRegistry({"add": add, "also": add})
    assert multi.is_single is False
    with pytest.raises(RegistryError):
        multi.single_entry


def test_from_value_reuses_registry_and_rejects_non_mappings():
    registry = FunctionRegistry({"add": add})

    assert FunctionRegistry.from_value(registry) is registry
    assert dict(FunctionRegistry.from_value({"add": add})) == {"add": add}
    with pytest.raises(RegistryError):
        FunctionRegistry.from_value([add])


def test_registry_error_is_a_value_error():
    with pytest.raises(ValueError):
        FunctionRegistry({})
