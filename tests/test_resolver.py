"""Tests for attribute-versus-operation resolution"""

import pytest

from jmxclient.bean.feature import BeanInfo, FeatureDescriptor, FeatureKind, ParameterDescriptor
from jmxclient.bean.resolver import FeatureResolver, guess_kind, resolve


def _attr(name: str) -> FeatureDescriptor:
    return FeatureDescriptor.attribute(name, "java.lang.String")


def _op(name: str, *types: str) -> FeatureDescriptor:
    return FeatureDescriptor.operation(name, [ParameterDescriptor(f"p{i}", t) for i, t in enumerate(types)])


def test_guess_kind_follows_naming_convention():
    assert guess_kind("Status") is FeatureKind.ATTRIBUTE
    assert guess_kind("schedule") is FeatureKind.OPERATION
    assert guess_kind("_internal") is FeatureKind.OPERATION
    assert guess_kind("9lives") is FeatureKind.OPERATION


# ============================================================================
# Conventional beans
# ============================================================================


def test_uppercase_name_resolves_to_attribute():
    status = _attr("Status")
    assert resolve("Status", [status], [_op("schedule")]) is status


def test_lowercase_name_resolves_to_operation():
    schedule = _op("schedule", "java.lang.String")
    assert resolve("schedule", [_attr("Status")], [schedule]) is schedule


# Uppercase name prefers the attribute when both kinds share the name
def test_uppercase_name_prefers_attribute_when_both_exist():
    attr = _attr("Reset")
    op = _op("Reset")
    assert resolve("Reset", [attr], [op]) is attr


def test_lowercase_name_prefers_operation_when_both_exist():
    attr = _attr("reset")
    op = _op("reset")
    assert resolve("reset", [attr], [op]) is op


# ============================================================================
# Non-conforming beans
# ============================================================================


# Uppercase operation name falls back to the operation
def test_uppercase_operation_falls_back_to_operation():
    status_op = _op("Status")
    resolved = resolve("Status", [], [status_op])
    assert resolved is status_op
    assert resolved.is_operation


# Lowercase attribute name falls back to the attribute
def test_lowercase_attribute_falls_back_to_attribute():
    cache_size = _attr("cacheSize")
    resolved = resolve("cacheSize", [cache_size], [_op("evict")])
    assert resolved is cache_size
    assert resolved.is_attribute


@pytest.mark.parametrize("name", ["Status", "status", "STATUS", "x"])
def test_name_in_exactly_one_list_always_resolves_to_it(name):
    attr = _attr(name)
    op = _op(name)
    assert resolve(name, [attr], []) is attr
    assert resolve(name, [], [op]) is op


# ============================================================================
# Unknown names
# ============================================================================


# A name in neither list keeps the conventional guess for the agent to reject
def test_unknown_uppercase_name_resolves_to_undeclared_attribute():
    resolved = resolve("Missing", [_attr("Status")], [_op("schedule")])
    assert resolved == FeatureDescriptor.undeclared("Missing", FeatureKind.ATTRIBUTE)
    assert not resolved.declared
    assert resolved.is_attribute


def test_unknown_lowercase_name_resolves_to_undeclared_operation():
    resolved = resolve("missing", [], [])
    assert resolved.is_operation
    assert not resolved.declared
    assert not resolved.returns_void


def test_match_is_case_sensitive():
    status = _attr("Status")
    resolved = resolve("status", [status], [])
    assert resolved is not status
    assert resolved.is_operation
    assert not resolved.declared


# Overloaded operations resolve to the first declared overload
def test_overloaded_operation_resolves_to_first():
    first = _op("reset")
    second = _op("reset", "int")
    resolver = FeatureResolver.for_bean(BeanInfo(operations=[first, second]))
    assert resolver.resolve("reset") is first
