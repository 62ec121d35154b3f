"""Tests for object name parsing"""

import pytest

from jmxclient.errors import MalformedObjectNameError
from jmxclient.object_name import ObjectName


def test_parse_simple_name():
    name = ObjectName.from_string("java.lang:type=Memory")
    assert name.domain == "java.lang"
    assert name.properties == [("type", "Memory")]
    assert name.get_key_property("type") == "Memory"
    assert name.get_key_property("name") is None
    assert not name.is_pattern


# Canonical form sorts properties; declaration order is kept otherwise
def test_canonical_name_sorts_properties():
    name = ObjectName.from_string("org.archive.crawler:type=Service,name=Heritrix")
    assert name.key_property_string == "type=Service,name=Heritrix"
    assert name.canonical_name == "org.archive.crawler:name=Heritrix,type=Service"
    assert str(name) == "org.archive.crawler:type=Service,name=Heritrix"


def test_equality_uses_canonical_name():
    a = ObjectName.from_string("d:b=2,a=1")
    b = ObjectName.from_string("d:a=1,b=2")
    assert a == b
    assert hash(a) == hash(b)
    assert a != "d:a=1,b=2"


def test_sorting_by_canonical_name():
    names = [ObjectName.from_string(n) for n in ["java.lang:type=Threading", "java.lang:type=Memory"]]
    assert [n.canonical_name for n in sorted(names)] == ["java.lang:type=Memory", "java.lang:type=Threading"]


# ============================================================================
# Patterns
# ============================================================================


def test_property_pattern():
    name = ObjectName.from_string("java.lang:type=GarbageCollector,*")
    assert name.property_pattern
    assert name.is_pattern
    assert name.canonical_name == "java.lang:type=GarbageCollector,*"


def test_wildcard_matches_everything():
    name = ObjectName.from_string("*:*")
    assert name.is_domain_pattern
    assert name.property_pattern
    assert name.properties == []
    assert ObjectName.wildcard() == name
    assert ObjectName.wildcard().to_string() == "*:*"


def test_value_pattern():
    assert ObjectName.from_string("java.lang:type=Memory*").is_property_value_pattern
    assert not ObjectName.from_string('d:name="a*b"').is_property_value_pattern


def test_quoted_value_may_hold_separators():
    name = ObjectName.from_string('d:name="a,b=c:d",type=X')
    assert name.get_key_property("name") == '"a,b=c:d"'
    assert name.get_key_property("type") == "X"


# ============================================================================
# Malformed names
# ============================================================================


@pytest.mark.parametrize(
    "text, reason",
    [
        ("java.lang", "followed by ':'"),
        ("java.lang:", "cannot be empty"),
        ("d:type", "has no '='"),
        ("d:=x", "empty key"),
        ("d:type=", "empty value"),
        ("d:a=1,a=2", "already defined"),
        ("d:a=1,", "trailing"),
        ("d:a=x:y", "invalid character"),
        ('d:a="open', "missing closing quote"),
        ("d:a*=1", "invalid character in key"),
        ("d:*,*", "twice"),
    ],
)
def test_malformed_names(text, reason):
    with pytest.raises(MalformedObjectNameError, match=reason):
        ObjectName.from_string(text)
