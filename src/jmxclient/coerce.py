"""Argument coercion - converting plain-text arguments to declared types

Beans declare attribute and parameter types by Java type name. Each name is
mapped to a parse function taking a single string, the equivalent of the
type's string constructor. Types without such a function cannot be set or
passed from the command line.
"""

import math
import re
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

from jmxclient.errors import (
    ArityMismatchError,
    CoercionFailedError,
    MalformedObjectNameError,
    UnsupportedTypeError,
)
from jmxclient.object_name import ObjectName


Converter = Callable[[str], Any]

# Optional sign followed by decimal digits
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
# Decimal or exponent float literal with optional f/d suffix
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?")
# Decimal or exponent literal without suffix (BigDecimal)
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
# Non-finite float literals
_FLOAT_SPECIALS = {
    "NaN": math.nan,
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}

# Bit widths of the Java integral types
_BYTE_BITS = 8
_SHORT_BITS = 16
_INT_BITS = 32
_LONG_BITS = 64


def integer_converter(type_name: str, bits: Optional[int]) -> Converter:
    """Build a parser for a signed integral type of the given width

    A width of None means unbounded (BigInteger).
    """

    def parse(raw: str) -> int:
        if not _INTEGER_RE.fullmatch(raw):
            raise CoercionFailedError(raw, type_name, "not an integer literal")
        value = int(raw)
        if bits is not None:
            low = -(1 << (bits - 1))
            high = (1 << (bits - 1)) - 1
            if value < low or value > high:
                raise CoercionFailedError(raw, type_name, f"out of range [{low}, {high}]")
        return value

    return parse


def float_converter(type_name: str) -> Converter:
    """Build a parser for a floating point type"""

    def parse(raw: str) -> float:
        text = raw.strip()
        if text in _FLOAT_SPECIALS:
            return _FLOAT_SPECIALS[text]
        if not _FLOAT_RE.fullmatch(text):
            raise CoercionFailedError(raw, type_name, "not a floating point literal")
        if text[-1] in "fFdD":
            text = text[:-1]
        return float(text)

    return parse


def parse_boolean(raw: str) -> bool:
    text = raw.lower()
    if text == "true":
        return True
    elif text == "false":
        return False
    raise CoercionFailedError(raw, "boolean", "expected 'true' or 'false'")


def parse_decimal(raw: str) -> Decimal:
    if not _DECIMAL_RE.fullmatch(raw):
        raise CoercionFailedError(raw, "java.math.BigDecimal", "not a decimal literal")
    return Decimal(raw)


def parse_object_name(raw: str) -> ObjectName:
    try:
        return ObjectName.from_string(raw)
    except MalformedObjectNameError as e:
        raise CoercionFailedError(raw, "javax.management.ObjectName", e.reason)


class TypeConverterRegistry:
    """Mapping from declared type name to a single-string parse function

    Pre-populated with the primitive and wrapper types, strings, big numbers
    and object names. Further types can be added with `register()`.
    """

    def __init__(self, converters: Optional[Dict[str, Converter]] = None):
        self.converters: Dict[str, Converter] = {}
        if converters is None:
            self._install_standard_converters()
        else:
            self.converters.update(converters)

    def _install_standard_converters(self) -> None:
        for names, bits in (
            (("byte", "java.lang.Byte", "Byte"), _BYTE_BITS),
            (("short", "java.lang.Short", "Short"), _SHORT_BITS),
            (("int", "java.lang.Integer", "Integer"), _INT_BITS),
            (("long", "java.lang.Long", "Long"), _LONG_BITS),
            (("java.math.BigInteger",), None),
        ):
            for name in names:
                self.register(name, integer_converter(name, bits))

        for name in ("float", "java.lang.Float", "Float", "double", "java.lang.Double", "Double"):
            self.register(name, float_converter(name))

        for name in ("boolean", "java.lang.Boolean", "Boolean"):
            self.register(name, parse_boolean)

        for name in ("java.lang.String", "String", "string"):
            self.register(name, str)

        self.register("java.math.BigDecimal", parse_decimal)
        self.register("javax.management.ObjectName", parse_object_name)

    def register(self, type_name: str, converter: Converter) -> "TypeConverterRegistry":
        """Register or replace the converter for a type name"""
        self.converters[type_name] = converter
        return self

    def supports(self, type_name: str) -> bool:
        return type_name in self.converters

    def convert(self, raw: str, type_name: str) -> Any:
        """Convert one plain-text value to the named type

        Raises:
            UnsupportedTypeError: If the type has no converter
            CoercionFailedError: If the string is not a valid literal
        """
        converter = self.converters.get(type_name)
        if converter is None:
            raise UnsupportedTypeError(type_name)
        try:
            return converter(raw)
        except CoercionFailedError:
            raise
        except (ValueError, TypeError, ArithmeticError) as e:
            raise CoercionFailedError(raw, type_name, str(e))


# Shared default registry
DEFAULT_REGISTRY = TypeConverterRegistry()


def coerce(
    raw_args: Sequence[str],
    target_types: Sequence[str],
    registry: Optional[TypeConverterRegistry] = None,
    name: str = "",
) -> List[Any]:
    """Convert each argument to the type at the same position

    Args:
        raw_args: Plain-text arguments
        target_types: Declared type names, one per argument
        registry: Converters to use (default registry if None)
        name: Feature name, used in error messages

    Raises:
        ArityMismatchError: If the counts differ
        UnsupportedTypeError: If a type has no converter
        CoercionFailedError: If an argument is not a valid literal
    """
    if len(raw_args) != len(target_types):
        raise ArityMismatchError(name, len(target_types), len(raw_args))
    registry = registry or DEFAULT_REGISTRY
    return [registry.convert(raw, type_name) for raw, type_name in zip(raw_args, target_types)]


def coerce_attribute_value(
    raw_args: Sequence[str],
    value_type: str,
    registry: Optional[TypeConverterRegistry] = None,
    name: str = "",
) -> Any:
    """Convert the single value of an attribute set

    Raises:
        ArityMismatchError: Unless exactly one argument is given
    """
    if len(raw_args) != 1:
        raise ArityMismatchError(name, 1, len(raw_args))
    return coerce(raw_args, [value_type], registry, name)[0]
