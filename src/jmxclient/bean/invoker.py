"""Resolved actions and their execution against a session

A command that has been parsed, resolved and coerced becomes exactly one
ResolvedAction, which the invoker turns into one remote call.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from jmxclient.bean.feature import FeatureDescriptor
from jmxclient.coerce import TypeConverterRegistry, coerce, coerce_attribute_value
from jmxclient.command import ParsedCommand
from jmxclient.errors import ArityMismatchError
from jmxclient.result import StructuredResult, to_structured


@dataclass(frozen=True)
class AttributeGet:
    """Read an attribute"""
    descriptor: FeatureDescriptor


@dataclass(frozen=True)
class AttributeSet:
    """Write an attribute with an already coerced value"""
    descriptor: FeatureDescriptor
    value: Any


@dataclass(frozen=True)
class OperationCall:
    """Invoke an operation with already coerced values"""
    descriptor: FeatureDescriptor
    values: Tuple[Any, ...] = ()


# Union type for ResolvedAction
ResolvedAction = AttributeGet | AttributeSet | OperationCall


def build_action(
    parsed: ParsedCommand,
    descriptor: FeatureDescriptor,
    registry: Optional[TypeConverterRegistry] = None,
) -> ResolvedAction:
    """Turn a resolved command into the action to perform

    An attribute with no argument is read, with one argument is written.
    An operation is called with its arguments coerced to its signature.

    An undeclared feature has no types to coerce to, so its arguments are
    sent as the strings given.

    Raises:
        ArityMismatchError: If the argument count does not fit
        UnsupportedTypeError: If a declared type cannot be built from a string
        CoercionFailedError: If an argument is not a valid literal
    """
    if not descriptor.declared:
        if descriptor.is_operation:
            return OperationCall(descriptor, tuple(parsed.raw_args))
        if not parsed.has_args:
            return AttributeGet(descriptor)
        if len(parsed.raw_args) != 1:
            raise ArityMismatchError(descriptor.name, 1, len(parsed.raw_args))
        return AttributeSet(descriptor, parsed.raw_args[0])

    if descriptor.is_attribute:
        if not parsed.has_args:
            return AttributeGet(descriptor)
        value = coerce_attribute_value(
            parsed.raw_args, descriptor.value_type, registry, name=descriptor.name
        )
        return AttributeSet(descriptor, value)

    values = coerce(parsed.raw_args, descriptor.parameter_types, registry, name=descriptor.name)
    return OperationCall(descriptor, tuple(values))


class Invoker:
    """Performs resolved actions against one session

    Keeps no state between invocations. Remote errors propagate unchanged.
    """

    def __init__(self, session):
        self.session = session

    def invoke(self, bean, action: ResolvedAction) -> Optional[StructuredResult]:
        """Perform an action

        Returns:
            The wrapped result, or None for an attribute write, a void
            operation or a null value
        """
        descriptor = action.descriptor
        name = descriptor.name

        if isinstance(action, AttributeGet):
            return _wrap(self.session.get_attribute(bean, name), descriptor.result_type)

        if isinstance(action, AttributeSet):
            self.session.set_attribute(bean, name, action.value)
            return None

        result = self.session.invoke(
            bean,
            name,
            list(action.values),
            descriptor.parameter_types if descriptor.declared else None,
        )
        if descriptor.returns_void:
            return None
        return _wrap(result, descriptor.result_type)


def invoke(session, bean, action: ResolvedAction) -> Optional[StructuredResult]:
    """Perform one action against a session"""
    return Invoker(session).invoke(bean, action)


def _wrap(value: Any, declared_type: Optional[str] = None) -> Optional[StructuredResult]:
    if value is None:
        return None
    return to_structured(value, declared_type)
