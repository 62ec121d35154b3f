"""Attribute-versus-operation resolution

Most beans follow the convention that attribute names start with an
uppercase letter and operation names do not. A few beans (the Berkeley DB
JE bean, for one) do not, so the convention is only a first guess: when the
guessed kind has no feature of that name but the other kind does, the other
kind is used. A name neither kind has keeps the guess, and the agent reports
it missing when it is called.
"""

from typing import Dict, List, Optional

from jmxclient.bean.feature import BeanInfo, FeatureDescriptor, FeatureKind


def guess_kind(name: str) -> FeatureKind:
    """Kind suggested by naming convention alone"""
    if name and name[0].isupper():
        return FeatureKind.ATTRIBUTE
    return FeatureKind.OPERATION


def _index(features: List[FeatureDescriptor]) -> Dict[str, FeatureDescriptor]:
    """Name -> first descriptor of that name"""
    table: Dict[str, FeatureDescriptor] = {}
    for feature in features:
        table.setdefault(feature.name, feature)
    return table


def choose(
    name: str,
    attributes: Dict[str, FeatureDescriptor],
    operations: Dict[str, FeatureDescriptor],
) -> Optional[FeatureDescriptor]:
    """Pick the descriptor a command name most likely refers to

    Returns None if neither table has the name.
    """
    if guess_kind(name) is FeatureKind.ATTRIBUTE:
        if name not in attributes and name in operations:
            return operations[name]
        return attributes.get(name)

    if name not in operations and name in attributes:
        return attributes[name]
    return operations.get(name)


def resolve(
    name: str,
    attributes: List[FeatureDescriptor],
    operations: List[FeatureDescriptor],
) -> FeatureDescriptor:
    """Resolve a command name against a bean's attributes and operations

    Args:
        name: Command name, arguments already stripped
        attributes: The bean's attribute descriptors
        operations: The bean's operation descriptors

    Returns:
        The matching descriptor. A name in neither list resolves to an
        undeclared descriptor of the kind suggested by naming convention,
        so the remote call reports whether the feature exists.
    """
    return FeatureResolver(attributes, operations).resolve(name)


class FeatureResolver:
    """Resolver over the name tables of one introspection snapshot"""

    def __init__(self, attributes: List[FeatureDescriptor], operations: List[FeatureDescriptor]):
        self.attributes = _index(attributes)
        self.operations = _index(operations)

    @classmethod
    def for_bean(cls, info: BeanInfo) -> "FeatureResolver":
        return cls(info.attributes, info.operations)

    def resolve(self, name: str) -> FeatureDescriptor:
        descriptor = choose(name, self.attributes, self.operations)
        if descriptor is None:
            return FeatureDescriptor.undeclared(name, guess_kind(name))
        return descriptor
