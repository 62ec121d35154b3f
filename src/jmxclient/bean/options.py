"""Listing of a bean's attributes and operations"""

from typing import List

from jmxclient.bean.feature import VOID_TYPE, FeatureDescriptor


def format_attribute(attribute: FeatureDescriptor) -> str:
    return f" {attribute.name}: {attribute.description} (type={attribute.value_type})"


def format_operation(operation: FeatureDescriptor) -> str:
    lines = [
        f" {operation.name}: {operation.description}",
        f"  Parameters {len(operation.parameters)}, return type={operation.return_type or VOID_TYPE}",
    ]
    for param in operation.parameters:
        lines.append(f"   name={param.name} type={param.type} {param.description}")
    return "\n".join(lines)


def list_options(attributes: List[FeatureDescriptor], operations: List[FeatureDescriptor]) -> str:
    """Format a bean's attribute and operation catalog

    Each section is present only if the bean has features of that kind.
    Returns an empty string for a bean with neither.
    """
    lines = []
    if attributes:
        lines.append("Attributes:")
        lines.extend(format_attribute(a) for a in attributes)
    if operations:
        lines.append("Operations:")
        lines.extend(format_operation(op) for op in operations)
    return "\n".join(lines)
