"""Bean feature descriptors

This module defines the read-only description of a bean as published by the
management agent: its attributes, its operations and their parameter
signatures. Descriptors are parsed from the agent's `list` payload and are
never modified afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# Return type of operations that produce no value
VOID_TYPE = "void"


class FeatureKind(Enum):
    """Whether a feature is an attribute or an operation"""
    ATTRIBUTE = "attribute"
    OPERATION = "operation"


@dataclass(frozen=True)
class ParameterDescriptor:
    """One declared operation parameter"""
    name: str
    type: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict"""
        return {"name": self.name, "type": self.type, "desc": self.description}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParameterDescriptor":
        """Parse from dict"""
        return cls(
            name=data.get("name", ""),
            type=data["type"],
            description=data.get("desc") or "",
        )


@dataclass(frozen=True)
class FeatureDescriptor:
    """Attribute or operation of a bean

    Attributes carry `value_type` and `writable`; operations carry
    `parameters` and `return_type`.
    """
    name: str
    kind: FeatureKind
    description: str = ""
    value_type: Optional[str] = None
    writable: bool = False
    parameters: Tuple[ParameterDescriptor, ...] = ()
    return_type: Optional[str] = None
    declared: bool = True

    @classmethod
    def attribute(
        cls,
        name: str,
        value_type: str,
        description: str = "",
        writable: bool = False,
    ) -> "FeatureDescriptor":
        """Create an attribute descriptor"""
        return cls(
            name=name,
            kind=FeatureKind.ATTRIBUTE,
            description=description,
            value_type=value_type,
            writable=writable,
        )

    @classmethod
    def operation(
        cls,
        name: str,
        parameters: Optional[List[ParameterDescriptor]] = None,
        return_type: str = VOID_TYPE,
        description: str = "",
    ) -> "FeatureDescriptor":
        """Create an operation descriptor"""
        return cls(
            name=name,
            kind=FeatureKind.OPERATION,
            description=description,
            parameters=tuple(parameters or ()),
            return_type=return_type,
        )

    @classmethod
    def undeclared(cls, name: str, kind: FeatureKind) -> "FeatureDescriptor":
        """Create a descriptor for a name missing from the bean's description

        It carries no types. Arguments are passed on as given and the agent
        decides whether the feature exists.
        """
        return cls(name=name, kind=kind, declared=False)

    @property
    def is_attribute(self) -> bool:
        return self.kind is FeatureKind.ATTRIBUTE

    @property
    def is_operation(self) -> bool:
        return self.kind is FeatureKind.OPERATION

    @property
    def parameter_types(self) -> List[str]:
        """Declared parameter type names, in order"""
        return [p.type for p in self.parameters]

    @property
    def returns_void(self) -> bool:
        return self.is_operation and self.declared and (self.return_type or VOID_TYPE) == VOID_TYPE

    @property
    def result_type(self) -> Optional[str]:
        """Declared type of the value an attribute read or operation call returns"""
        return self.value_type if self.is_attribute else self.return_type

    def signature(self) -> str:
        """Operation name with its parameter types, e.g. `setLevel(java.lang.String,int)`"""
        return f"{self.name}({','.join(self.parameter_types)})"


@dataclass
class BeanInfo:
    """Introspection snapshot of one bean"""
    description: str = ""
    attributes: List[FeatureDescriptor] = field(default_factory=list)
    operations: List[FeatureDescriptor] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BeanInfo":
        """Parse the agent's description of a single bean

        The payload holds `attr` (name -> {type, desc, rw}) and `op`
        (name -> {args, ret, desc}, or a list of those for overloaded
        operations).
        """
        attributes = [
            FeatureDescriptor.attribute(
                name=name,
                value_type=info.get("type", ""),
                description=info.get("desc") or "",
                writable=bool(info.get("rw", False)),
            )
            for name, info in (data.get("attr") or {}).items()
        ]

        operations = []
        for name, info in (data.get("op") or {}).items():
            overloads = info if isinstance(info, list) else [info]
            for overload in overloads:
                operations.append(
                    FeatureDescriptor.operation(
                        name=name,
                        parameters=[ParameterDescriptor.from_dict(a) for a in overload.get("args") or []],
                        return_type=overload.get("ret") or VOID_TYPE,
                        description=overload.get("desc") or "",
                    )
                )

        return cls(
            description=data.get("desc") or "",
            attributes=attributes,
            operations=operations,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the agent's payload shape"""
        ops: Dict[str, Any] = {}
        for op in self.operations:
            entry = {
                "args": [p.to_dict() for p in op.parameters],
                "ret": op.return_type,
                "desc": op.description,
            }
            if op.name in ops:
                existing = ops[op.name]
                ops[op.name] = existing + [entry] if isinstance(existing, list) else [existing, entry]
            else:
                ops[op.name] = entry
        return {
            "desc": self.description,
            "attr": {
                a.name: {"type": a.value_type, "desc": a.description, "rw": a.writable}
                for a in self.attributes
            },
            "op": ops,
        }
