"""Structured results and their text rendering

Values returned by the agent are decoded JSON. Composite values arrive as
objects, tabular values as objects keyed by their index values. They are
wrapped as StructuredResult trees and flattened into indented lines:

    HeapMemoryUsage:
    committed: 257425408
    init: 264241152
    max: 3715629056
    used: 12066112

Nested records move over by one space under their name header. Table rows
are rendered one space in from the table's own indent; the table header
does not shift them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union


# Declared type of values that render as tables
TABULAR_TYPE = "javax.management.openmbean.TabularData"


@dataclass(frozen=True)
class Scalar:
    """Plain value"""
    value: Any


@dataclass(frozen=True)
class Record:
    """Named fields in declaration order (composite value)"""
    fields: Dict[str, "StructuredResult"] = field(default_factory=dict)


@dataclass(frozen=True)
class Table:
    """Sequence of records (tabular value)"""
    rows: Tuple[Union["Record", "Table"], ...] = ()


@dataclass(frozen=True)
class StringArray:
    """Sequence of strings"""
    items: Tuple[str, ...] = ()


# Union type for StructuredResult
StructuredResult = Scalar | Record | Table | StringArray


def _table_rows(node: Mapping[str, Any]) -> List[Any]:
    """Rows of a tabular value as the agent sends it

    Rows are keyed by their index values, one level of nesting per index
    column. A map-shaped table (key and value columns) arrives as plain
    key -> value pairs.
    """
    rows: List[Any] = []
    pending: List[Tuple[str, Any]] = list(reversed(list(node.items())))
    while pending:
        key, entry = pending.pop()
        if not isinstance(entry, Mapping):
            rows.append({"key": key, "value": entry})
        elif entry and all(isinstance(v, Mapping) for v in entry.values()):
            pending.extend(reversed(list(entry.items())))
        else:
            rows.append(entry)
    return rows


def to_structured(raw: Any, declared_type: Optional[str] = None) -> StructuredResult:
    """Wrap a decoded JSON value as a StructuredResult tree

    Mappings become records, lists of mappings become tables, lists of
    strings (and empty lists) become string arrays. Everything else is a
    scalar. A value declared as TabularData is unwrapped into table rows.
    """
    if declared_type == TABULAR_TYPE and isinstance(raw, Mapping):
        return Table(tuple(to_structured(row) for row in _table_rows(raw)))
    if isinstance(raw, Mapping):
        return Record({str(k): to_structured(v) for k, v in raw.items()})
    if isinstance(raw, (list, tuple)):
        if all(isinstance(item, str) for item in raw):
            return StringArray(tuple(raw))
        if all(isinstance(item, Mapping) for item in raw):
            return Table(tuple(to_structured(item) for item in raw))
    return Scalar(raw)


def to_text(value: Any) -> str:
    """Text form of a leaf value"""
    if isinstance(value, Scalar):
        value = value.value
    elif isinstance(value, StringArray):
        value = list(value.items)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_text(v) for v in value) + "]"
    return str(value)


def _walk(root: Union[Record, Table], indent: str, name: str) -> str:
    """Depth-first, pre-order rendering of a record or table

    Uses an explicit stack of pending nodes and text pieces so that
    nesting depth is not limited by the interpreter's recursion limit.
    """
    out: List[str] = []
    stack: List[Union[str, Tuple[Union[Record, Table], str, str]]] = [(root, indent, name)]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
            continue

        node, indent, name = item
        pending: List[Union[str, Tuple[Union[Record, Table], str, str]]] = []

        if isinstance(node, Record):
            if name:
                out.append(f"{indent}{name}:\n")
                indent += " "
            for key, value in node.fields.items():
                if isinstance(value, Record):
                    pending.append((value, indent + " ", key))
                elif isinstance(value, Table):
                    pending.append((value, indent, key))
                else:
                    pending.append(f"{indent}{key}: {to_text(value)}\n")
        else:
            if name:
                out.append(f"{indent}{name}:\n")
            for row in node.rows:
                if isinstance(row, Record):
                    pending.append((row, indent + " ", ""))
                elif isinstance(row, Table):
                    pending.append((row, indent, ""))
                else:
                    pending.append(to_text(row))

        stack.extend(reversed(pending))

    return "".join(out)


def flatten(result: StructuredResult, name: str = "", indent: str = "") -> str:
    """Render a StructuredResult as text

    Args:
        result: Value to render
        name: Optional header for a record or table (omitted when empty)
        indent: Starting indentation

    Returns:
        Scalars as their text, string arrays as a leading newline followed
        by one line per element, records and tables as indented lines.
    """
    if isinstance(result, (Record, Table)):
        return _walk(result, indent, name)
    if isinstance(result, StringArray):
        return "\n" + "".join(f"{item}\n" for item in result.items)
    return to_text(result)


def render(name: str, result: Optional[StructuredResult]) -> Optional[str]:
    """Output text for one command: `<name>: <value>`

    Record and table bodies start on the next line. Returns None for no
    result.
    """
    if result is None:
        return None
    text = flatten(result)
    if isinstance(result, (Record, Table)):
        text = "\n" + text
    return f"{name}: {text}"
