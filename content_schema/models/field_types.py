"""Field type registry: value shape, legal constraints and recursion per type name."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from ..exceptions import SchemaError
from .document import MappingNode, Node, ScalarNode, SequenceNode
from .rules import ConstraintKind


class Shape(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATETIME = "datetime"
    REFERENCE = "reference"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


class Recursion(str, Enum):
    NONE = "none"
    OBJECT = "object"
    ARRAY = "array"


_K = ConstraintKind

STRING_CONSTRAINTS = frozenset({_K.REQUIRED, _K.MIN, _K.MAX, _K.EMAIL, _K.MEMBERSHIP, _K.CUSTOM})
TEXT_CONSTRAINTS = frozenset({_K.REQUIRED, _K.MIN, _K.MAX, _K.MEMBERSHIP, _K.CUSTOM})
NUMBER_CONSTRAINTS = frozenset({_K.REQUIRED, _K.MIN, _K.MAX, _K.MEMBERSHIP, _K.CUSTOM})
DATETIME_CONSTRAINTS = frozenset({_K.REQUIRED, _K.MIN, _K.MAX, _K.CUSTOM})
ARRAY_CONSTRAINTS = frozenset({_K.REQUIRED, _K.MIN, _K.MAX, _K.CUSTOM})
CONTAINER_CONSTRAINTS = frozenset({_K.REQUIRED, _K.CUSTOM})


@dataclass(frozen=True)
class FieldType:
    name: str
    shape: Shape
    constraints: FrozenSet[ConstraintKind] = field(default_factory=frozenset)
    recursion: Recursion = Recursion.NONE
    # Root-only types may describe a document but not a field inside one.
    root_only: bool = False
    requires_fields: bool = False

    def allows(self, kind: ConstraintKind) -> bool:
        return kind in self.constraints


def normalize_type_name(type_name: Any) -> Optional[str]:
    if type_name is None:
        return None
    if isinstance(type_name, str):
        return type_name.strip().lower()
    return str(type_name).strip().lower()


_FRACTION_RE = re.compile(r"(\d{2}:\d{2}:\d{2}\.)(\d+)")


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string (``Z`` suffix accepted) or pass a datetime through."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # Older fromisoformat only takes 3 or 6 fraction digits.
    text = _FRACTION_RE.sub(lambda m: m.group(1) + m.group(2)[:6].ljust(6, "0"), text)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def is_number(value: Any) -> bool:
    """Finite int or float; bools, NaN and infinities are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def matches_shape(shape: Shape, node: Node) -> bool:
    """Whether a present node has the structural shape of ``shape``."""
    if shape == Shape.MAPPING:
        return isinstance(node, MappingNode)
    if shape == Shape.SEQUENCE:
        return isinstance(node, SequenceNode)
    if shape == Shape.REFERENCE:
        if not isinstance(node, MappingNode):
            return False
        ref = node.get("_ref")
        return isinstance(ref, ScalarNode) and isinstance(ref.value, str) and bool(ref.value)
    if not isinstance(node, ScalarNode):
        return False
    if shape == Shape.STRING:
        return isinstance(node.value, str)
    if shape == Shape.NUMBER:
        return is_number(node.value)
    if shape == Shape.DATETIME:
        return parse_datetime(node.value) is not None
    return False


SHAPE_DESCRIPTIONS: Dict[Shape, str] = {
    Shape.STRING: "a string",
    Shape.NUMBER: "a number",
    Shape.DATETIME: "an ISO-8601 datetime",
    Shape.REFERENCE: "a reference object with a '_ref' identifier",
    Shape.MAPPING: "an object",
    Shape.SEQUENCE: "an array",
}


DEFAULT_FIELD_TYPES: Tuple[FieldType, ...] = (
    FieldType("string", Shape.STRING, STRING_CONSTRAINTS),
    FieldType("text", Shape.STRING, TEXT_CONSTRAINTS),
    FieldType("number", Shape.NUMBER, NUMBER_CONSTRAINTS),
    FieldType("datetime", Shape.DATETIME, DATETIME_CONSTRAINTS),
    FieldType("reference", Shape.REFERENCE, CONTAINER_CONSTRAINTS),
    FieldType("image", Shape.MAPPING, CONTAINER_CONSTRAINTS, Recursion.OBJECT),
    FieldType("object", Shape.MAPPING, CONTAINER_CONSTRAINTS, Recursion.OBJECT, requires_fields=True),
    FieldType("array", Shape.SEQUENCE, ARRAY_CONSTRAINTS, Recursion.ARRAY),
    FieldType("document", Shape.MAPPING, frozenset(), Recursion.OBJECT, root_only=True),
)


class FieldTypeRegistry:
    """Read-only mapping of type name to :class:`FieldType`.

    Populated once; :meth:`extend` returns a new registry instead of
    mutating this one.
    """

    def __init__(self, field_types: Iterable[FieldType] = DEFAULT_FIELD_TYPES):
        types: Dict[str, FieldType] = {}
        for field_type in field_types:
            name = normalize_type_name(field_type.name)
            if not name:
                raise SchemaError("Field type name must be a non-empty string")
            if name in types:
                raise SchemaError(f"Field type '{name}' is registered twice")
            types[name] = field_type
        self._types: Mapping[str, FieldType] = MappingProxyType(types)

    def get(self, type_name: Any, schema_path: Optional[str] = None) -> FieldType:
        name = normalize_type_name(type_name)
        field_type = self._types.get(name) if name else None
        if field_type is None:
            raise SchemaError(
                f"Unknown field type '{type_name}'. Valid types: {sorted(self._types)}",
                schema_path,
            )
        return field_type

    def __contains__(self, type_name: Any) -> bool:
        return normalize_type_name(type_name) in self._types

    def names(self) -> Tuple[str, ...]:
        return tuple(self._types)

    def extend(self, *field_types: FieldType) -> "FieldTypeRegistry":
        return FieldTypeRegistry((*self._types.values(), *field_types))


default_registry = FieldTypeRegistry()
