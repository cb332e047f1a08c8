from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Set, Tuple, Union

from ..exceptions import SchemaError
from .field_types import FieldTypeRegistry, Recursion, Shape, default_registry, is_number, parse_datetime
from .rules import ConstraintKind, Rule, RuleSet, as_rule_set


@dataclass(frozen=True)
class ListOption:
    """One entry of an enumerated value list (display-only)."""

    title: str
    value: Any


@dataclass(frozen=True)
class FieldDefinition:
    """One named, typed slot of a document type.

    Array element descriptors are FieldDefinitions too; their ``name`` is
    optional. ``title``, ``description`` and ``options`` are display-only and
    never consulted by the validator. A callable ``initial_value`` is a
    deferred generator that receives a clock.
    """

    name: str
    type: str
    title: str = ""
    description: str = ""
    fields: Tuple["FieldDefinition", ...] = ()
    of: Tuple["FieldDefinition", ...] = ()
    to: Tuple[str, ...] = ()
    options: Mapping[str, Any] = field(default_factory=dict)
    initial_value: Any = None
    rules: Union[RuleSet, Rule, None] = None

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "of", tuple(self.of))
        to = (self.to,) if isinstance(self.to, str) else tuple(self.to)
        object.__setattr__(self, "to", to)
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))
        object.__setattr__(self, "rules", as_rule_set(self.rules))

    @property
    def list_options(self) -> Tuple[ListOption, ...]:
        entries = self.options.get("list") or ()
        result = []
        for entry in entries:
            if isinstance(entry, Mapping):
                result.append(ListOption(title=str(entry.get("title", entry.get("value"))), value=entry.get("value")))
            else:
                result.append(ListOption(title=str(entry), value=entry))
        return tuple(result)

    @property
    def layout(self) -> Optional[str]:
        return self.options.get("layout")

    @property
    def has_initial_value(self) -> bool:
        return self.initial_value is not None


@dataclass(frozen=True)
class DocumentType:
    """A named document schema: the root of a schema tree."""

    name: str
    fields: Tuple[FieldDefinition, ...]
    title: str = ""
    type: str = "document"

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))

    def get_field(self, name: str) -> FieldDefinition:
        for definition in self.fields:
            if definition.name == name:
                return definition
        raise KeyError(name)


# Alias used by callers that think of the schema as a tree.
SchemaTree = DocumentType


def _join(base: str, token: str) -> str:
    return f"{base}/{token}" if base else token


def check_schema(schema: DocumentType, registry: FieldTypeRegistry = default_registry) -> None:
    """Raise :class:`SchemaError` for the first authoring defect found."""
    if not isinstance(schema, DocumentType):
        raise SchemaError(f"Expected a DocumentType, got {type(schema).__name__}")
    if not isinstance(schema.name, str) or not schema.name.strip():
        raise SchemaError("Document type name must be a non-empty string")

    root_type = registry.get(schema.type, schema.name)
    if root_type.recursion != Recursion.OBJECT:
        raise SchemaError(f"Document root type '{schema.type}' must hold fields", schema.name)

    _check_fields(schema.fields, registry, schema.name)


def _check_fields(fields: Iterable[FieldDefinition], registry: FieldTypeRegistry, path: str) -> None:
    seen: Set[str] = set()
    for definition in fields:
        if not isinstance(definition, FieldDefinition):
            raise SchemaError(f"Expected a FieldDefinition, got {type(definition).__name__}", path)
        if not isinstance(definition.name, str) or not definition.name.strip():
            raise SchemaError("Field name must be a non-empty string", path)
        if definition.name in seen:
            raise SchemaError(f"Duplicate field name '{definition.name}'", path)
        seen.add(definition.name)
        _check_field(definition, registry, _join(path, definition.name))


def _check_bound_type(bound: Any, shape: Shape, kind: ConstraintKind, path: str) -> None:
    if shape == Shape.DATETIME:
        valid = parse_datetime(bound) is not None
        expected = "a datetime"
    else:
        valid = is_number(bound)
        expected = "a number"
    if not valid:
        raise SchemaError(f"Bound of '{kind.value}' must be {expected}, got {bound!r}", path)


def _check_field(
    definition: FieldDefinition,
    registry: FieldTypeRegistry,
    path: str,
    *,
    in_array: bool = False,
) -> None:
    field_type = registry.get(definition.type, path)
    if field_type.root_only:
        raise SchemaError(f"Type '{field_type.name}' can only be used as a document root", path)

    for constraint in definition.rules.constraints:
        if not field_type.allows(constraint.kind):
            raise SchemaError(
                f"Constraint '{constraint.kind.value}' is not allowed on type '{field_type.name}'",
                path,
            )
        if constraint.kind in (ConstraintKind.MIN, ConstraintKind.MAX):
            _check_bound_type(constraint.argument, field_type.shape, constraint.kind, path)
    if len(definition.rules.customs) > 1:
        raise SchemaError("At most one custom constraint is allowed per field", path)

    if field_type.recursion == Recursion.OBJECT:
        if field_type.requires_fields and not definition.fields:
            raise SchemaError(f"Type '{field_type.name}' must declare nested fields", path)
        _check_fields(definition.fields, registry, path)
    elif definition.fields:
        raise SchemaError(f"Type '{field_type.name}' cannot declare nested fields", path)

    if field_type.recursion == Recursion.ARRAY:
        if in_array:
            raise SchemaError("Arrays cannot directly contain arrays", path)
        if len(definition.of) != 1:
            raise SchemaError(
                f"Array field must declare exactly one element type, got {len(definition.of)}",
                path,
            )
        _check_field(definition.of[0], registry, _join(path, "of"), in_array=True)
    elif definition.of:
        raise SchemaError(f"Type '{field_type.name}' cannot declare element types", path)

    if field_type.shape == Shape.REFERENCE:
        if not definition.to or not all(isinstance(t, str) and t for t in definition.to):
            raise SchemaError("Reference field must declare at least one target type", path)
    elif definition.to:
        raise SchemaError(f"Type '{field_type.name}' cannot declare reference targets", path)
