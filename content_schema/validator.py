# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Schema-driven document validator.

The validator walks a :class:`~content_schema.models.schema.DocumentType`
and a document in lockstep, depth first and in declaration order, and
collects every violated constraint into a :class:`~content_schema.report.Report`.
Schema defects raise :class:`~content_schema.exceptions.SchemaError` before
any document content is looked at.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from .models.document import (
    AbsentNode,
    FieldPath,
    MappingNode,
    Node,
    ValidationContext,
    is_empty,
    to_node,
)
from .models.field_types import (
    SHAPE_DESCRIPTIONS,
    FieldType,
    FieldTypeRegistry,
    Recursion,
    Shape,
    default_registry,
    matches_shape,
    parse_datetime,
)
from .models.rules import Constraint, ConstraintKind
from .models.schema import DocumentType, FieldDefinition, check_schema
from .report import Report, ReportBuilder, to_json_pointer

logger = logging.getLogger(__name__)


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
REFERENCE_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,128}$")

REQUIRED_MESSAGE = "Required"
CUSTOM_FAILED_MESSAGE = "Invalid value"

_MIN_MESSAGES = {
    Shape.NUMBER: "Must be greater than or equal to {bound}",
    Shape.STRING: "Must be at least {bound} characters long",
    Shape.SEQUENCE: "Must have at least {bound} items",
    Shape.DATETIME: "Must be at or after {bound}",
}
_MAX_MESSAGES = {
    Shape.NUMBER: "Must be less than or equal to {bound}",
    Shape.STRING: "Must be at most {bound} characters long",
    Shape.SEQUENCE: "Must have at most {bound} items",
    Shape.DATETIME: "Must be at or before {bound}",
}


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are read as UTC so they compare with aware ones.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _measure(shape: Shape, node: Node) -> Any:
    """Quantity compared against min/max bounds for a node of ``shape``."""
    if shape == Shape.SEQUENCE:
        return len(node)
    value = node.to_python()
    if shape == Shape.STRING:
        # Character length, not byte length.
        return len(value)
    if shape == Shape.DATETIME:
        return _as_utc(parse_datetime(value))
    return value


def _bound(shape: Shape, raw: Any) -> Any:
    if shape == Shape.DATETIME:
        return _as_utc(parse_datetime(raw))
    return raw


def check_builtin(constraint: Constraint, field_type: FieldType, node: Node) -> Optional[str]:
    """Evaluate one built-in constraint on a present, well-shaped node.

    Returns the default failure message, or ``None`` when the constraint holds.
    """
    shape = field_type.shape
    kind = constraint.kind

    if kind in (ConstraintKind.MIN, ConstraintKind.MAX):
        measured = _measure(shape, node)
        bound = _bound(shape, constraint.argument)
        if kind == ConstraintKind.MIN and measured < bound:
            return _MIN_MESSAGES[shape].format(bound=constraint.argument)
        if kind == ConstraintKind.MAX and measured > bound:
            return _MAX_MESSAGES[shape].format(bound=constraint.argument)
        return None

    if kind == ConstraintKind.EMAIL:
        if not EMAIL_RE.match(node.to_python()):
            return "Must be a valid email address"
        return None

    if kind == ConstraintKind.MEMBERSHIP:
        if node.to_python() not in constraint.argument:
            allowed = ", ".join(repr(v) for v in constraint.argument)
            return f"Value must be one of: {allowed}"
        return None

    raise ValueError(f"Not a built-in constraint: {kind}")


class Validator:
    """Validates documents against document types.

    Args:
        registry: Field type registry used to resolve type names.
        check_reference_ids: Whether reference identifiers must look like
            document ids (``[A-Za-z0-9._-]``, at most 128 characters).
    """

    def __init__(
        self,
        registry: FieldTypeRegistry = default_registry,
        *,
        check_reference_ids: bool = True,
    ):
        self.registry = registry
        self.check_reference_ids = check_reference_ids

    def validate(self, schema: DocumentType, document: Any) -> Report:
        check_schema(schema, self.registry)
        logger.debug(f"Validating document against schema '{schema.name}'")

        report = ReportBuilder(schema.name)
        root = to_node(document)
        if not isinstance(root, MappingNode):
            report.add_error((), "Document root must be an object")
            return report.build()

        self._validate_fields(schema.fields, root, root, (), report)

        result = report.build()
        logger.debug(
            f"Schema '{schema.name}': {len(result.errors)} error(s), {len(result.warnings)} warning(s)"
        )
        return result

    def _validate_fields(
        self,
        fields: Iterable[FieldDefinition],
        parent: MappingNode,
        root: MappingNode,
        base_path: FieldPath,
        report: ReportBuilder,
    ) -> None:
        for definition in fields:
            self._validate_node(
                definition,
                parent.get(definition.name),
                parent,
                root,
                base_path + (definition.name,),
                report,
            )

    def _validate_node(
        self,
        definition: FieldDefinition,
        node: Node,
        parent: Node,
        root: MappingNode,
        path: FieldPath,
        report: ReportBuilder,
    ) -> None:
        field_type = self.registry.get(definition.type)
        rules = definition.rules

        required = rules.required
        if required is not None and is_empty(node):
            report.add(path, required.severity, required.message or REQUIRED_MESSAGE, ConstraintKind.REQUIRED)
            return
        if isinstance(node, AbsentNode):
            return

        if not matches_shape(field_type.shape, node):
            report.add_error(path, f"Expected {SHAPE_DESCRIPTIONS[field_type.shape]}")
            return

        if field_type.shape == Shape.REFERENCE and self.check_reference_ids:
            ref = node.get("_ref").to_python()
            if not REFERENCE_ID_RE.match(ref):
                report.add_error(path, f"Reference identifier '{ref}' is not a valid document id")

        for constraint in rules.builtins:
            message = check_builtin(constraint, field_type, node)
            if message is not None:
                report.add(path, constraint.severity, constraint.message or message, constraint.kind)

        if field_type.recursion == Recursion.OBJECT:
            self._validate_fields(definition.fields, node, root, path, report)
        elif field_type.recursion == Recursion.ARRAY:
            element = definition.of[0]
            for idx, item in enumerate(node.items):
                self._validate_node(element, item, node, root, path + (idx,), report)

        custom = rules.custom
        if custom is not None:
            self._run_custom(custom, node, parent, root, path, report)

    def _run_custom(
        self,
        custom: Constraint,
        node: Node,
        parent: Node,
        root: MappingNode,
        path: FieldPath,
        report: ReportBuilder,
    ) -> None:
        context = ValidationContext(document=root, path=path, parent=parent)
        try:
            result = custom.argument(node.to_python(), context)
        except Exception as exc:
            logger.warning(f"Custom constraint at '{to_json_pointer(path)}' raised {type(exc).__name__}: {exc}")
            report.add_error(path, f"Custom validation failed with {type(exc).__name__}: {exc}", ConstraintKind.CUSTOM)
            return

        if isinstance(result, str):
            message = custom.message or result or CUSTOM_FAILED_MESSAGE
        elif result is False:
            message = custom.message or CUSTOM_FAILED_MESSAGE
        else:
            return
        report.add(path, custom.severity, message, ConstraintKind.CUSTOM)


_default_validator = Validator()


def validate(schema: DocumentType, document: Any) -> Report:
    """Validate ``document`` against ``schema`` with the default field types."""
    return _default_validator.validate(schema, document)
