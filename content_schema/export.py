# Copyright 2026 TIER IV, inc.
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

"""JSON Schema export of document types.

Only the structural, blocking part of a document type can be expressed in
JSON Schema: field types, nesting, error-severity required fields, bounds,
email format and allowed values. Warning-severity constraints and custom
predicates are left out.
"""

import copy
from typing import Any, Dict, Iterable, List, Tuple

import jsonschema

from .models.field_types import FieldTypeRegistry, Recursion, Shape, default_registry
from .models.rules import ConstraintKind, Severity
from .models.schema import DocumentType, FieldDefinition, check_schema


DRAFT7_URI = "http://json-schema.org/draft-07/schema#"

_SHAPE_SCHEMAS: Dict[Shape, Dict[str, Any]] = {
    Shape.STRING: {"type": "string"},
    Shape.NUMBER: {"type": "number"},
    Shape.DATETIME: {"type": "string", "format": "date-time"},
    Shape.REFERENCE: {
        "type": "object",
        "properties": {"_ref": {"type": "string", "minLength": 1}},
        "required": ["_ref"],
    },
    Shape.MAPPING: {"type": "object"},
    Shape.SEQUENCE: {"type": "array"},
}

# JSON Schema keyword for min/max per shape.
_BOUND_KEYWORDS: Dict[Shape, Tuple[str, str]] = {
    Shape.NUMBER: ("minimum", "maximum"),
    Shape.STRING: ("minLength", "maxLength"),
    Shape.SEQUENCE: ("minItems", "maxItems"),
}

# Keyword rejecting empty values of a blocking required field.
_EMPTY_KEYWORD: Dict[Shape, Tuple[str, int]] = {
    Shape.STRING: ("minLength", 1),
    Shape.SEQUENCE: ("minItems", 1),
    Shape.REFERENCE: ("minProperties", 1),
    Shape.MAPPING: ("minProperties", 1),
}


def _is_blocking_required(definition: FieldDefinition) -> bool:
    required = definition.rules.required
    return required is not None and required.severity == Severity.ERROR


def _field_schema(definition: FieldDefinition, registry: FieldTypeRegistry) -> Dict[str, Any]:
    field_type = registry.get(definition.type)
    shape = field_type.shape
    result: Dict[str, Any] = copy.deepcopy(_SHAPE_SCHEMAS[shape])

    if definition.title:
        result["title"] = definition.title
    if definition.description:
        result["description"] = definition.description
    if definition.to:
        result["x-reference-to"] = list(definition.to)

    for constraint in definition.rules.constraints:
        if constraint.severity != Severity.ERROR:
            continue
        if constraint.kind in (ConstraintKind.MIN, ConstraintKind.MAX) and shape in _BOUND_KEYWORDS:
            low, high = _BOUND_KEYWORDS[shape]
            keyword = low if constraint.kind == ConstraintKind.MIN else high
            result[keyword] = constraint.argument
        elif constraint.kind == ConstraintKind.EMAIL:
            result["format"] = "email"
        elif constraint.kind == ConstraintKind.MEMBERSHIP:
            result["enum"] = list(constraint.argument)

    if _is_blocking_required(definition):
        if shape in _EMPTY_KEYWORD:
            keyword, minimum = _EMPTY_KEYWORD[shape]
            result[keyword] = max(result.get(keyword, 0), minimum)
    else:
        # The validator reads null as absent.
        result["type"] = [result["type"], "null"]
        if "enum" in result:
            result["enum"].append(None)

    if field_type.recursion == Recursion.OBJECT:
        _add_properties(result, definition.fields, registry)
    elif field_type.recursion == Recursion.ARRAY:
        result["items"] = _field_schema(definition.of[0], registry)

    return result


def _add_properties(
    target: Dict[str, Any],
    fields: Iterable[FieldDefinition],
    registry: FieldTypeRegistry,
) -> None:
    properties: Dict[str, Any] = {}
    required: List[str] = []
    for definition in fields:
        properties[definition.name] = _field_schema(definition, registry)
        if _is_blocking_required(definition):
            required.append(definition.name)
    target["properties"] = properties
    if required:
        target["required"] = required


def to_json_schema(schema: DocumentType, registry: FieldTypeRegistry = default_registry) -> Dict[str, Any]:
    """Render ``schema`` as a Draft 7 JSON Schema dictionary.

    Raises:
        SchemaError: If the document type is malformed.
        jsonschema.exceptions.SchemaError: If the rendered schema is not valid
            Draft 7 (indicates a bug in this module).
    """
    check_schema(schema, registry)

    result: Dict[str, Any] = {
        "$schema": DRAFT7_URI,
        "$id": f"urn:content-schema:{schema.name}",
        "title": schema.title or schema.name,
        "type": "object",
    }
    _add_properties(result, schema.fields, registry)

    jsonschema.Draft7Validator.check_schema(result)
    return result
