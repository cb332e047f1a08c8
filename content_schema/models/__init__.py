"""Schema model: field types, rules, schema tree and document nodes.

This package intentionally avoids depending on the validator or the checker
so that schemas can be authored without pulling in either.
"""

from .document import ABSENT, MappingNode, ScalarNode, SequenceNode, ValidationContext, to_node
from .field_types import FieldType, FieldTypeRegistry, Recursion, Shape, default_registry
from .rules import Constraint, ConstraintKind, Rule, RuleSet, Severity
from .schema import DocumentType, FieldDefinition, ListOption, SchemaTree, check_schema
