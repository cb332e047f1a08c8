"""Schema-driven validation of content documents."""

__version__ = "0.1.0"

from .exceptions import ContentSchemaError, DocumentLoadError, SchemaError
from .models import (
    Constraint,
    ConstraintKind,
    DocumentType,
    FieldDefinition,
    FieldType,
    FieldTypeRegistry,
    Rule,
    RuleSet,
    SchemaTree,
    Severity,
    ValidationContext,
    check_schema,
    default_registry,
)
from .registry import SchemaRegistry
from .report import Report, ValidationOutcome
from .validator import Validator, validate

__all__ = [
    "Constraint",
    "ConstraintKind",
    "ContentSchemaError",
    "DocumentLoadError",
    "DocumentType",
    "FieldDefinition",
    "FieldType",
    "FieldTypeRegistry",
    "Report",
    "Rule",
    "RuleSet",
    "SchemaError",
    "SchemaRegistry",
    "SchemaTree",
    "Severity",
    "ValidationContext",
    "ValidationOutcome",
    "Validator",
    "check_schema",
    "default_registry",
    "validate",
]
