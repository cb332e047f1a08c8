"""Initial values for new documents.

The validator never invents values; this module is used by whoever creates
documents. Deferred initial values are callables taking a :class:`Clock`,
so document creation stays deterministic under test.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Protocol

from .models.schema import DocumentType, FieldDefinition

logger = logging.getLogger(__name__)


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock:
    instant: datetime

    def now(self) -> datetime:
        return self.instant


def format_timestamp(instant: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    text = instant.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def current_timestamp(clock: Clock) -> str:
    """Deferred initial value: the clock's current instant as a timestamp."""
    return format_timestamp(clock.now())


def evaluate_initial_value(definition: FieldDefinition, clock: Clock) -> Any:
    initial = definition.initial_value
    if callable(initial):
        return initial(clock)
    # Static values are copied so documents never share mutable state.
    return copy.deepcopy(initial)


def _initial_fields(fields: Iterable[FieldDefinition], clock: Clock) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for definition in fields:
        if definition.has_initial_value:
            values[definition.name] = evaluate_initial_value(definition, clock)
        elif definition.fields and definition.type == "object":
            nested = _initial_fields(definition.fields, clock)
            if nested:
                values[definition.name] = nested
    return values


def create_document(schema: DocumentType, clock: Optional[Clock] = None) -> Dict[str, Any]:
    """Return a new document of ``schema`` populated with its initial values."""
    if clock is None:
        clock = SystemClock()
    document: Dict[str, Any] = {"_type": schema.name}
    document.update(_initial_fields(schema.fields, clock))
    logger.debug(f"Created '{schema.name}' document with initial fields: {sorted(document)}")
    return document
