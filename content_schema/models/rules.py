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

"""Constraint values and the fluent rule builder.

A :class:`RuleSet` is an immutable, ordered tuple of :class:`Constraint`
values. :class:`Rule` is construction sugar that accumulates constraints
and severity markers and produces a RuleSet from :meth:`Rule.build`::

    Rule().required().min(5).max(50).warning("Between 5 and 50 characters.")

A trailing ``warning()`` / ``error()`` applies to every constraint appended
since the previous severity call.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from numbers import Real
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Optional, Tuple, Union

from ..exceptions import SchemaError

if TYPE_CHECKING:
    from .document import ValidationContext


CustomResult = Union[bool, str]
CustomPredicate = Callable[[Any, "ValidationContext"], CustomResult]


class Severity(str, Enum):
    """Outcome severity: errors block persistence, warnings are advisory."""

    ERROR = "error"
    WARNING = "warning"


class ConstraintKind(str, Enum):
    REQUIRED = "required"
    MIN = "min"
    MAX = "max"
    EMAIL = "email"
    MEMBERSHIP = "membership"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Constraint:
    """A single checkable rule attached to a field.

    ``argument`` holds the bound for min/max, the allowed values tuple for
    membership and the predicate for custom.
    """

    kind: ConstraintKind
    severity: Severity = Severity.ERROR
    message: Optional[str] = None
    argument: Any = None

    @property
    def is_builtin(self) -> bool:
        return self.kind not in (ConstraintKind.REQUIRED, ConstraintKind.CUSTOM)


@dataclass(frozen=True)
class RuleSet:
    constraints: Tuple[Constraint, ...] = ()

    @property
    def required(self) -> Optional[Constraint]:
        for constraint in self.constraints:
            if constraint.kind == ConstraintKind.REQUIRED:
                return constraint
        return None

    @property
    def builtins(self) -> Tuple[Constraint, ...]:
        """Built-in constraints other than ``required``, in declaration order."""
        return tuple(c for c in self.constraints if c.is_builtin)

    @property
    def customs(self) -> Tuple[Constraint, ...]:
        return tuple(c for c in self.constraints if c.kind == ConstraintKind.CUSTOM)

    @property
    def custom(self) -> Optional[Constraint]:
        customs = self.customs
        return customs[-1] if customs else None

    def kinds(self) -> Tuple[ConstraintKind, ...]:
        return tuple(c.kind for c in self.constraints)

    def __len__(self) -> int:
        return len(self.constraints)


EMPTY_RULES = RuleSet()


def _check_bound(name: str, value: Any) -> Any:
    # Datetime fields take datetime bounds; anything else takes a number.
    if isinstance(value, (datetime, str)):
        return value
    if isinstance(value, bool) or not isinstance(value, Real):
        raise SchemaError(f"Rule.{name}() expects a number, got {type(value).__name__}: {value!r}")
    return value


class Rule:
    """Fluent builder producing an immutable :class:`RuleSet`."""

    def __init__(self):
        self._constraints: List[Constraint] = []
        # Constraints from this index onwards have no explicit severity yet.
        self._pending_start = 0
        self._last_group: Tuple[int, int] = (0, 0)

    def _append(self, kind: ConstraintKind, argument: Any = None) -> "Rule":
        self._constraints.append(Constraint(kind=kind, argument=argument))
        return self

    def required(self) -> "Rule":
        return self._append(ConstraintKind.REQUIRED)

    def min(self, bound: Union[Real, datetime, str]) -> "Rule":
        return self._append(ConstraintKind.MIN, _check_bound("min", bound))

    def max(self, bound: Union[Real, datetime, str]) -> "Rule":
        return self._append(ConstraintKind.MAX, _check_bound("max", bound))

    def email(self) -> "Rule":
        return self._append(ConstraintKind.EMAIL)

    def one_of(self, values: Iterable[Any]) -> "Rule":
        allowed = tuple(values)
        if not allowed:
            raise SchemaError("Rule.one_of() expects at least one allowed value")
        return self._append(ConstraintKind.MEMBERSHIP, allowed)

    def custom(self, predicate: CustomPredicate) -> "Rule":
        if not callable(predicate):
            raise SchemaError(f"Rule.custom() expects a callable, got {type(predicate).__name__}")
        return self._append(ConstraintKind.CUSTOM, predicate)

    def _apply_severity(self, severity: Severity, message: Optional[str]) -> "Rule":
        end = len(self._constraints)
        if self._pending_start < end:
            group = (self._pending_start, end)
        elif end:
            # Repeated severity call on the same group: last one wins.
            group = self._last_group
        else:
            raise SchemaError(f"Rule.{severity.value}() must follow a constraint")

        start, stop = group
        for idx in range(start, stop):
            current = self._constraints[idx]
            self._constraints[idx] = dataclasses.replace(
                current,
                severity=severity,
                message=message if message is not None else current.message,
            )
        self._last_group = group
        self._pending_start = end
        return self

    def error(self, message: Optional[str] = None) -> "Rule":
        return self._apply_severity(Severity.ERROR, message)

    def warning(self, message: Optional[str] = None) -> "Rule":
        return self._apply_severity(Severity.WARNING, message)

    def build(self) -> RuleSet:
        """Freeze the accumulated constraints.

        Only the last ``custom`` predicate is kept.
        """
        last_custom = None
        for idx, constraint in enumerate(self._constraints):
            if constraint.kind == ConstraintKind.CUSTOM:
                last_custom = idx
        constraints = tuple(
            c
            for idx, c in enumerate(self._constraints)
            if c.kind != ConstraintKind.CUSTOM or idx == last_custom
        )
        return RuleSet(constraints=constraints)


def as_rule_set(rules: Union[None, Rule, RuleSet]) -> RuleSet:
    """Accept a builder, a built RuleSet or nothing."""
    if rules is None:
        return EMPTY_RULES
    if isinstance(rules, Rule):
        return rules.build()
    if isinstance(rules, RuleSet):
        return rules
    raise SchemaError(f"Expected Rule or RuleSet, got {type(rules).__name__}")
