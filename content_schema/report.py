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

"""Validation outcomes and the per-call report."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .file_io.source_location import json_pointer_escape
from .models.document import FieldPath
from .models.rules import ConstraintKind, Severity


def to_json_pointer(path: FieldPath) -> str:
    """``("items", 0, "quantity")`` -> ``/items/0/quantity``; the root is ``""``."""
    return "".join(f"/{json_pointer_escape(str(token))}" for token in path)


def to_dotted(path: FieldPath) -> str:
    """``("items", 0, "quantity")`` -> ``items[0].quantity``."""
    text = ""
    for token in path:
        if isinstance(token, int):
            text += f"[{token}]"
        else:
            text += f".{token}" if text else str(token)
    return text


@dataclass(frozen=True)
class ValidationOutcome:
    """One violated constraint."""

    path: FieldPath
    severity: Severity
    message: str
    constraint: Optional[ConstraintKind] = None

    @property
    def pointer(self) -> str:
        return to_json_pointer(self.path)

    @property
    def dotted_path(self) -> str:
        return to_dotted(self.path)

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "path": list(self.path),
            "pointer": self.pointer,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.constraint is not None:
            d["constraint"] = self.constraint.value
        return d


@dataclass(frozen=True)
class Report:
    """Ordered outcomes of one validation call.

    Outcomes follow schema traversal order: fields in declaration order,
    array elements in index order.
    """

    schema_name: str
    outcomes: Tuple[ValidationOutcome, ...] = ()

    @property
    def errors(self) -> Tuple[ValidationOutcome, ...]:
        return tuple(o for o in self.outcomes if o.severity == Severity.ERROR)

    @property
    def warnings(self) -> Tuple[ValidationOutcome, ...]:
        return tuple(o for o in self.outcomes if o.severity == Severity.WARNING)

    @property
    def has_errors(self) -> bool:
        """True iff any outcome blocks persistence."""
        return any(o.is_error for o in self.outcomes)

    @property
    def has_only_warnings(self) -> bool:
        """True iff there is at least one outcome and none of them is an error."""
        return bool(self.outcomes) and not self.has_errors

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def for_path(self, path: Sequence[Any]) -> Tuple[ValidationOutcome, ...]:
        wanted = tuple(path)
        return tuple(o for o in self.outcomes if o.path == wanted)

    def __len__(self) -> int:
        return len(self.outcomes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema": self.schema_name,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


class ReportBuilder:
    """Mutable collector used during one traversal; frozen by :meth:`build`."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self._outcomes: List[ValidationOutcome] = []

    def add(
        self,
        path: FieldPath,
        severity: Severity,
        message: str,
        constraint: Optional[ConstraintKind] = None,
    ) -> None:
        self._outcomes.append(ValidationOutcome(tuple(path), severity, message, constraint))

    def add_error(self, path: FieldPath, message: str, constraint: Optional[ConstraintKind] = None) -> None:
        self.add(path, Severity.ERROR, message, constraint)

    def add_warning(self, path: FieldPath, message: str, constraint: Optional[ConstraintKind] = None) -> None:
        self.add(path, Severity.WARNING, message, constraint)

    def build(self) -> Report:
        return Report(schema_name=self.schema_name, outcomes=tuple(self._outcomes))
