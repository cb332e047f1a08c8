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

"""Per-file results of the document checker."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..file_io.source_location import SourceMap, lookup_source
from ..models.rules import Severity
from ..report import Report


class CheckResult:
    """Container for checker results for a single file."""

    def __init__(self, file_path: Path):
        """Initialize check result.

        Args:
            file_path: Path to the document file being checked
        """
        self.file_path = file_path
        self.schema_name: Optional[str] = None
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    @staticmethod
    def _entry(
        message: str,
        line: Optional[int],
        column: Optional[int],
        pointer: Optional[str],
    ) -> Dict[str, Any]:
        entry: Dict[str, Any] = {'message': message}
        if line is not None:
            entry['line'] = line
        if column is not None:
            entry['column'] = column
        if pointer is not None:
            entry['pointer'] = pointer
        return entry

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        pointer: Optional[str] = None,
    ):
        """Add an error message."""
        self.errors.append(self._entry(message, line, column, pointer))

    def add_warning(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        pointer: Optional[str] = None,
    ):
        """Add a warning message."""
        self.warnings.append(self._entry(message, line, column, pointer))

    def add_report(self, report: Report, source_map: Optional[SourceMap] = None):
        """Copy validation outcomes, resolving each path to a source location.

        Args:
            report: Report produced by the validator
            source_map: JSON pointer to line/column map of the document file
        """
        self.schema_name = report.schema_name
        for outcome in report.outcomes:
            loc = lookup_source(source_map, outcome.pointer)
            add = self.add_error if outcome.severity == Severity.ERROR else self.add_warning
            add(outcome.message, line=loc.line, column=loc.column, pointer=outcome.pointer)

    def failed(self, strict: bool = False) -> bool:
        return bool(self.errors) or (strict and bool(self.warnings))
