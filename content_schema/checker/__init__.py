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

"""Document checker: validates YAML/JSON document files against registered schemas."""

import logging
from pathlib import Path
from typing import List, Optional

from ..exceptions import DocumentLoadError
from ..file_io.document_loader import document_loader
from ..registry import SchemaRegistry
from ..validator import Validator
from .report import CheckResult

__all__ = ['check_file', 'check_files', 'CheckResult']

logger = logging.getLogger(__name__)


def check_file(
    file_path: Path,
    registry: SchemaRegistry,
    validator: Validator,
    schema_name: Optional[str] = None,
) -> CheckResult:
    """Validate one document file.

    The document type is ``schema_name`` when given, otherwise the
    document's ``_type`` field.
    """
    result = CheckResult(file_path)

    try:
        data, source_map = document_loader.load_with_source(file_path)
    except DocumentLoadError as e:
        result.add_error(str(e))
        return result

    name = schema_name
    if name is None and isinstance(data, dict):
        name = data.get('_type')
    if not name:
        result.add_error("Cannot determine document type: pass --schema or set '_type' in the document")
        return result

    schema = registry.get(name)
    if schema is None:
        result.add_error(f"Unknown document type '{name}'. Valid types: {registry.names()}")
        return result

    logger.debug(f"Checking {file_path} against '{name}'")
    try:
        report = validator.validate(schema, data)
    except ValueError as e:
        result.add_error(f"Cannot validate document: {e}")
        return result
    result.add_report(report, source_map)
    return result


def check_files(
    file_paths: List[Path],
    registry: SchemaRegistry,
    validator: Optional[Validator] = None,
    schema_name: Optional[str] = None,
) -> List[CheckResult]:
    """Check a list of document files.

    Returns:
        List of CheckResult objects, one per file
    """
    if validator is None:
        validator = Validator(registry.field_types)
    return [check_file(path, registry, validator, schema_name) for path in file_paths]
