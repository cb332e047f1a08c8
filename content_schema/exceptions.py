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

"""Custom exceptions for the content schema validator.

Document content problems are never raised; they are collected as
outcomes in a :class:`~content_schema.report.Report`.
"""

from typing import Optional


class ContentSchemaError(Exception):
    """Base exception for content-schema related errors."""
    pass


class SchemaError(ContentSchemaError):
    """Exception raised for schema authoring defects.

    Attributes:
        schema_path: Slash separated location of the defect inside the schema
            tree (e.g. ``order/items/of/productId``).
    """

    def __init__(self, message: str, schema_path: Optional[str] = None):
        self.message = message
        self.schema_path = schema_path
        if schema_path:
            message = f"{message} (schema_path={schema_path})"
        super().__init__(message)


class DocumentLoadError(ContentSchemaError):
    """Exception raised when a document file cannot be loaded."""
    pass
