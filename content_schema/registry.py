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

from typing import Dict, Iterable, List, Optional
import logging

from .exceptions import SchemaError
from .models.field_types import FieldTypeRegistry, default_registry
from .models.schema import DocumentType, check_schema

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Collection of document types with unique names.

    Every document type is checked on registration, so a registry only ever
    holds well-formed schemas.
    """

    def __init__(
        self,
        schemas: Iterable[DocumentType] = (),
        field_types: FieldTypeRegistry = default_registry,
    ):
        self.field_types = field_types
        self._schemas: Dict[str, DocumentType] = {}
        for schema in schemas:
            self.register(schema)

    def register(self, schema: DocumentType) -> DocumentType:
        check_schema(schema, self.field_types)
        if schema.name in self._schemas:
            raise SchemaError(f"Duplicate document type '{schema.name}'", schema.name)
        logger.debug(f"Registering document type: {schema.name}")
        self._schemas[schema.name] = schema
        return schema

    def get(self, name: str, default: Optional[DocumentType] = None) -> Optional[DocumentType]:
        """Get document type by name with default value."""
        return self._schemas.get(name, default)

    def __getitem__(self, name: str) -> DocumentType:
        try:
            return self._schemas[name]
        except KeyError:
            raise SchemaError(
                f"Unknown document type '{name}'. Valid types: {self.names()}"
            ) from None

    def __contains__(self, name: str) -> bool:
        return name in self._schemas

    def __iter__(self):
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    def names(self) -> List[str]:
        return list(self._schemas)
