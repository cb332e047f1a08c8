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

"""YAML/JSON document loader that keeps source locations."""

import logging
from pathlib import Path
from typing import Any, Tuple, Union

import yaml

from ..exceptions import DocumentLoadError
from .source_location import SourceMap, json_pointer_escape

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Reads documents with PyYAML; JSON is valid YAML and goes the same way."""

    @classmethod
    def build_source_map(cls, content: str) -> SourceMap:
        """Build a mapping from JSON pointers to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so locations are tracked
        without changing the data returned by safe_load.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parse errors are reported by the data load itself.
            return source_map

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        # Ids of collection nodes on the current path; recursive aliases stop here.
        active = set()

        def _walk(node, path: str) -> None:
            _record(path, node)
            if id(node) in active:
                return

            active.add(id(node))
            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, f"{path}/{json_pointer_escape(str(key))}")
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")
            active.discard(id(node))

        _walk(root, "")
        return source_map

    def load_from_string_with_source(self, content: str) -> Tuple[Any, SourceMap]:
        """Parse document content and return (data, source_map)."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse document content: {exc}") from exc
        return data, self.build_source_map(content)

    def load_with_source(self, file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
        """Load a document file and return (data, source_map).

        Raises:
            DocumentLoadError: If the file is missing or cannot be parsed.
        """
        path = Path(file_path)

        if not path.exists():
            raise DocumentLoadError(f"Document file not found: {path}")

        if not path.is_file():
            raise DocumentLoadError(f"Path is not a file: {path}")

        logger.debug(f"Loading document file: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Failed to read document file {path}: {exc}") from exc

        try:
            return self.load_from_string_with_source(content)
        except DocumentLoadError as exc:
            raise DocumentLoadError(f"{path}: {exc}") from exc

    def load(self, file_path: Union[str, Path]) -> Any:
        data, _ = self.load_with_source(file_path)
        return data


document_loader = DocumentLoader()
