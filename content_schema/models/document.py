"""Read-only document nodes and the context handed to custom predicates."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union


PathToken = Union[str, int]
FieldPath = Tuple[PathToken, ...]


class AbsentNode:
    """Missing key or explicit ``None``."""

    _instance: Optional["AbsentNode"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def to_python(self) -> Any:
        return None

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = AbsentNode()


@dataclass(frozen=True)
class ScalarNode:
    value: Any

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class SequenceNode:
    items: Tuple["Node", ...]

    def __len__(self) -> int:
        return len(self.items)

    def to_python(self) -> Any:
        return _to_python(self)


@dataclass(frozen=True)
class MappingNode:
    entries: Mapping[str, "Node"]

    def get(self, name: str) -> "Node":
        return self.entries.get(name, ABSENT)

    def __len__(self) -> int:
        return len(self.entries)

    def to_python(self) -> Any:
        return _to_python(self)


Node = Union[AbsentNode, ScalarNode, SequenceNode, MappingNode]

_NODE_TYPES = (AbsentNode, ScalarNode, SequenceNode, MappingNode)


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _children(value: Any) -> Iterable[Any]:
    return value.values() if isinstance(value, Mapping) else value


def _convert_child(value: Any, built: Dict[int, Node]) -> Node:
    if value is None:
        return ABSENT
    if isinstance(value, _NODE_TYPES):
        return value
    if _is_container(value):
        return built[id(value)]
    return ScalarNode(value)


def to_node(value: Any) -> Node:
    """Convert plain Python data (dict / list / tuple / scalars) to nodes.

    The input is copied; later changes to it do not leak into the nodes.
    Containers are converted bottom-up with an explicit stack, so nesting
    depth is not limited by the interpreter's recursion limit.

    Raises:
        ValueError: If a container contains itself.
    """
    if not _is_container(value):
        return _convert_child(value, {})

    built: Dict[int, Node] = {}
    # Containers whose children are still being converted.
    open_ids: Set[int] = set()
    stack: List[Tuple[Any, bool]] = [(value, False)]
    while stack:
        current, expanded = stack.pop()
        key = id(current)
        if expanded:
            if isinstance(current, Mapping):
                built[key] = MappingNode(
                    MappingProxyType({str(k): _convert_child(v, built) for k, v in current.items()})
                )
            else:
                built[key] = SequenceNode(tuple(_convert_child(v, built) for v in current))
            open_ids.discard(key)
            continue
        if key in built:
            continue
        if key in open_ids:
            raise ValueError("Document contains a reference cycle")
        open_ids.add(key)
        stack.append((current, True))
        for child in _children(current):
            if _is_container(child) and id(child) not in built:
                stack.append((child, False))
    return built[id(value)]


def _to_python(node: Node) -> Any:
    # Iterative for the same reason as to_node.
    if not isinstance(node, (SequenceNode, MappingNode)):
        return node.to_python()

    done: Dict[int, Any] = {}
    stack: List[Tuple[Node, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            if isinstance(current, MappingNode):
                done[id(current)] = {k: _plain(v, done) for k, v in current.entries.items()}
            else:
                done[id(current)] = [_plain(v, done) for v in current.items]
            continue
        stack.append((current, True))
        children = current.entries.values() if isinstance(current, MappingNode) else current.items
        for child in children:
            if isinstance(child, (SequenceNode, MappingNode)) and id(child) not in done:
                stack.append((child, False))
    return done[id(node)]


def _plain(node: Node, done: Dict[int, Any]) -> Any:
    if isinstance(node, (SequenceNode, MappingNode)):
        return done[id(node)]
    return node.to_python()


def is_empty(node: Node) -> bool:
    """Absent, empty string, empty list and empty mapping all count as empty."""
    if isinstance(node, AbsentNode):
        return True
    if isinstance(node, ScalarNode):
        return node.value == "" if isinstance(node.value, str) else False
    return len(node) == 0


def resolve(root: Node, path: FieldPath) -> Node:
    node = root
    for token in path:
        if isinstance(token, int) and isinstance(node, SequenceNode):
            node = node.items[token] if 0 <= token < len(node.items) else ABSENT
        elif isinstance(token, str) and isinstance(node, MappingNode):
            node = node.get(token)
        else:
            return ABSENT
    return node


@dataclass(frozen=True)
class ValidationContext:
    """Explicit read-only handle passed to custom predicates.

    Attributes:
        document: Root node of the document under validation.
        path: Path of the field being checked.
        parent: Mapping node holding the field (the root for top-level fields).
    """

    document: MappingNode
    path: FieldPath
    parent: Node

    def lookup(self, *path: PathToken) -> Any:
        """Plain value at ``path`` from the document root, or ``None``."""
        return resolve(self.document, path).to_python()

    def sibling(self, name: str) -> Any:
        """Plain value of a field next to the one being checked, or ``None``."""
        if isinstance(self.parent, MappingNode):
            return self.parent.get(name).to_python()
        return None
