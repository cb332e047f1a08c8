from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

# JSON pointer -> {"line": .., "column": ..}, both 1-based.
SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    pointer: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def _parent_pointer(pointer: str) -> Optional[str]:
    if not pointer:
        return None
    return pointer.rsplit("/", 1)[0]


def lookup_source(source_map: Optional[SourceMap], pointer: Optional[str]) -> SourceLocation:
    """Location of ``pointer`` in the source file.

    Missing fields have no node of their own, so the closest enclosing node
    that does exist is reported instead.
    """
    if not source_map or pointer is None:
        return SourceLocation(pointer=pointer)

    current: Optional[str] = pointer
    while current is not None:
        entry = source_map.get(current)
        if entry:
            return SourceLocation(pointer=pointer, line=entry.get("line"), column=entry.get("column"))
        current = _parent_pointer(current)

    return SourceLocation(pointer=pointer)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""
    if loc.line is not None and loc.column is not None:
        return f"{loc.line}:{loc.column}"
    if loc.line is not None:
        return str(loc.line)
    return ""
