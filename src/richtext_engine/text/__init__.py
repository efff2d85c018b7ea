"""Derived text indexes consumed by renderers."""

from .line_index import (
    CursorPosition,
    LineIndex,
    LineIndexCache,
    build_line_offsets,
    find_line_index,
)

__all__ = [
    "CursorPosition",
    "LineIndex",
    "LineIndexCache",
    "build_line_offsets",
    "find_line_index",
]
