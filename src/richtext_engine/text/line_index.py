"""Line/column index over flat text with O(log n) lookups."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True)
class CursorPosition:
    """1-based line and column."""

    line: int
    column: int


def build_line_offsets(lines: Sequence[str]) -> tuple[int, ...]:
    offsets: list[int] = []
    running = 0
    for line in lines:
        offsets.append(running)
        running += len(line) + 1  # newline
    return tuple(offsets)


def find_line_index(line_offsets: Sequence[int], offset: int) -> int:
    """Greatest ``i`` with ``line_offsets[i] <= offset`` (0 for an empty index)."""

    if not line_offsets:
        return 0
    return max(0, bisect_right(line_offsets, offset) - 1)


@dataclass(frozen=True, slots=True)
class LineIndex:
    """Immutable split of a text into lines plus their start offsets."""

    text: str
    lines: tuple[str, ...]
    line_offsets: tuple[int, ...]

    @classmethod
    def from_text(cls, text: str) -> "LineIndex":
        lines = tuple(text.split("\n"))
        return cls(text=text, lines=lines, line_offsets=build_line_offsets(lines))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def text_length(self) -> int:
        return len(self.text)

    def offset_to_line_column(self, offset: int) -> CursorPosition:
        offset = max(0, min(offset, self.text_length))
        index = find_line_index(self.line_offsets, offset)
        return CursorPosition(line=index + 1, column=offset - self.line_offsets[index] + 1)

    def line_column_to_offset(self, line: int, column: int) -> int:
        index = max(0, min(line - 1, self.line_count - 1))
        text = self.lines[index]
        column_offset = max(0, min(column - 1, len(text)))
        return self.line_offsets[index] + column_offset

    # Renderer-facing names.
    def get_line_at_offset(self, offset: int) -> CursorPosition:
        return self.offset_to_line_column(offset)

    def get_offset_at_line_column(self, line: int, column: int) -> int:
        return self.line_column_to_offset(line, column)

    def line_text(self, line: int) -> str:
        return self.lines[max(0, min(line - 1, self.line_count - 1))]


class LineIndexCache:
    """Holds the last built index and rebuilds only when the text changes."""

    def __init__(self) -> None:
        self._index: Optional[LineIndex] = None
        self.rebuilds = 0

    def get(self, text: str) -> LineIndex:
        current = self._index
        if current is not None and (current.text is text or current.text == text):
            return current
        self._index = LineIndex.from_text(text)
        self.rebuilds += 1
        return self._index

    def clear(self) -> None:
        self._index = None


__all__ = [
    "CursorPosition",
    "LineIndex",
    "LineIndexCache",
    "build_line_offsets",
    "find_line_index",
]
