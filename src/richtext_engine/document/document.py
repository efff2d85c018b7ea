"""Immutable block document snapshots and global <-> local offset mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import accumulate
from typing import Callable, Iterable, Mapping, Optional, Sequence

from richtext_engine.styles import (
    DEFAULT_STYLE_DEFINITIONS,
    EMPTY_STYLE_DEFINITIONS,
    StyleDefinitionTable,
    StyleSegment,
)
from richtext_engine.styles.table import StyleLike

from .blocks import Block, create_block


@dataclass(frozen=True, slots=True)
class BlockLocation:
    """Where a global offset lands: the block, its index, and the local offset."""

    block: Block
    block_index: int
    local_offset: int


@dataclass(frozen=True, slots=True)
class BlockDocument:
    """Ordered blocks plus the style table that names their inline styles.

    Every mutation returns a new snapshot with ``version`` bumped by one, so
    callers can spot a no-op by identity or by an unchanged version. The flat
    text is the block contents joined by single newlines.
    """

    blocks: tuple[Block, ...] = field(default_factory=lambda: (create_block(),))
    style_definitions: StyleDefinitionTable = EMPTY_STYLE_DEFINITIONS
    version: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))
        if not self.blocks:
            raise ValueError("a document holds at least one block")
        if not isinstance(self.style_definitions, StyleDefinitionTable):
            object.__setattr__(
                self,
                "style_definitions",
                StyleDefinitionTable(self.style_definitions),
            )

    @classmethod
    def from_text(
        cls,
        text: str,
        style_definitions: Optional[Mapping[str, StyleLike]] = None,
    ) -> "BlockDocument":
        """Split ``text`` on newlines into paragraph blocks."""

        table = (
            style_definitions
            if isinstance(style_definitions, StyleDefinitionTable)
            else StyleDefinitionTable(style_definitions)
        )
        blocks = tuple(create_block(line) for line in text.split("\n"))
        return cls(blocks=blocks, style_definitions=table, version=1)

    @classmethod
    def with_default_styles(
        cls,
        text: str,
        extra: Optional[Mapping[str, StyleLike]] = None,
    ) -> "BlockDocument":
        """Like ``from_text`` with the bold/italic/... tags pre-registered."""

        table = DEFAULT_STYLE_DEFINITIONS.extended(extra or {})
        return cls.from_text(text, table)

    @property
    def text(self) -> str:
        return "\n".join(block.content for block in self.blocks)

    @property
    def length(self) -> int:
        return sum(block.length for block in self.blocks) + len(self.blocks) - 1

    def block_starts(self) -> tuple[int, ...]:
        """Global start offset of every block."""

        return tuple(
            accumulate(
                (block.length + 1 for block in self.blocks[:-1]),
                initial=0,
            )
        )

    def locate(self, offset: int) -> BlockLocation:
        """Map a global offset to its block.

        An offset equal to a block's length belongs to that block (the caret
        sits before the newline). Offsets past the end land at the end of the
        last block; negative offsets land at the start of the first one.
        """

        running = 0
        for index, block in enumerate(self.blocks):
            block_end = running + block.length
            if offset <= block_end:
                return BlockLocation(block, index, max(0, offset - running))
            running = block_end + 1
        last = len(self.blocks) - 1
        return BlockLocation(self.blocks[last], last, self.blocks[last].length)

    def find_block_index(self, offset: int) -> Optional[int]:
        """Index of the block whose span ``[start, start + length]`` holds ``offset``."""

        if offset < 0:
            return None
        running = 0
        for index, block in enumerate(self.blocks):
            block_end = running + block.length
            if offset <= block_end:
                return index
            running = block_end + 1
        return None

    def global_offset(self, block_index: int, local_offset: int) -> int:
        return self.block_starts()[block_index] + local_offset

    def get_block_by_id(self, block_id: str) -> Optional[Block]:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def get_block_index_by_id(self, block_id: str) -> int:
        for index, block in enumerate(self.blocks):
            if block.id == block_id:
                return index
        return -1

    def with_blocks(self, blocks: Iterable[Block]) -> "BlockDocument":
        """Return the next version of this document holding ``blocks``."""

        return BlockDocument(
            blocks=tuple(blocks) or (create_block(),),
            style_definitions=self.style_definitions,
            version=self.version + 1,
        )

    def replace_blocks(self, changes: Mapping[int, Block]) -> "BlockDocument":
        """Swap blocks by index; returns ``self`` when nothing actually changed."""

        if all(self.blocks[index] == block for index, block in changes.items()):
            return self
        blocks = list(self.blocks)
        for index, block in changes.items():
            blocks[index] = block
        return self.with_blocks(blocks)

    def update_block(
        self, block_id: str, updater: Callable[[Block], Block]
    ) -> "BlockDocument":
        index = self.get_block_index_by_id(block_id)
        if index == -1:
            return self
        current = self.blocks[index]
        updated = updater(current)
        if updated is current:
            return self
        return self.replace_blocks({index: updated})


def to_global_segments(doc: BlockDocument) -> tuple[StyleSegment, ...]:
    """All block-local segments re-based onto flat-text offsets."""

    segments: list[StyleSegment] = []
    for start, block in zip(doc.block_starts(), doc.blocks):
        segments.extend(segment.shifted(start) for segment in block.styles)
    return tuple(segments)


def block_spans(doc: BlockDocument) -> Sequence[tuple[int, int, Block]]:
    """``(global_start, global_end, block)`` per block, newline excluded."""

    return [
        (start, start + block.length, block)
        for start, block in zip(doc.block_starts(), doc.blocks)
    ]


__all__ = ["BlockDocument", "BlockLocation", "block_spans", "to_global_segments"]
