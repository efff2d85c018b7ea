"""Blocks: the structural units of a document."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Iterable, Literal, get_args

from richtext_engine.styles import StyleSegment, sort_segments

BlockType = Literal[
    "paragraph",
    "heading-1",
    "heading-2",
    "heading-3",
    "bullet-list",
    "numbered-list",
    "blockquote",
    "code",
]

BLOCK_TYPES: tuple[str, ...] = get_args(BlockType)


def new_block_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Block:
    """One paragraph-like unit with its own content and block-local styles."""

    id: str
    type: BlockType
    content: str
    styles: tuple[StyleSegment, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("block id cannot be empty")
        if self.type not in BLOCK_TYPES:
            raise ValueError(f"Unknown block type '{self.type}'")
        if "\n" in self.content:
            raise ValueError("block content cannot contain a newline")
        object.__setattr__(self, "styles", tuple(self.styles))
        length = len(self.content)
        for segment in self.styles:
            if segment.end > length:
                raise ValueError(
                    f"segment [{segment.start}, {segment.end}) exceeds "
                    f"block length {length}"
                )

    @property
    def length(self) -> int:
        return len(self.content)

    def with_type(self, block_type: BlockType) -> "Block":
        return replace(self, type=block_type)

    def with_styles(self, styles: Iterable[StyleSegment]) -> "Block":
        return replace(self, styles=sort_segments(styles))

    def with_content(
        self, content: str, styles: Iterable[StyleSegment] | None = None
    ) -> "Block":
        return replace(
            self,
            content=content,
            styles=sort_segments(self.styles if styles is None else styles),
        )

    def segments_at(self, offset: int) -> tuple[StyleSegment, ...]:
        return tuple(segment for segment in self.styles if segment.covers(offset))


def create_block(
    content: str = "",
    block_type: BlockType = "paragraph",
    styles: Iterable[StyleSegment] = (),
    *,
    block_id: str | None = None,
) -> Block:
    return Block(
        id=block_id or new_block_id(),
        type=block_type,
        content=content,
        styles=sort_segments(styles),
    )


__all__ = ["BLOCK_TYPES", "Block", "BlockType", "create_block", "new_block_id"]
