"""Text edits over block documents: insert, delete, split, merge."""

from __future__ import annotations

from richtext_engine.styles import (
    StyleSegment,
    StyleValue,
    add_segment,
    cut_segments,
    merge_segments,
    shift_segments,
)

from .blocks import Block, create_block
from .document import BlockDocument


def insert_text_in_block(block: Block, offset: int, text: str) -> Block:
    """Insert newline-free ``text`` at a local offset.

    Segments after the caret shift right; a segment spanning the caret grows.
    A segment ending exactly at the caret does not extend.
    """

    if not text:
        return block
    offset = max(0, min(offset, block.length))
    size = len(text)
    styles: list[StyleSegment] = []
    for segment in block.styles:
        if segment.end <= offset:
            styles.append(segment)
        elif segment.start >= offset:
            styles.append(segment.shifted(size))
        else:
            styles.append(segment.with_bounds(segment.start, segment.end + size))
    content = block.content[:offset] + text + block.content[offset:]
    return block.with_content(content, styles)


def delete_range_in_block(block: Block, start: int, end: int) -> Block:
    if start >= end or start < 0 or end > block.length:
        return block
    size = end - start
    styles: list[StyleSegment] = []
    for segment in block.styles:
        if segment.end <= start:
            styles.append(segment)
        elif segment.start >= end:
            styles.append(segment.shifted(-size))
        elif segment.start >= start and segment.end <= end:
            continue
        elif segment.start < start and segment.end > end:
            styles.append(segment.with_bounds(segment.start, segment.end - size))
        elif segment.start < start:
            styles.append(segment.with_bounds(segment.start, start))
        else:
            styles.append(segment.with_bounds(start, segment.end - size))
    content = block.content[:start] + block.content[end:]
    return block.with_content(content, merge_segments(styles))


def split_block(block: Block, offset: int) -> tuple[Block, Block]:
    """Split at a local offset; the first half keeps the id, the second gets a new one."""

    offset = max(0, min(offset, block.length))
    before: list[StyleSegment] = []
    after: list[StyleSegment] = []
    for segment in block.styles:
        if segment.end <= offset:
            before.append(segment)
        elif segment.start >= offset:
            after.append(segment.shifted(-offset))
        else:
            before.append(segment.with_bounds(segment.start, offset))
            after.append(segment.with_bounds(0, segment.end - offset))
    head = block.with_content(block.content[:offset], before)
    tail = create_block(block.content[offset:], block.type, after)
    return head, tail


def merge_blocks(first: Block, second: Block) -> Block:
    """Append ``second`` to ``first``; the result keeps ``first``'s id and type."""

    shifted = shift_segments(second.styles, first.length)
    return first.with_content(
        first.content + second.content, merge_segments([*first.styles, *shifted])
    )


def apply_style_to_block(block: Block, start: int, end: int, style: StyleValue) -> Block:
    if start >= end or start < 0 or end > block.length:
        return block
    return block.with_styles(add_segment(block.styles, start, end, style))


def remove_styles_from_block(block: Block, start: int, end: int) -> Block:
    """Strip every style from ``[start, end)``."""

    if start >= end:
        return block
    return block.with_styles(cut_segments(block.styles, start, end, lambda _: True))


def insert_text(doc: BlockDocument, offset: int, text: str) -> BlockDocument:
    """Insert ``text`` at a global offset; embedded newlines split the block."""

    if not text:
        return doc
    location = doc.locate(offset)
    index, local = location.block_index, location.local_offset
    original = location.block

    if "\n" not in text:
        return doc.replace_blocks({index: insert_text_in_block(original, local, text)})

    lines = text.split("\n")
    head, tail = split_block(original, local)
    first = insert_text_in_block(head, head.length, lines[0])
    middle = [create_block(line, original.type) for line in lines[1:-1]]
    last = insert_text_in_block(tail, 0, lines[-1])

    blocks = [*doc.blocks[:index], first, *middle, last, *doc.blocks[index + 1 :]]
    return doc.with_blocks(blocks)


def delete_range(doc: BlockDocument, start: int, end: int) -> BlockDocument:
    """Delete ``[start, end)`` of the flat text, joining blocks across newlines."""

    start = max(0, start)
    end = min(end, doc.length)
    if start >= end:
        return doc

    first = doc.locate(start)
    last = doc.locate(end)
    if first.block_index == last.block_index:
        updated = delete_range_in_block(first.block, first.local_offset, last.local_offset)
        return doc.replace_blocks({first.block_index: updated})

    head = first.block
    kept_head = [
        segment.with_bounds(segment.start, min(segment.end, first.local_offset))
        for segment in head.styles
        if segment.start < first.local_offset
    ]
    kept_tail = shift_segments(
        (
            segment.with_bounds(max(segment.start, last.local_offset), segment.end)
            for segment in last.block.styles
            if segment.end > last.local_offset
        ),
        first.local_offset - last.local_offset,
    )
    joined = head.with_content(
        head.content[: first.local_offset] + last.block.content[last.local_offset :],
        merge_segments([*kept_head, *kept_tail]),
    )
    blocks = [
        *doc.blocks[: first.block_index],
        joined,
        *doc.blocks[last.block_index + 1 :],
    ]
    return doc.with_blocks(blocks)


def replace_range(doc: BlockDocument, start: int, end: int, text: str) -> BlockDocument:
    """Delete then insert as a single mutation (one version bump)."""

    edited = insert_text(delete_range(doc, start, end), max(0, start), text)
    if edited is doc:
        return doc
    return BlockDocument(
        blocks=edited.blocks,
        style_definitions=doc.style_definitions,
        version=doc.version + 1,
    )


def text_in_range(doc: BlockDocument, start: int, end: int) -> str:
    start = max(0, start)
    if start >= end:
        return ""
    return doc.text[start:end]


__all__ = [
    "apply_style_to_block",
    "delete_range",
    "delete_range_in_block",
    "insert_text",
    "insert_text_in_block",
    "merge_blocks",
    "remove_styles_from_block",
    "replace_range",
    "split_block",
    "text_in_range",
]
