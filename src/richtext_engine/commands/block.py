"""Block-level commands.

``set_block_type`` is what ``execute_block_command`` dispatches to: it flips
``Block.type`` and leaves content and segments alone. The ``toggle_*``
helpers are the markdown-flavoured variant that also writes a visible prefix
into the content and shifts the block's segments to match.
"""

from __future__ import annotations

import re
from typing import Optional

from richtext_engine.document import Block, BlockDocument, BlockType
from richtext_engine.styles import shift_segments

from .models import CommandParams

HEADING_PREFIX = re.compile(r"^#{1,3} ")
NUMBERED_PREFIX = re.compile(r"^\d+\.\s")
BULLET_PREFIX = "• "
QUOTE_PREFIX = "> "


def block_index_range(doc: BlockDocument, start: int, end: int) -> Optional[range]:
    """Indexes of the blocks holding ``start`` through ``end``, inclusive.

    ``None`` when no block holds ``start``. An ``end`` outside the document
    falls back to the start block.
    """

    first = doc.find_block_index(start)
    if first is None:
        return None
    last = doc.find_block_index(end)
    if last is None or last < first:
        last = first
    return range(first, last + 1)


def set_block_type(
    doc: BlockDocument, start: int, end: int, block_type: BlockType
) -> BlockDocument:
    """Toggle every block in the range to ``block_type``, or back to paragraph."""

    indexes = block_index_range(doc, start, end)
    if indexes is None:
        return doc
    changes: dict[int, Block] = {}
    for index in indexes:
        block = doc.blocks[index]
        target: BlockType = "paragraph" if block.type == block_type else block_type
        changes[index] = block.with_type(target)
    return doc.replace_blocks(changes)


def set_block_type_command(
    doc: BlockDocument,
    start: int,
    end: int,
    params: CommandParams,
    *,
    block_type: BlockType,
) -> BlockDocument:
    return set_block_type(doc, start, end, block_type)


def _rewrite(block: Block, block_type: BlockType, strip: int, prefix: str = "") -> Block:
    body = block.content[strip:]
    content = prefix + body
    styles = shift_segments(block.styles, len(prefix) - strip, limit=len(content))
    return Block(id=block.id, type=block_type, content=content, styles=styles)


def _leading(pattern: re.Pattern[str], content: str) -> int:
    match = pattern.match(content)
    return match.end() if match else 0


def _literal(prefix: str, content: str) -> int:
    return len(prefix) if content.startswith(prefix) else 0


def toggle_heading(doc: BlockDocument, start: int, end: int, level: int) -> BlockDocument:
    if level not in (1, 2, 3):
        return doc
    indexes = block_index_range(doc, start, end)
    if indexes is None:
        return doc
    block_type: BlockType = f"heading-{level}"  # type: ignore[assignment]
    prefix = "#" * level + " "
    changes: dict[int, Block] = {}
    for index in indexes:
        block = doc.blocks[index]
        existing = _leading(HEADING_PREFIX, block.content)
        if block.type == block_type:
            changes[index] = _rewrite(block, "paragraph", existing)
        else:
            # Swap any other heading marker for this level's.
            changes[index] = _rewrite(block, block_type, existing, prefix)
    return doc.replace_blocks(changes)


def _toggle_literal_prefix(
    doc: BlockDocument, start: int, end: int, block_type: BlockType, prefix: str
) -> BlockDocument:
    indexes = block_index_range(doc, start, end)
    if indexes is None:
        return doc
    changes: dict[int, Block] = {}
    for index in indexes:
        block = doc.blocks[index]
        if block.type == block_type:
            changes[index] = _rewrite(block, "paragraph", _literal(prefix, block.content))
        else:
            changes[index] = _rewrite(block, block_type, 0, prefix)
    return doc.replace_blocks(changes)


def toggle_bullet_list(doc: BlockDocument, start: int, end: int) -> BlockDocument:
    return _toggle_literal_prefix(doc, start, end, "bullet-list", BULLET_PREFIX)


def toggle_blockquote(doc: BlockDocument, start: int, end: int) -> BlockDocument:
    return _toggle_literal_prefix(doc, start, end, "blockquote", QUOTE_PREFIX)


def toggle_numbered_list(doc: BlockDocument, start: int, end: int) -> BlockDocument:
    """Number the blocks ``1. ``, ``2. `` ... or strip the numbering again."""

    indexes = block_index_range(doc, start, end)
    if indexes is None:
        return doc
    changes: dict[int, Block] = {}
    number = 1
    for index in indexes:
        block = doc.blocks[index]
        if block.type == "numbered-list":
            changes[index] = _rewrite(
                block, "paragraph", _leading(NUMBERED_PREFIX, block.content)
            )
            continue
        changes[index] = _rewrite(block, "numbered-list", 0, f"{number}. ")
        number += 1
    return doc.replace_blocks(changes)


__all__ = [
    "BULLET_PREFIX",
    "QUOTE_PREFIX",
    "block_index_range",
    "set_block_type",
    "set_block_type_command",
    "toggle_blockquote",
    "toggle_bullet_list",
    "toggle_heading",
    "toggle_numbered_list",
]
