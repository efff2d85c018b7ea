"""Inline style toggles and direct colour commands."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterator

from richtext_engine.document import Block, BlockDocument, block_spans
from richtext_engine.styles import StyleValue, add_segment, cut_segments, matches_style
from richtext_engine.styles.merge import (
    StylePredicate,
    has_background,
    has_color,
    restyle_segments,
)

from .errors import UnknownTagError
from .models import CommandParams


def iter_block_windows(
    doc: BlockDocument, start: int, end: int
) -> Iterator[tuple[int, Block, int, int]]:
    """Yield ``(index, block, local_start, local_end)`` for blocks touching the range.

    Local bounds are clipped to the block, so a window can be empty when the
    range only touches a block edge.
    """

    for index, (block_start, block_end, block) in enumerate(block_spans(doc)):
        if block_end < start or block_start > end:
            continue
        local_start = max(0, start - block_start)
        local_end = min(block.length, end - block_start)
        yield index, block, local_start, local_end


def get_tags_at_offset(doc: BlockDocument, offset: int) -> tuple[str, ...]:
    """Tags whose style covers ``offset``, in segment order without duplicates."""

    location = doc.locate(offset)
    tags: list[str] = []
    for segment in location.block.segments_at(location.local_offset):
        for tag in doc.style_definitions.tags_for(segment.style):
            if tag not in tags:
                tags.append(tag)
    return tuple(tags)


def is_style_active(doc: BlockDocument, offset: int, style: StyleValue) -> bool:
    location = doc.locate(offset)
    return any(
        segment.style == style
        for segment in location.block.segments_at(location.local_offset)
    )


def add_style(
    doc: BlockDocument, start: int, end: int, style: StyleValue
) -> BlockDocument:
    changes: dict[int, Block] = {}
    for index, block, local_start, local_end in iter_block_windows(doc, start, end):
        if local_start >= local_end:
            continue
        changes[index] = block.with_styles(
            add_segment(block.styles, local_start, local_end, style)
        )
    return doc.replace_blocks(changes)


def remove_style(
    doc: BlockDocument, start: int, end: int, predicate: StylePredicate
) -> BlockDocument:
    changes: dict[int, Block] = {}
    for index, block, local_start, local_end in iter_block_windows(doc, start, end):
        if local_start >= local_end:
            continue
        changes[index] = block.with_styles(
            cut_segments(block.styles, local_start, local_end, predicate)
        )
    return doc.replace_blocks(changes)


def strip_property(
    doc: BlockDocument,
    start: int,
    end: int,
    predicate: StylePredicate,
    transform: Callable[[StyleValue], StyleValue],
) -> BlockDocument:
    changes: dict[int, Block] = {}
    for index, block, local_start, local_end in iter_block_windows(doc, start, end):
        if local_start >= local_end:
            continue
        changes[index] = block.with_styles(
            restyle_segments(block.styles, local_start, local_end, predicate, transform)
        )
    return doc.replace_blocks(changes)


def _without_color(style: StyleValue) -> StyleValue:
    return replace(style, color=None)


def _without_background(style: StyleValue) -> StyleValue:
    return replace(style, background_color=None)


def toggle_tag(doc: BlockDocument, start: int, end: int, tag: str) -> BlockDocument:
    """Remove ``tag`` over the range if it is active at ``start``, else add it."""

    style = doc.style_definitions.lookup(tag)
    if style is None:
        raise UnknownTagError(tag)
    if is_style_active(doc, start, style):
        return remove_style(doc, start, end, matches_style(style))
    return add_style(doc, start, end, style)


def apply_color(
    doc: BlockDocument,
    start: int,
    end: int,
    color: str | None = None,
    background_color: str | None = None,
) -> BlockDocument:
    """Recolour the range. Existing colour segments inside it are replaced."""

    result = doc
    if color:
        result = strip_property(result, start, end, has_color, _without_color)
        result = add_style(result, start, end, StyleValue(color=color))
    if background_color:
        result = strip_property(result, start, end, has_background, _without_background)
        result = add_style(result, start, end, StyleValue(background_color=background_color))
    if result.blocks == doc.blocks:
        return doc
    if result.version > doc.version + 1:
        # Collapse the intermediate snapshots into one step.
        result = doc.with_blocks(result.blocks)
    return result


def remove_color(doc: BlockDocument, start: int, end: int) -> BlockDocument:
    """Drop the ``color`` property inside the range; other properties stay."""

    return strip_property(doc, start, end, has_color, _without_color)


def toggle_tag_command(
    doc: BlockDocument,
    start: int,
    end: int,
    params: CommandParams,
    *,
    tag: str,
) -> BlockDocument:
    return toggle_tag(doc, start, end, tag)


def text_color_command(
    doc: BlockDocument, start: int, end: int, params: CommandParams
) -> BlockDocument:
    return apply_color(doc, start, end, params.color, params.background_color)


def remove_color_command(
    doc: BlockDocument, start: int, end: int, params: CommandParams
) -> BlockDocument:
    return remove_color(doc, start, end)


__all__ = [
    "add_style",
    "apply_color",
    "get_tags_at_offset",
    "is_style_active",
    "iter_block_windows",
    "remove_color",
    "remove_color_command",
    "remove_style",
    "strip_property",
    "text_color_command",
    "toggle_tag",
    "toggle_tag_command",
]
