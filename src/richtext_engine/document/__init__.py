"""Block document model and text edit operations."""

from .blocks import BLOCK_TYPES, Block, BlockType, create_block, new_block_id
from .document import BlockDocument, BlockLocation, block_spans, to_global_segments
from .edits import (
    apply_style_to_block,
    delete_range,
    delete_range_in_block,
    insert_text,
    insert_text_in_block,
    merge_blocks,
    remove_styles_from_block,
    replace_range,
    split_block,
    text_in_range,
)

__all__ = [
    "BLOCK_TYPES",
    "Block",
    "BlockDocument",
    "BlockLocation",
    "BlockType",
    "apply_style_to_block",
    "block_spans",
    "create_block",
    "delete_range",
    "delete_range_in_block",
    "insert_text",
    "insert_text_in_block",
    "merge_blocks",
    "new_block_id",
    "remove_styles_from_block",
    "replace_range",
    "split_block",
    "text_in_range",
    "to_global_segments",
]
