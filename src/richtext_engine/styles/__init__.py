"""Style values, the tag definition table, and segment merging."""

from .merge import (
    add_segment,
    cut_segments,
    matches_style,
    merge_segments,
    shift_segments,
    sort_segments,
)
from .models import StyleSegment, StyleValue
from .table import (
    DEFAULT_STYLE_DEFINITIONS,
    EMPTY_STYLE_DEFINITIONS,
    StyleDefinitionTable,
)

__all__ = [
    "DEFAULT_STYLE_DEFINITIONS",
    "EMPTY_STYLE_DEFINITIONS",
    "StyleDefinitionTable",
    "StyleSegment",
    "StyleValue",
    "add_segment",
    "cut_segments",
    "matches_style",
    "merge_segments",
    "shift_segments",
    "sort_segments",
]
