"""Pure interval helpers that keep a block's segment list canonical."""

from __future__ import annotations

from typing import Callable, Iterable

from .models import StyleSegment, StyleValue

StylePredicate = Callable[[StyleValue], bool]


def sort_segments(segments: Iterable[StyleSegment]) -> tuple[StyleSegment, ...]:
    return tuple(sorted(segments, key=lambda segment: segment.start))


def merge_segments(segments: Iterable[StyleSegment]) -> tuple[StyleSegment, ...]:
    """Fold overlapping or touching same-style segments into their union.

    Candidates are visited in start order and each joins the first result
    segment with an identical style it overlaps or touches. The output is
    start-sorted, so the first covering segment is deterministic.
    """

    result: list[StyleSegment] = []
    for candidate in sort_segments(segments):
        for index, existing in enumerate(result):
            if existing.style != candidate.style or not existing.touches(candidate):
                continue
            result[index] = existing.with_bounds(
                min(existing.start, candidate.start),
                max(existing.end, candidate.end),
            )
            break
        else:
            result.append(candidate)
    return sort_segments(result)


def add_segment(
    segments: Iterable[StyleSegment], start: int, end: int, style: StyleValue
) -> tuple[StyleSegment, ...]:
    return merge_segments([*segments, StyleSegment(start, end, style)])


def cut_segments(
    segments: Iterable[StyleSegment],
    start: int,
    end: int,
    predicate: StylePredicate,
) -> tuple[StyleSegment, ...]:
    """Drop ``[start, end)`` from every segment whose style passes ``predicate``.

    The parts of a matching segment that fall outside the window survive;
    non-matching segments are untouched.
    """

    kept: list[StyleSegment] = []
    for segment in segments:
        if not predicate(segment.style) or not segment.overlaps(start, end):
            kept.append(segment)
            continue
        if segment.start < start:
            kept.append(segment.with_bounds(segment.start, start))
        if segment.end > end:
            kept.append(segment.with_bounds(end, segment.end))
    return sort_segments(kept)


def restyle_segments(
    segments: Iterable[StyleSegment],
    start: int,
    end: int,
    predicate: StylePredicate,
    transform: Callable[[StyleValue], StyleValue],
) -> tuple[StyleSegment, ...]:
    """Rewrite the ``[start, end)`` part of matching segments with ``transform``.

    Parts outside the window keep their style. An inside part whose new style
    is empty is dropped.
    """

    segments = tuple(segments)
    inside: list[StyleSegment] = []
    for segment in segments:
        if not predicate(segment.style) or not segment.overlaps(start, end):
            continue
        style = transform(segment.style)
        if not style.is_empty:
            inside.append(
                StyleSegment(max(segment.start, start), min(segment.end, end), style)
            )
    return merge_segments([*cut_segments(segments, start, end, predicate), *inside])


def shift_segments(
    segments: Iterable[StyleSegment], delta: int, *, limit: int | None = None
) -> tuple[StyleSegment, ...]:
    """Move every segment by ``delta``, clipping to ``[0, limit]``.

    Segments that collapse to nothing after clipping are dropped.
    """

    shifted: list[StyleSegment] = []
    for segment in segments:
        start = max(0, segment.start + delta)
        end = max(0, segment.end + delta)
        if limit is not None:
            start = min(start, limit)
            end = min(end, limit)
        if start < end:
            shifted.append(segment.with_bounds(start, end))
    return tuple(shifted)


def matches_style(style: StyleValue) -> StylePredicate:
    return lambda candidate: candidate == style


def has_color(candidate: StyleValue) -> bool:
    return candidate.color is not None


def has_background(candidate: StyleValue) -> bool:
    return candidate.background_color is not None


__all__ = [
    "StylePredicate",
    "add_segment",
    "cut_segments",
    "has_background",
    "has_color",
    "matches_style",
    "merge_segments",
    "restyle_segments",
    "shift_segments",
    "sort_segments",
]
