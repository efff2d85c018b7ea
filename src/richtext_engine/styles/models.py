"""Value objects describing inline styles and the ranges they cover."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

_ALIASES = {"backgroundColor": "background_color"}
_FLAG_FIELDS = ("bold", "italic", "underline", "strikethrough", "code")
_COLOR_FIELDS = ("color", "background_color")


@dataclass(frozen=True, slots=True)
class StyleValue:
    """Partial style: only the fields that are set take part in rendering.

    Two values describe the same style when the same fields are set to the
    same values, which is plain dataclass equality because unset is ``None``.
    """

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    code: Optional[bool] = None
    color: Optional[str] = None
    background_color: Optional[str] = None

    def __post_init__(self) -> None:
        for name in _FLAG_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, bool):
                raise TypeError(f"{name} must be a bool, got {value!r}")
        for name in _COLOR_FIELDS:
            value = getattr(self, name)
            if value is not None and (not isinstance(value, str) or not value):
                raise ValueError(f"{name} must be a non-empty string")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StyleValue":
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown style property '{key}'")
            kwargs[name] = value
        return cls(**kwargs)

    def keys(self) -> tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name) is not None)

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.keys()}

    @property
    def is_empty(self) -> bool:
        return not self.keys()

    @property
    def has_color(self) -> bool:
        return self.color is not None

    def without_colors(self) -> "StyleValue":
        return replace(self, color=None, background_color=None)


@dataclass(frozen=True, slots=True)
class StyleSegment:
    """Half-open ``[start, end)`` range of block-local offsets with a style."""

    start: int
    end: int
    style: StyleValue

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"segment start must be >= 0, got {self.start}")
        if self.end <= self.start:
            raise ValueError(f"empty segment [{self.start}, {self.end})")

    def covers(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end

    def touches(self, other: "StyleSegment") -> bool:
        return self.end >= other.start and other.end >= self.start

    def shifted(self, delta: int) -> "StyleSegment":
        return StyleSegment(self.start + delta, self.end + delta, self.style)

    def with_bounds(self, start: int, end: int) -> "StyleSegment":
        return StyleSegment(start, end, self.style)


__all__ = ["StyleValue", "StyleSegment"]
