"""Read-only tag -> style mapping shared by every block of a document."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional, Union

from .models import StyleValue

StyleLike = Union[StyleValue, Mapping[str, Any]]


def _coerce(tag: str, value: StyleLike) -> StyleValue:
    if not tag:
        raise ValueError("style tag cannot be empty")
    style = value if isinstance(value, StyleValue) else StyleValue.from_mapping(value)
    if style.is_empty:
        raise ValueError(f"style for tag '{tag}' sets no properties")
    return style


class StyleDefinitionTable(Mapping[str, StyleValue]):
    """Immutable mapping from a symbolic tag (``"bold"``) to its style value.

    Lookups in both directions are supported: ``table["bold"]`` and
    ``table.tags_for(StyleValue(bold=True))``.
    """

    __slots__ = ("_styles",)

    def __init__(self, definitions: Optional[Mapping[str, StyleLike]] = None) -> None:
        self._styles: dict[str, StyleValue] = {
            tag: _coerce(tag, value) for tag, value in (definitions or {}).items()
        }

    def __getitem__(self, tag: str) -> StyleValue:
        return self._styles[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._styles)

    def __len__(self) -> int:
        return len(self._styles)

    def __hash__(self) -> int:
        return hash(frozenset(self._styles.items()))

    def __repr__(self) -> str:
        return f"StyleDefinitionTable({self._styles!r})"

    def lookup(self, tag: str) -> Optional[StyleValue]:
        return self._styles.get(tag)

    def tags_for(self, style: StyleValue) -> tuple[str, ...]:
        return tuple(tag for tag, value in self._styles.items() if value == style)

    def extended(self, definitions: Mapping[str, StyleLike]) -> "StyleDefinitionTable":
        """Return a new table with ``definitions`` layered over this one."""

        merged: dict[str, StyleLike] = dict(self._styles)
        merged.update(definitions)
        return StyleDefinitionTable(merged)


DEFAULT_STYLE_DEFINITIONS = StyleDefinitionTable(
    {
        "bold": StyleValue(bold=True),
        "italic": StyleValue(italic=True),
        "underline": StyleValue(underline=True),
        "strikethrough": StyleValue(strikethrough=True),
        "code": StyleValue(code=True),
    }
)

EMPTY_STYLE_DEFINITIONS = StyleDefinitionTable()


__all__ = [
    "DEFAULT_STYLE_DEFINITIONS",
    "EMPTY_STYLE_DEFINITIONS",
    "StyleDefinitionTable",
    "StyleLike",
]
