"""Dataclasses describing commands and their parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal, Mapping, Optional, Protocol

from .errors import InvalidRangeError

if TYPE_CHECKING:
    from richtext_engine.document import BlockDocument

CommandKind = Literal["inline", "color", "block"]


@dataclass(frozen=True, slots=True)
class CommandParams:
    """Extra data for parameterised commands such as ``textColor``."""

    color: Optional[str] = None
    background_color: Optional[str] = None


class CommandHandler(Protocol):
    def __call__(
        self,
        doc: "BlockDocument",
        start: int,
        end: int,
        params: CommandParams,
    ) -> "BlockDocument": ...


@dataclass(frozen=True, slots=True)
class CommandRef:
    """A named command plus the handler that applies it."""

    id: str
    handler: CommandHandler
    kind: CommandKind = "inline"
    tag: str | None = None
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("CommandRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if self.kind == "inline" and not self.tag:
            raise ValueError(f"inline command '{self.id}' needs a tag")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(
        self,
        doc: "BlockDocument",
        start: int,
        end: int,
        params: CommandParams | None = None,
    ) -> "BlockDocument":
        return self.handler(doc, start, end, params or CommandParams())


def validate_range(doc: "BlockDocument", start: int, end: int) -> tuple[int, int]:
    """Reject an empty or reversed range, a negative start, or a start past the end.

    An ``end`` beyond the document is passed through; handlers clip it.
    """

    length = doc.length
    if start < 0 or start >= end or start > length:
        raise InvalidRangeError(start, end, length=length)
    return start, end


__all__ = [
    "CommandHandler",
    "CommandKind",
    "CommandParams",
    "CommandRef",
    "validate_range",
]
