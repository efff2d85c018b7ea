"""Editor session tying the document, the caret and the history together."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import Any, ContextManager, Mapping, Optional

from richtext_engine.commands import (
    CommandParams,
    CommandRegistry,
    execute_block_command,
    get_active_tags_at_range,
)
from richtext_engine.document import Block, BlockDocument, replace_range, text_in_range
from richtext_engine.history import DEFAULT_DEBOUNCE_MS, DEFAULT_MAX_HISTORY, HistoryEngine
from richtext_engine.history.timeline import HistoryEntry
from richtext_engine.runtime import telemetry
from richtext_engine.styles.table import StyleLike
from richtext_engine.text import CursorPosition, LineIndex, LineIndexCache

CLIPBOARD_INPUT_TYPES = frozenset(
    {"insertFromPaste", "insertFromPasteAsQuotation", "deleteByCut"}
)

Selection = tuple[int, int]


@dataclass(slots=True)
class EditDelta:
    version: int
    text: str
    cursor: int
    label: str
    changed: bool


@dataclass(slots=True)
class SessionMirror:
    """Host-friendly snapshot of what a renderer needs to draw."""

    text: str
    cursor: int
    position: CursorPosition
    selection: Optional[Selection]
    blocks: tuple[Block, ...]
    active_tags: tuple[str, ...]
    can_undo: bool
    can_redo: bool
    attributes: dict[str, str] = field(default_factory=dict)


class EditorSession:
    def __init__(
        self,
        document: Optional[BlockDocument] = None,
        *,
        name: str = "default",
        cursor: int = 0,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        max_history: int = DEFAULT_MAX_HISTORY,
        clock: Any = None,
        registry: Optional[CommandRegistry] = None,
        logger_name: str | None = None,
    ) -> None:
        document = document or BlockDocument()
        history_kwargs: dict[str, Any] = {
            "debounce_ms": debounce_ms,
            "max_history": max_history,
            "logger_name": logger_name,
        }
        if clock is not None:
            history_kwargs["clock"] = clock
        self.name = name
        self.registry = registry
        self.history: HistoryEngine[BlockDocument] = HistoryEngine(
            document, _clamp(cursor, document.length), **history_kwargs
        )
        self.selection: Optional[Selection] = None
        self.clipboard = ""
        self._cursor = self.history.cursor_offset
        self._line_cache = LineIndexCache()

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        style_definitions: Optional[Mapping[str, StyleLike]] = None,
        **kwargs: Any,
    ) -> "EditorSession":
        """Session over ``text`` using the default tags unless others are given."""

        if style_definitions is None:
            document = BlockDocument.with_default_styles(text)
        else:
            document = BlockDocument.from_text(text, style_definitions)
        return cls(document, **kwargs)

    # ------------------------------------------------------------------ state
    @property
    def document(self) -> BlockDocument:
        return self.history.current

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def line_index(self) -> LineIndex:
        return self._line_cache.get(self.document.text)

    @property
    def position(self) -> CursorPosition:
        return self.line_index.offset_to_line_column(self._cursor)

    def set_cursor(self, offset: int) -> int:
        self._cursor = _clamp(offset, self.document.length)
        self.selection = None
        return self._cursor

    def select(self, anchor: int, focus: int) -> Selection:
        """Select between ``anchor`` and ``focus``; the caret follows ``focus``."""

        length = self.document.length
        anchor, focus = _clamp(anchor, length), _clamp(focus, length)
        self._cursor = focus
        self.selection = (min(anchor, focus), max(anchor, focus))
        return self.selection

    def copy(self) -> str:
        if self.selection is None:
            return ""
        self.clipboard = text_in_range(self.document, *self.selection)
        return self.clipboard

    def clear_selection(self) -> None:
        self.selection = None

    def active_tags(self) -> tuple[str, ...]:
        start = self.selection[0] if self.selection else self._cursor
        return get_active_tags_at_range(self.document, start)

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> SessionMirror:
        return SessionMirror(
            text=self.document.text,
            cursor=self._cursor,
            position=self.position,
            selection=self.selection,
            blocks=self.document.blocks,
            active_tags=self.active_tags(),
            can_undo=self.history.can_undo,
            can_redo=self.history.can_redo,
            attributes=dict(attributes or {}),
        )

    # -------------------------------------------------------------- text edits
    def edit(
        self, start: int, end: int, text: str, *, input_type: str = "insertText"
    ) -> EditDelta:
        """Replace ``[start, end)`` with ``text`` and record it in the history.

        Clipboard input types always start a fresh undo unit.
        """

        with Transaction(self, input_type) as tx:
            before = self.document
            cursor_before = self._cursor
            updated = replace_range(before, start, end, text)
            cursor = _clamp(max(0, start) + len(text), updated.length)
            self.selection = None
            if updated is before:
                self._cursor = _clamp(cursor, before.length)
                return self._delta(input_type, changed=False)
            if input_type in CLIPBOARD_INPUT_TYPES:
                self.history.flush()
            self.history.push(updated, cursor, cursor_before=cursor_before)
            self._cursor = cursor
            tx.commit(before, updated, cursor_before, cursor)
        return self._delta(input_type, changed=True)

    def insert_text(self, text: str, *, offset: Optional[int] = None) -> EditDelta:
        if offset is None and self.selection is not None:
            start, end = self.selection
            return self.edit(start, end, text)
        position = self._cursor if offset is None else offset
        return self.edit(position, position, text)

    def delete_range(self, start: int, end: int) -> EditDelta:
        return self.edit(start, end, "", input_type="deleteContent")

    def delete_backward(self) -> EditDelta:
        if self.selection is not None:
            start, end = self.selection
            return self.edit(start, end, "", input_type="deleteContentBackward")
        return self.edit(
            self._cursor - 1, self._cursor, "", input_type="deleteContentBackward"
        )

    def delete_forward(self) -> EditDelta:
        if self.selection is not None:
            start, end = self.selection
            return self.edit(start, end, "", input_type="deleteContentForward")
        return self.edit(
            self._cursor, self._cursor + 1, "", input_type="deleteContentForward"
        )

    def cut(self, start: Optional[int] = None, end: Optional[int] = None) -> str:
        """Delete the range (the selection by default) into the clipboard."""

        start, end = self._range_or_selection(start, end)
        if start >= end:
            return ""
        self.clipboard = text_in_range(self.document, start, end)
        self.edit(start, end, "", input_type="deleteByCut")
        return self.clipboard

    def paste(
        self,
        text: Optional[str] = None,
        *,
        start: Optional[int] = None,
        end: Optional[int] = None,
        input_type: str = "insertFromPaste",
    ) -> EditDelta:
        payload = self.clipboard if text is None else text
        start, end = self._range_or_selection(start, end)
        return self.edit(start, end, payload, input_type=input_type)

    # --------------------------------------------------------------- commands
    def apply_command(
        self,
        command_id: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
        params: Optional[CommandParams] = None,
    ) -> EditDelta:
        start, end = self._range_or_selection(start, end)
        with Transaction(self, f"command:{command_id}") as tx:
            before = self.document
            updated = execute_block_command(
                before, command_id, start, end, params, registry=self.registry
            )
            if updated is before:
                return self._delta(command_id, changed=False)
            self.history.flush()
            self.history.push(updated, self._cursor, cursor_before=self._cursor)
            tx.commit(before, updated, self._cursor, self._cursor)
        return self._delta(command_id, changed=True)

    # ---------------------------------------------------------------- history
    def undo(self) -> Optional[HistoryEntry[BlockDocument]]:
        entry = self.history.undo()
        if entry is not None:
            self._restore(entry)
        return entry

    def redo(self) -> Optional[HistoryEntry[BlockDocument]]:
        entry = self.history.redo()
        if entry is not None:
            self._restore(entry)
        return entry

    # ---------------------------------------------------------------- helpers
    def _restore(self, entry: HistoryEntry[BlockDocument]) -> None:
        self.selection = None
        self._cursor = _clamp(entry.cursor_offset, entry.state.length)

    def _range_or_selection(
        self, start: Optional[int], end: Optional[int]
    ) -> Selection:
        if start is None and end is None:
            if self.selection is not None:
                return self.selection
            return self._cursor, self._cursor
        if start is None:
            start = self._cursor
        if end is None:
            end = start
        return start, end

    def _delta(self, label: str, *, changed: bool) -> EditDelta:
        document = self.document
        return EditDelta(
            version=document.version,
            text=document.text,
            cursor=self._cursor,
            label=label,
            changed=changed,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span wrapped around one session mutation."""

    def __init__(self, session: EditorSession, label: str) -> None:
        self.session = session
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"session::{self.label}",
            component=True,
            metadata={"session": self.session.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def commit(
        self,
        before: BlockDocument,
        after: BlockDocument,
        cursor_before: int,
        cursor_after: int,
    ) -> None:
        if self._handle is None:
            return
        self._handle.add_metadata("version_before", before.version)
        for key, value in telemetry.describe_document(after).items():
            self._handle.add_metadata(key, value)
        self._handle.add_metadata("cursor", f"{cursor_before}->{cursor_after}")

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _clamp(offset: int, length: int) -> int:
    return max(0, min(offset, length))


__all__ = [
    "CLIPBOARD_INPUT_TYPES",
    "EditDelta",
    "EditorSession",
    "SessionMirror",
    "Transaction",
]
