"""Minimal Textual adapter that wires an EditorSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from richtext_engine.session import EditorSession, SessionMirror


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


COMMAND_SHORTCUTS: Dict[str, str] = {
    "ctrl+b": "bold",
    "ctrl+i": "italic",
    "ctrl+u": "underline",
    "ctrl+s": "strikethrough",
    "ctrl+e": "code",
    "ctrl+1": "heading-1",
    "ctrl+2": "heading-2",
    "ctrl+3": "heading-3",
    "ctrl+l": "bullet-list",
    "ctrl+o": "numbered-list",
    "ctrl+r": "blockquote",
}


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[SessionMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Translates host key events into session edits and pushes snapshots back."""

    def __init__(
        self,
        session: EditorSession,
        hooks: TextualUIHooks,
        *,
        shortcuts: Optional[Dict[str, str]] = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.shortcuts = dict(COMMAND_SHORTCUTS if shortcuts is None else shortcuts)
        self._anchor: Optional[int] = None
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Dispatch one key event. Returns ``True`` when the key was consumed."""

        mods = tuple(str(mod).lower() for mod in modifiers)
        combo = "+".join((*mods, key.lower()))
        self._log_state("key ->", combo=combo, text=text)

        consumed = self._dispatch(combo, key.upper(), text, shift="shift" in mods)
        if consumed:
            self._refresh()
        return consumed

    def process_timeouts(self) -> bool:
        """Close an expired history batch and tell the UI about it."""

        closed = self.session.history.process_timeouts()
        if closed:
            self.hooks.update_status("history:batch_closed")
            self._log_state("timeout ->")
        return closed

    def _dispatch(self, combo: str, key: str, text: Optional[str], *, shift: bool) -> bool:
        session = self.session
        command_id = self.shortcuts.get(combo)
        if command_id is not None:
            delta = session.apply_command(command_id)
            status = command_id if delta.changed else f"{command_id}:noop"
            self.hooks.update_status(status)
            self._emit("command", {"id": command_id, "changed": delta.changed})
            return True
        if combo == "ctrl+z":
            self._history_step("undo", session.undo() is not None)
            return True
        if combo in {"ctrl+y", "ctrl+shift+z"}:
            self._history_step("redo", session.redo() is not None)
            return True
        if combo == "ctrl+x":
            cut = session.cut()
            self._anchor = None
            self._emit("clipboard.cut", cut)
            return True
        if combo == "ctrl+v":
            session.paste()
            self._anchor = None
            self._emit("clipboard.paste", session.clipboard)
            return True
        if key in {"LEFT", "RIGHT", "HOME", "END"}:
            self._move(key, extend=shift)
            return True
        if key == "BACKSPACE":
            session.delete_backward()
        elif key == "DELETE":
            session.delete_forward()
        elif key == "ENTER":
            session.insert_text("\n")
        elif text and len(text) == 1 and text.isprintable():
            session.insert_text(text)
        else:
            return False
        self._anchor = None
        return True

    def _move(self, key: str, *, extend: bool) -> None:
        session = self.session
        location = session.document.locate(session.cursor)
        if key == "LEFT":
            target = session.cursor - 1
        elif key == "RIGHT":
            target = session.cursor + 1
        elif key == "HOME":
            target = session.cursor - location.local_offset
        else:
            target = session.cursor - location.local_offset + location.block.length
        if extend:
            if self._anchor is None:
                self._anchor = session.cursor
            session.select(self._anchor, target)
        else:
            self._anchor = None
            session.set_cursor(target)

    def _history_step(self, name: str, applied: bool) -> None:
        self._anchor = None
        self.hooks.update_status(name if applied else f"{name}:empty")
        self._emit(f"history.{name}", applied)

    def _emit(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh(self) -> None:
        self.hooks.update_document(self.session.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "cursor": session.cursor,
            "selection": session.selection,
            "version": session.document.version,
            "past": len(session.history.past),
            "future": len(session.history.future),
        }


__all__ = ["COMMAND_SHORTCUTS", "TextualEditorAdapter", "TextualUIHooks"]
