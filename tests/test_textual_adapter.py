from __future__ import annotations

from typing import List

from richtext_engine.adapters.textual import TextualEditorAdapter, TextualUIHooks
from richtext_engine.session import EditorSession, SessionMirror


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_session(text: str = "") -> EditorSession:
    return EditorSession.from_text(text, clock=FakeClock())


def type_text(adapter: TextualEditorAdapter, text: str) -> None:
    for char in text:
        adapter.handle_textual_key(char, text=char)


def test_adapter_pushes_document_snapshots() -> None:
    mirrors: List[SessionMirror] = []
    hooks = TextualUIHooks(update_document=mirrors.append)
    adapter = TextualEditorAdapter(make_session(), hooks)

    type_text(adapter, "hi")
    adapter.handle_textual_key("enter")
    type_text(adapter, "yo")

    assert mirrors[0].text == ""
    assert mirrors[-1].text == "hi\nyo"
    assert mirrors[-1].position.line == 2


def test_shortcut_applies_command_to_selection() -> None:
    statuses: List[str] = []
    mirrors: List[SessionMirror] = []
    hooks = TextualUIHooks(update_document=mirrors.append, update_status=statuses.append)
    session = make_session("hello")
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_textual_key("home")
    for _ in range(2):
        adapter.handle_textual_key("right", modifiers=["shift"])
    adapter.handle_textual_key("b", modifiers=["ctrl"])

    assert session.selection == (0, 2)
    assert statuses[-1] == "bold"
    assert mirrors[-1].active_tags == ("bold",)


def test_undo_redo_keys_report_status() -> None:
    statuses: List[str] = []
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_document=lambda mirror: None,
        update_status=statuses.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    session = make_session()
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_textual_key("z", modifiers=["ctrl"])
    type_text(adapter, "ab")
    adapter.handle_textual_key("z", modifiers=["ctrl"])
    adapter.handle_textual_key("y", modifiers=["ctrl"])

    assert statuses == ["undo:empty", "undo", "redo"]
    assert ("history.redo", True) in events
    assert session.text == "ab"


def test_cut_and_paste_keys_use_clipboard() -> None:
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_document=lambda mirror: None,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    session = make_session("abc")
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_textual_key("right", modifiers=["shift"])
    adapter.handle_textual_key("x", modifiers=["ctrl"])
    adapter.handle_textual_key("end")
    adapter.handle_textual_key("v", modifiers=["ctrl"])

    assert session.text == "bca"
    assert ("clipboard.cut", "a") in events


def test_unknown_keys_are_not_consumed() -> None:
    mirrors: List[SessionMirror] = []
    adapter = TextualEditorAdapter(make_session(), TextualUIHooks(update_document=mirrors.append))

    consumed = adapter.handle_textual_key("f5")

    assert consumed is False
    assert len(mirrors) == 1


def test_process_timeouts_reports_closed_batch() -> None:
    statuses: List[str] = []
    clock = FakeClock()
    session = EditorSession.from_text("", clock=clock, debounce_ms=300)
    adapter = TextualEditorAdapter(
        session, TextualUIHooks(update_document=lambda mirror: None, update_status=statuses.append)
    )

    type_text(adapter, "a")
    assert adapter.process_timeouts() is False
    clock.now = 1.0

    assert adapter.process_timeouts() is True
    assert statuses[-1] == "history:batch_closed"
