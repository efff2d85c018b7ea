from richtext_engine.commands import CommandParams
from richtext_engine.session import EditorSession
from richtext_engine.styles import StyleSegment, StyleValue


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


def make_session(text: str = "") -> tuple[EditorSession, FakeClock]:
    clock = FakeClock()
    session = EditorSession.from_text(text, debounce_ms=300, clock=clock)
    return session, clock


def test_typing_batches_into_one_undo_unit() -> None:
    session, clock = make_session()

    for char in "hey":
        session.insert_text(char)
        clock.advance(50)

    assert session.text == "hey"
    assert session.cursor == 3
    session.undo()
    assert (session.text, session.cursor) == ("", 0)


def test_rapid_pastes_stay_separately_undoable() -> None:
    session, clock = make_session()

    session.paste("one ")
    clock.advance(10)
    session.paste("two")

    assert session.text == "one two"
    session.undo()
    assert (session.text, session.cursor) == ("one ", 4)
    session.undo()
    assert (session.text, session.cursor) == ("", 0)


def test_paste_after_typing_does_not_merge_into_typing_batch() -> None:
    session, clock = make_session()

    session.insert_text("ab")
    clock.advance(10)
    session.paste("CD")
    session.undo()

    assert (session.text, session.cursor) == ("ab", 2)


def test_cut_then_undo_restores_text_and_caret() -> None:
    session, _ = make_session("hello world")
    session.select(5, 11)

    cut = session.cut()

    assert cut == " world"
    assert (session.text, session.cursor) == ("hello", 5)
    session.undo()
    assert session.text == "hello world"
    assert session.cursor == 11


def test_cut_paste_undo_sequence() -> None:
    session, clock = make_session("abc")

    session.cut(0, 1)
    clock.advance(10)
    session.paste(start=2, end=2)

    assert session.text == "bca"
    session.undo()
    assert (session.text, session.cursor) == ("bc", 0)
    session.redo()
    assert (session.text, session.cursor) == ("bca", 3)


def test_apply_command_uses_selection_and_own_undo_unit() -> None:
    session, clock = make_session("ABCDEF")
    session.insert_text("!", offset=6)
    clock.advance(10)
    session.select(0, 3)

    delta = session.apply_command("bold")

    assert delta.changed
    assert session.document.blocks[0].styles == (
        StyleSegment(0, 3, StyleValue(bold=True)),
    )
    assert session.active_tags() == ("bold",)
    session.undo()
    assert session.text == "ABCDEF!"
    assert session.document.blocks[0].styles == ()


def test_noop_command_leaves_history_untouched() -> None:
    session, _ = make_session("abc")

    delta = session.apply_command("sparkle", 0, 2)
    color = session.apply_command("textColor", 0, 2, CommandParams())

    assert not delta.changed and not color.changed
    assert not session.history.can_undo


def test_undo_clamps_cursor_to_restored_text() -> None:
    session, clock = make_session()
    session.insert_text("abcdef")
    clock.advance(400)
    session.history.push(session.document, 40)

    session.undo()
    session.redo()

    assert session.cursor == 6


def test_line_index_follows_document() -> None:
    session, _ = make_session("one\ntwo")
    session.set_cursor(5)

    first = session.line_index
    position = session.position
    session.insert_text("!")

    assert (position.line, position.column) == (2, 2)
    assert session.line_index is not first
    assert session.line_index.line_count == 2


def test_mirror_reports_renderer_state() -> None:
    session, _ = make_session("ab\ncd")
    session.select(3, 5)

    mirror = session.mirror(attributes={"theme": "dark"})

    assert mirror.text == "ab\ncd"
    assert mirror.selection == (3, 5)
    assert mirror.position.line == 2
    assert len(mirror.blocks) == 2
    assert mirror.attributes == {"theme": "dark"}
    assert not mirror.can_undo


def test_delete_backward_at_start_is_a_noop() -> None:
    session, _ = make_session("abc")

    delta = session.delete_backward()

    assert not delta.changed
    assert session.text == "abc"


def test_delete_backward_joins_touching_bold_runs() -> None:
    session, _ = make_session("AxB")
    session.apply_command("bold", 0, 1)
    session.apply_command("bold", 2, 3)
    session.set_cursor(2)

    session.delete_backward()

    assert session.text == "AB"
    assert session.document.blocks[0].styles == (
        StyleSegment(0, 2, StyleValue(bold=True)),
    )
