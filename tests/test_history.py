import pytest

from richtext_engine.history import HistoryEngine


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


def make_history(
    *, debounce_ms: int = 300, max_history: int = 100
) -> tuple[HistoryEngine[str], FakeClock]:
    clock = FakeClock()
    history: HistoryEngine[str] = HistoryEngine(
        "", 0, debounce_ms=debounce_ms, max_history=max_history, clock=clock
    )
    return history, clock


def test_rapid_pushes_collapse_into_one_undo_unit() -> None:
    history, clock = make_history()

    history.push("A", 1)
    clock.advance(100)
    history.push("AB", 2)

    assert len(history.past) == 1
    entry = history.undo()
    assert entry is not None
    assert (entry.state, entry.cursor_offset) == ("", 0)
    assert (history.current, history.cursor_offset) == ("", 0)


def test_spaced_pushes_create_separate_entries() -> None:
    history, clock = make_history()

    for index, text in enumerate(["a", "ab", "abc", "abcd"], start=1):
        history.push(text, index)
        clock.advance(301)

    assert len(history.past) == 4


def test_batch_window_rearms_on_each_push() -> None:
    history, clock = make_history()

    for text in ["a", "ab", "abc", "abcd"]:
        history.push(text, len(text))
        clock.advance(250)

    assert len(history.past) == 1
    assert history.batch_open is True
    clock.advance(100)
    assert history.batch_open is False


def test_undo_then_redo_restores_collapsed_batch() -> None:
    history, clock = make_history()

    history.push("s1", 1)
    clock.advance(50)
    history.push("s2", 2)
    history.undo()
    entry = history.redo()

    assert entry is not None
    assert (entry.state, entry.cursor_offset) == ("s2", 2)
    assert history.can_undo and not history.can_redo


def test_undo_flushes_so_next_push_starts_new_batch() -> None:
    history, clock = make_history()

    history.push("a", 1)
    clock.advance(301)
    history.push("ab", 2)
    history.undo()
    history.push("ax", 2)

    assert [entry.state for entry in history.past] == ["", "a"]
    assert history.future == ()


def test_flush_closes_batch_without_touching_state() -> None:
    history, _ = make_history()

    history.push("a", 1)
    history.flush()
    assert (history.current, len(history.past), history.batch_open) == ("a", 1, False)

    history.push("ab", 2)
    assert len(history.past) == 2


def test_timeout_only_closes_the_batch() -> None:
    history, clock = make_history()

    history.push("a", 1)
    clock.advance(299)
    assert history.process_timeouts() is False
    clock.advance(2)
    assert history.process_timeouts() is True

    assert history.current == "a"
    assert len(history.past) == 1


def test_push_clears_future() -> None:
    history, _ = make_history(debounce_ms=0)

    history.push("a", 1)
    history.push("ab", 2)
    history.undo()
    assert history.can_redo

    history.push("ac", 2)
    assert not history.can_redo


def test_past_is_bounded_by_max_history() -> None:
    history, clock = make_history(max_history=10)

    for index in range(15):
        history.push(f"state-{index}", index)
        clock.advance(400)

    assert len(history.past) == 10
    assert history.past[0].state == "state-4"


def test_cursor_before_overrides_undo_point_caret() -> None:
    history, clock = make_history()

    history.push("hello", 5)
    clock.advance(500)
    history.push("hello!", 6, cursor_before=3)
    clock.advance(10)
    history.push("hello!!", 7, cursor_before=99)

    entry = history.undo()
    assert entry is not None
    assert (entry.state, entry.cursor_offset) == ("hello", 3)


def test_empty_undo_and_redo_return_none() -> None:
    history, _ = make_history()

    assert history.undo() is None
    assert history.redo() is None


def test_reset_and_replace() -> None:
    history, _ = make_history()
    history.push("a", 1)

    history.replace("b", 1)
    assert (history.current, len(history.past)) == ("b", 1)

    history.reset("fresh", 2)
    assert (history.current, history.cursor_offset) == ("fresh", 2)
    assert not history.can_undo and not history.can_redo


def test_invalid_configuration_raises() -> None:
    with pytest.raises(ValueError):
        HistoryEngine("", debounce_ms=-1)
    with pytest.raises(ValueError):
        HistoryEngine("", max_history=0)
