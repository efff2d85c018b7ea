"""Undo/redo timeline with debounced batching.

Rapid pushes collapse into one undo unit: the first push of a batch records
the current present as an undo point and arms a deadline, and every push
before that deadline only swaps the present. The deadline is a plain
monotonic timestamp checked whenever the engine is touched, so no callback
ever runs behind the caller's back and the timer can only close a batch.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from richtext_engine.runtime.telemetry import record_event

T = TypeVar("T")

DEFAULT_DEBOUNCE_MS = 300
DEFAULT_MAX_HISTORY = 100


@dataclass(frozen=True)
class HistoryEntry(Generic[T]):
    state: T
    cursor_offset: int


@dataclass(frozen=True, slots=True)
class PendingTimer:
    deadline: float
    debounce_ms: int
    generation: int


class HistoryEngine(Generic[T]):
    """Past/present/future stacks of ``(state, cursor_offset)`` entries."""

    def __init__(
        self,
        initial_state: T,
        initial_cursor: int = 0,
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        max_history: int = DEFAULT_MAX_HISTORY,
        clock: Callable[[], float] = time.monotonic,
        logger_name: str | None = None,
    ) -> None:
        if debounce_ms < 0:
            raise ValueError("debounce_ms cannot be negative")
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self.debounce_ms = debounce_ms
        self.max_history = max_history
        self._clock = clock
        self._logger_name = logger_name
        self._past: list[HistoryEntry[T]] = []
        self._present: HistoryEntry[T] = HistoryEntry(initial_state, initial_cursor)
        self._future: list[HistoryEntry[T]] = []
        self._pending_timer: Optional[PendingTimer] = None
        self._batch_open = False
        self._timer_counter = 0

    # ------------------------------------------------------------------ state
    @property
    def present(self) -> HistoryEntry[T]:
        return self._present

    @property
    def current(self) -> T:
        return self._present.state

    @property
    def cursor_offset(self) -> int:
        return self._present.cursor_offset

    @property
    def past(self) -> tuple[HistoryEntry[T], ...]:
        return tuple(self._past)

    @property
    def future(self) -> tuple[HistoryEntry[T], ...]:
        return tuple(self._future)

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def batch_open(self) -> bool:
        self.process_timeouts()
        return self._batch_open

    # ----------------------------------------------------------------- timers
    def _arm_timer(self) -> None:
        self._timer_counter += 1
        self._pending_timer = PendingTimer(
            deadline=self._clock() + self.debounce_ms / 1000.0,
            debounce_ms=self.debounce_ms,
            generation=self._timer_counter,
        )

    def _cancel_timer(self) -> None:
        self._pending_timer = None

    def process_timeouts(self) -> bool:
        """Close the open batch if its deadline has passed. Returns ``True`` if it did."""

        timer = self._pending_timer
        if timer is None or timer.deadline > self._clock():
            return False
        self._pending_timer = None
        self._batch_open = False
        record_event(
            "history.batch_closed",
            level="debug",
            data={"generation": timer.generation, "reason": "timeout"},
            logger_name=self._logger_name,
        )
        return True

    # ------------------------------------------------------------- operations
    def push(
        self, state: T, cursor_offset: int, *, cursor_before: int | None = None
    ) -> None:
        """Install ``state`` as the present, opening a batch if none is open.

        ``cursor_before`` replaces the caret stored in the undo point created
        when a batch opens; it is ignored while a batch is already open.
        """

        self.process_timeouts()
        if not self._batch_open:
            undo_point = self._present
            if cursor_before is not None:
                undo_point = HistoryEntry(undo_point.state, cursor_before)
            self._past.append(undo_point)
            self._trim_past()
            self._batch_open = True
            record_event(
                "history.batch_opened",
                level="debug",
                data={"past": len(self._past)},
                logger_name=self._logger_name,
            )
        self._arm_timer()
        self._present = HistoryEntry(state, cursor_offset)
        self._future.clear()

    def flush(self) -> None:
        """Close the open batch now; the next push starts a new undo unit."""

        self._cancel_timer()
        self._batch_open = False

    def undo(self) -> Optional[HistoryEntry[T]]:
        self.flush()
        if not self._past:
            return None
        self._future.insert(0, self._present)
        self._present = self._past.pop()
        record_event(
            "history.undo",
            level="debug",
            data={"past": len(self._past), "future": len(self._future)},
            logger_name=self._logger_name,
        )
        return self._present

    def redo(self) -> Optional[HistoryEntry[T]]:
        self.flush()
        if not self._future:
            return None
        self._past.append(self._present)
        self._trim_past()
        self._present = self._future.pop(0)
        record_event(
            "history.redo",
            level="debug",
            data={"past": len(self._past), "future": len(self._future)},
            logger_name=self._logger_name,
        )
        return self._present

    def reset(self, state: T, cursor_offset: int = 0) -> None:
        self.flush()
        self._past.clear()
        self._future.clear()
        self._present = HistoryEntry(state, cursor_offset)

    def replace(self, state: T, cursor_offset: int) -> None:
        """Swap the present without recording an undo point."""

        self._present = HistoryEntry(state, cursor_offset)

    def _trim_past(self) -> None:
        overflow = len(self._past) - self.max_history
        if overflow > 0:
            del self._past[:overflow]


__all__ = [
    "DEFAULT_DEBOUNCE_MS",
    "DEFAULT_MAX_HISTORY",
    "HistoryEngine",
    "HistoryEntry",
    "PendingTimer",
]
