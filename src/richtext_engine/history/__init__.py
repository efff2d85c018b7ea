"""Undo/redo history."""

from .timeline import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_MAX_HISTORY,
    HistoryEngine,
    HistoryEntry,
    PendingTimer,
)

__all__ = [
    "DEFAULT_DEBOUNCE_MS",
    "DEFAULT_MAX_HISTORY",
    "HistoryEngine",
    "HistoryEntry",
    "PendingTimer",
]
