"""Command failure taxonomy.

These never escape ``execute_block_command``: the engine turns them into a
no-op that hands back the unchanged document. They are raised by the
validation helpers so the reason can be logged and asserted in tests.
"""

from __future__ import annotations


class CommandError(ValueError):
    """Base class for malformed command input."""

    reason = "command_error"


class InvalidRangeError(CommandError):
    reason = "invalid_range"

    def __init__(self, start: int, end: int, *, length: int | None = None) -> None:
        detail = f"[{start}, {end})"
        if length is not None:
            detail += f" for document length {length}"
        super().__init__(f"Invalid range {detail}")
        self.start = start
        self.end = end
        self.length = length


class UnknownCommandError(CommandError):
    reason = "unknown_command"

    def __init__(self, command_id: str) -> None:
        super().__init__(f"Command '{command_id}' is not registered")
        self.command_id = command_id


class UnknownTagError(CommandError):
    reason = "unknown_tag"

    def __init__(self, tag: str) -> None:
        super().__init__(f"Tag '{tag}' has no style definition")
        self.tag = tag


__all__ = [
    "CommandError",
    "InvalidRangeError",
    "UnknownCommandError",
    "UnknownTagError",
]
