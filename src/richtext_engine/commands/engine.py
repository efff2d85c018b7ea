"""Command dispatch: the single entry point used by toolbars and shortcuts."""

from __future__ import annotations

from typing import Optional

from richtext_engine.document import BlockDocument
from richtext_engine.runtime.telemetry import record_event, span

from .defaults import load_default_commands
from .errors import CommandError
from .inline import get_tags_at_offset
from .models import CommandParams, validate_range
from .registry import CommandRegistry

_default_registry: Optional[CommandRegistry] = None


def default_registry() -> CommandRegistry:
    """Process-wide registry seeded with the built-in commands."""

    global _default_registry
    if _default_registry is None:
        _default_registry = load_default_commands(CommandRegistry())
    return _default_registry


def execute_block_command(
    doc: BlockDocument,
    command_id: str,
    start: int,
    end: int,
    params: CommandParams | None = None,
    *,
    registry: CommandRegistry | None = None,
) -> BlockDocument:
    """Apply ``command_id`` over ``[start, end)`` and return the new document.

    Malformed input (unknown command or tag, an empty or out-of-range
    selection) is a no-op that returns ``doc`` itself. A command that applies
    but changes nothing also returns ``doc``.
    """

    commands = registry if registry is not None else default_registry()
    with span(
        "commands::execute",
        component="commands",
        metadata={"command_id": command_id, "start": start, "end": end},
    ) as handle:
        try:
            command = commands.require(command_id)
            start, end = validate_range(doc, start, end)
            result = command(doc, start, end, params)
        except CommandError as exc:
            handle.add_metadata("status", "noop")
            record_event(
                "command.noop",
                level="debug",
                data={"command_id": command_id, "reason": exc.reason},
            )
            return doc
        handle.add_metadata("status", "unchanged" if result is doc else "applied")
        return result


def get_active_tags_at_range(doc: BlockDocument, start: int) -> tuple[str, ...]:
    """Toolbar state for a selection starting at ``start``."""

    return get_tags_at_offset(doc, start)


__all__ = [
    "default_registry",
    "execute_block_command",
    "get_active_tags_at_range",
    "get_tags_at_offset",
]
