"""Command registry mapping command ids to handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from richtext_engine.runtime.telemetry import span

from .errors import UnknownCommandError
from .models import CommandKind, CommandRef


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    command_count: int
    kinds: tuple[str, ...]
    tags: tuple[str, ...]


class CommandRegistry:
    """Owns the id -> ``CommandRef`` table consulted by the engine."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, CommandRef] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def get(self, command_id: str) -> Optional[CommandRef]:
        return self._commands.get(command_id)

    def require(self, command_id: str) -> CommandRef:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise UnknownCommandError(command_id) from exc

    def register(self, command: CommandRef, *, replace: bool = False) -> CommandRef:
        with span(
            "commands::register",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command.id, "kind": command.kind},
        ):
            if not replace and command.id in self._commands:
                raise ValueError(f"Command '{command.id}' already registered")
            self._commands[command.id] = command
            self._revision += 1
            return command

    def unregister(self, command_id: str) -> Optional[CommandRef]:
        with span(
            "commands::unregister",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command_id},
        ):
            command = self._commands.pop(command_id, None)
            if command is not None:
                self._revision += 1
            return command

    def iter_commands(self, kind: Optional[CommandKind] = None) -> Iterator[CommandRef]:
        for command in self._commands.values():
            if kind is None or command.kind == kind:
                yield command

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            kinds=tuple(sorted({command.kind for command in self._commands.values()})),
            tags=tuple(
                sorted(
                    command.tag
                    for command in self._commands.values()
                    if command.tag is not None
                )
            ),
        )


__all__ = ["CommandRegistry", "RegistryStats"]
