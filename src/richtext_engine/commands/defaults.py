"""Built-in command table covering the toolbar vocabulary."""

from __future__ import annotations

from functools import partial
from typing import Iterable, Sequence

from . import block as block_commands
from . import inline as inline_commands
from .models import CommandRef
from .registry import CommandRegistry

INLINE_TAGS: tuple[str, ...] = ("bold", "italic", "underline", "strikethrough", "code")

BLOCK_COMMANDS: tuple[tuple[str, str], ...] = (
    ("heading-1", "Toggle heading level 1"),
    ("heading-2", "Toggle heading level 2"),
    ("heading-3", "Toggle heading level 3"),
    ("bullet-list", "Toggle bulleted list"),
    ("numbered-list", "Toggle numbered list"),
    ("blockquote", "Toggle block quote"),
)

DEFAULT_COMMANDS: tuple[CommandRef, ...] = (
    *(
        CommandRef(
            id=tag,
            handler=partial(inline_commands.toggle_tag_command, tag=tag),
            kind="inline",
            tag=tag,
            description=f"Toggle {tag}",
        )
        for tag in INLINE_TAGS
    ),
    CommandRef(
        id="textColor",
        handler=inline_commands.text_color_command,
        kind="color",
        description="Apply text or background colour",
    ),
    CommandRef(
        id="removeColor",
        handler=inline_commands.remove_color_command,
        kind="color",
        description="Strip text colour",
    ),
    *(
        CommandRef(
            id=block_type,
            handler=partial(block_commands.set_block_type_command, block_type=block_type),
            kind="block",
            description=description,
        )
        for block_type, description in BLOCK_COMMANDS
    ),
)


def load_default_commands(
    registry: CommandRegistry,
    *,
    replace: bool = False,
    extra_commands: Iterable[CommandRef] | None = None,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> CommandRegistry:
    """Register the built-in commands, optionally filtered by id."""

    filters = _build_filters(include, exclude)
    for command in DEFAULT_COMMANDS:
        if not _selected(command.id, filters):
            continue
        registry.register(command, replace=replace)

    if extra_commands:
        for command in extra_commands:
            registry.register(command, replace=replace)
    return registry


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = ["BLOCK_COMMANDS", "DEFAULT_COMMANDS", "INLINE_TAGS", "load_default_commands"]
