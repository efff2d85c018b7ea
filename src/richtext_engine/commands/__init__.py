"""Formatting commands: inline toggles, colours and block types."""

from .block import (
    block_index_range,
    set_block_type,
    toggle_blockquote,
    toggle_bullet_list,
    toggle_heading,
    toggle_numbered_list,
)
from .defaults import DEFAULT_COMMANDS, load_default_commands
from .engine import (
    default_registry,
    execute_block_command,
    get_active_tags_at_range,
)
from .errors import (
    CommandError,
    InvalidRangeError,
    UnknownCommandError,
    UnknownTagError,
)
from .inline import (
    apply_color,
    get_tags_at_offset,
    remove_color,
    toggle_tag,
)
from .models import CommandParams, CommandRef, validate_range
from .registry import CommandRegistry, RegistryStats

__all__ = [
    "CommandError",
    "CommandParams",
    "CommandRef",
    "CommandRegistry",
    "DEFAULT_COMMANDS",
    "InvalidRangeError",
    "RegistryStats",
    "UnknownCommandError",
    "UnknownTagError",
    "apply_color",
    "block_index_range",
    "default_registry",
    "execute_block_command",
    "get_active_tags_at_range",
    "get_tags_at_offset",
    "load_default_commands",
    "remove_color",
    "set_block_type",
    "toggle_blockquote",
    "toggle_bullet_list",
    "toggle_heading",
    "toggle_numbered_list",
    "toggle_tag",
    "validate_range",
]
