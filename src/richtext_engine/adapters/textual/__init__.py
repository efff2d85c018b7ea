"""Textual host adapter. The runnable demo lives in ``.app``."""

from .controller import COMMAND_SHORTCUTS, TextualEditorAdapter, TextualUIHooks

__all__ = ["COMMAND_SHORTCUTS", "TextualEditorAdapter", "TextualUIHooks"]
