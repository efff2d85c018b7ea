"""UI-agnostic editing core for block-based rich text."""

__all__ = [
    "adapters",
    "commands",
    "document",
    "history",
    "runtime",
    "session",
    "styles",
    "text",
]

__version__ = "0.1.0"
