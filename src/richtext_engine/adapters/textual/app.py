"""Executable Textual app that hosts the rich-text editing core."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use richtext_engine.adapters.textual.app"
    ) from exc

from richtext_engine.document import Block
from richtext_engine.history import DEFAULT_DEBOUNCE_MS
from richtext_engine.runtime.telemetry import env, env_int
from richtext_engine.session import EditorSession, SessionMirror
from richtext_engine.styles import StyleValue

from .controller import TextualEditorAdapter, TextualUIHooks

BLOCK_MARKERS = {
    "heading-1": ("# ", "bold underline"),
    "heading-2": ("## ", "bold"),
    "heading-3": ("### ", "bold dim"),
    "bullet-list": ("• ", ""),
    "numbered-list": ("1. ", ""),
    "blockquote": ("│ ", "italic"),
    "code": ("  ", "reverse"),
}


def create_default_session(
    text: str = "", *, debounce_ms: int = DEFAULT_DEBOUNCE_MS
) -> EditorSession:
    """Session over ``text`` with the default inline tags registered."""

    return EditorSession.from_text(text, debounce_ms=debounce_ms, name="textual")


def rich_style(style: StyleValue) -> str:
    parts = [
        name
        for name in ("bold", "italic", "underline", "strikethrough")
        if getattr(style, name)
    ]
    if style.code:
        parts.append("reverse")
    if style.color:
        parts.append(style.color)
    if style.background_color:
        parts.append(f"on {style.background_color}")
    return " ".join(parts)


def render_block(block: Block, *, caret: Optional[int] = None) -> Text:
    marker, block_style = BLOCK_MARKERS.get(block.type, ("", ""))
    line = Text(marker, style="dim")
    body = Text(block.content, style=block_style)
    for segment in block.styles:
        body.stylize(rich_style(segment.style), segment.start, segment.end)
    if caret is not None:
        if caret >= block.length:
            body.append(" ")
        body.stylize("blink reverse", caret, caret + 1)
    line.append_text(body)
    return line


def render_mirror(mirror: SessionMirror) -> Text:
    rendered = Text()
    offset = 0
    for index, block in enumerate(mirror.blocks):
        caret = None
        if offset <= mirror.cursor <= offset + block.length:
            caret = mirror.cursor - offset
        if index:
            rendered.append("\n")
        rendered.append_text(render_block(block, caret=caret))
        offset += block.length + 1
    return rendered


@dataclass
class UIState:
    status_text: str = ""
    position_text: str = ""


class RichTextEditorApp(App[None]):
    """Minimal Textual UI embedding the editing core."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str = "", debounce_ms: int = DEFAULT_DEBOUNCE_MS) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_text = text
        self._debounce_ms = debounce_ms
        self.session: EditorSession | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._document_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="document-area"):
            self._document_widget = Static("", id="document-view")
            yield self._document_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.session = create_default_session(
            self._initial_text, debounce_ms=self._debounce_ms
        )
        hooks = TextualUIHooks(
            update_document=self._update_document,
            update_status=self._update_status,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self.set_interval(0.1, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        if self.adapter.handle_textual_key(key, text=text, modifiers=modifiers):
            event.stop()

    def _update_document(self, mirror: SessionMirror) -> None:
        if self._document_widget:
            self._document_widget.update(render_mirror(mirror))
        tags = ",".join(mirror.active_tags) or "-"
        self._state.position_text = (
            f"Ln {mirror.position.line}, Col {mirror.position.column}  [{tags}]"
        )
        self._render_status()

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        self._render_status()

    def _render_status(self) -> None:
        if self._status_widget:
            self._status_widget.update(
                f"{self._state.position_text}  {self._state.status_text}".strip()
            )

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name.startswith("clipboard"):
            self._update_status(name)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key == "ctrl+q":
            return None
        parts = key.split("+") if key != "+" else [key]
        *modifiers, base = parts
        character = event.character if event.is_printable else None
        return (base, character, tuple(modifiers))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the rich-text editor Textual demo.")
    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=env_int("DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS),
        help=f"Undo batching window in milliseconds (default: {DEFAULT_DEBOUNCE_MS})",
    )
    parser.add_argument(
        "--text",
        default=env("INITIAL_TEXT", ""),
        help="Initial document text; use \\n to separate blocks",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    text = args.text.replace("\\n", "\n")
    app = RichTextEditorApp(text=text, debounce_ms=args.debounce_ms)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
