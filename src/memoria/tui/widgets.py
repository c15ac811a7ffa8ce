"""Word canvases: wrapped token text with per-word mouse hit testing.

Textual has no inline flow layout, so tokens are wrapped into lines here and
every word remembers the cells it occupies. Mouse events are mapped back to
word indices and posted as messages; the app turns them into actions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from rich.cells import cell_len
from rich.text import Text
from textual import events
from textual.geometry import Size
from textual.message import Message
from textual.widget import Widget

from memoria.core.tokens import NO_INDEX, Token, Word
from memoria.tui.state import AppState


@dataclass(frozen=True)
class Segment:
    text: str
    x: int
    token: Token

    @property
    def index(self) -> int:
        return self.token.index


Line = list[Segment]


def layout(
    tokens: tuple[Token, ...],
    width: int,
    display: Callable[[Token], str] = lambda t: t.text,
) -> list[Line]:
    """Greedy word wrap. Spaces at the start of a line are dropped."""
    width = max(width, 1)
    lines: list[Line] = [[]]
    x = 0

    for token in tokens:
        if token.is_paragraph_break:
            lines.append([])
            lines.append([])
            x = 0
            continue
        if token.is_line_break:
            lines.append([])
            x = 0
            continue

        text = display(token)
        if token.kind == "space":
            if x == 0:
                continue
            text = " "

        size = cell_len(text)
        if x > 0 and x + size > width and token.kind != "space":
            lines.append([])
            x = 0

        # A word wider than the canvas is split across lines.
        for n, piece in enumerate(_split_cells(text, width)):
            if n:
                lines.append([])
                x = 0
            lines[-1].append(Segment(text=piece, x=x, token=token))
            x += cell_len(piece)

    return lines


def _split_cells(text: str, width: int) -> list[str]:
    """Cut text into pieces of at most `width` cells."""
    if cell_len(text) <= width:
        return [text]
    pieces = []
    piece = ""
    for ch in text:
        if piece and cell_len(piece + ch) > width:
            pieces.append(piece)
            piece = ""
        piece += ch
    pieces.append(piece)
    return pieces


def hit_test(lines: list[Line], x: int, y: int) -> int:
    """Word index under a cell, or NO_INDEX."""
    if not 0 <= y < len(lines):
        return NO_INDEX
    for seg in lines[y]:
        if seg.x <= x < seg.x + cell_len(seg.text):
            return seg.index
    return NO_INDEX


class TokenCanvas(Widget):
    """Renders the state's tokens; subclasses decide styles and gestures."""

    DEFAULT_CSS = """
    TokenCanvas {
        height: auto;
        padding: 1 2;
    }
    """

    def __init__(self, state: AppState, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state = state
        self._lines: list[Line] = []

    def display_text(self, token: Token) -> str:
        return token.text

    def style_for(self, token: Token) -> str:
        return ""

    def _layout(self, width: int) -> list[Line]:
        return layout(self._state.tokens, width, self.display_text)

    def get_content_height(self, container: Size, viewport: Size, width: int) -> int:
        return max(len(self._layout(width)), 1)

    def render(self) -> Text:
        self._lines = self._layout(self.content_size.width)
        text = Text(no_wrap=True, overflow="crop")
        for n, line in enumerate(self._lines):
            if n:
                text.append("\n")
            for seg in line:
                text.append(seg.text, style=self.style_for(seg.token))
        return text

    def index_at(self, event: events.MouseEvent) -> int:
        offset = event.get_content_offset(self)
        if offset is None:
            return NO_INDEX
        return hit_test(self._lines, offset.x, offset.y)


class SelectionCanvas(TokenCanvas):
    """Selection editor surface: click toggles a word, drag paints a range."""

    class PointerDown(Message):
        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    class PointerEnter(Message):
        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    class PointerUp(Message):
        pass

    def __init__(self, state: AppState, **kwargs) -> None:
        super().__init__(state, **kwargs)
        self._hover: Optional[int] = None

    def style_for(self, token: Token) -> str:
        if not isinstance(token, Word):
            return ""
        if token.index in self._state.editor.temp_indices:
            return "black on #c6f6d5"
        if token.selected:
            return "black on #68d391"
        return "underline"

    def on_mouse_down(self, event: events.MouseDown) -> None:
        index = self.index_at(event)
        if index == NO_INDEX:
            return
        self._hover = index
        self.capture_mouse()
        self.post_message(self.PointerDown(index))

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if not self._state.editor.dragging:
            return
        index = self.index_at(event)
        if index == NO_INDEX or index == self._hover:
            return
        self._hover = index
        self.post_message(self.PointerEnter(index))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        self._hover = None
        self.release_mouse()
        self.post_message(self.PointerUp())


class PracticeCanvas(TokenCanvas):
    """Memorization surface: hidden words are masked; a click flips one."""

    class WordClicked(Message):
        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    def display_text(self, token: Token) -> str:
        session = self._state.memorization
        if session is None:
            return token.text
        return session.display(token)

    def style_for(self, token: Token) -> str:
        session = self._state.memorization
        if session is None or not isinstance(token, Word):
            return ""
        if session.is_hidden(token.index):
            return "bold black on #fbd38d"
        if token.index in session.selected_indices:
            return "bold #2b6cb0"
        return ""

    def on_click(self, event: events.Click) -> None:
        index = self.index_at(event)
        if index != NO_INDEX:
            self.post_message(self.WordClicked(index))
