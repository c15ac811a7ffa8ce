from rich.markup import escape
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Static

from memoria.tui.state import AppState
from memoria.tui.views.base import View
from memoria.tui.widgets import PracticeCanvas

LEVEL_NAMES = {1: "first and last letters", 2: "first letter", 3: "fully hidden"}


class MemorizeView(View):
    name = "memorize"

    def status(self, state: AppState) -> str:
        session = state.memorization
        if session is None:
            return ""
        hidden = len(session.hidden)
        total = len(session.selected_indices)
        return (
            f"Hidden: {hidden}/{total}  |  "
            f"Level {session.level} ({LEVEL_NAMES[session.level]})"
        )

    def render(self, state: AppState):
        hints = "click:show/hide  r:reveal all  c:cover all  1/2/3:level  Ctrl+S:save  Esc:back"
        return [
            Vertical(
                Static(f"Memorize: {escape(state.title or 'Untitled')}", id="breadcrumb"),
                VerticalScroll(PracticeCanvas(state, id="words"), id="canvas-scroll"),
                Static(self.status(state), id="status"),
                Static(hints, id="hint-bar"),
                id="memorize-layout",
            )
        ]
