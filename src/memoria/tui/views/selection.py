from rich.markup import escape
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Static

from memoria.tui.state import AppState
from memoria.tui.views.base import View
from memoria.tui.widgets import SelectionCanvas


class SelectionView(View):
    name = "select"

    HELP_STYLE = "[dim]"
    HELP_END = "[/dim]"

    def _title(self, state: AppState) -> str:
        title = escape(state.title or "Untitled")
        if state.draft_id:
            return f"Select Words to Memorize: {title} (draft)"
        return f"Select Words to Memorize: {title}"

    def status(self, state: AppState) -> str:
        count = state.selected_count
        noun = "word" if count == 1 else "words"
        parts = [f"Selected: {count} {noun}"]
        if state.editor.dragging:
            parts.append(f"dragging {len(state.editor.temp_indices)}")
        return "  |  ".join(parts)

    def hints(self, state: AppState) -> str:
        h, e = self.HELP_STYLE, self.HELP_END
        undo = "Ctrl+Z:undo" if state.can_undo else f"{h}Ctrl+Z:undo{e}"
        nxt = "n:next" if state.can_proceed else f"{h}n:next{e}"
        return f"click/drag:select  a:select all  {undo}  {nxt}  Ctrl+S:save  q:quit"

    def diagnostics(self, state: AppState) -> str:
        editor = state.editor
        temp = sorted(editor.temp_indices)
        return (
            f"history={len(editor.history)} "
            f"drag_start={editor.drag.start_index} temp={temp} "
            f"selected={editor.selected_indices()}"
        )

    def render(self, state: AppState):
        children = [
            Static(self._title(state), id="breadcrumb"),
            VerticalScroll(SelectionCanvas(state, id="words"), id="canvas-scroll"),
            Static(self.status(state), id="status"),
            Static(self.hints(state), id="hint-bar"),
        ]
        if state.diagnostics:
            children.append(Static(self.diagnostics(state), id="diagnostics"))
        return [Vertical(*children, id="select-layout")]
