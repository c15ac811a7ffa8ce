"""Memoria TUI application with Elm-inspired architecture.

- Selection screen: click a word to toggle it, drag across words to select
  a phrase, undo step by step
- Memorize screen: selected words are masked for recall practice
- Views are pure functions of state; canvases post pointer messages
- Drafts are read and written through memoria.store
"""

from __future__ import annotations

from pathlib import Path
import logging

from textual import events
from textual.app import App, ComposeResult
from textual.css.query import NoMatches
from textual.widgets import Footer, Header, Static
from textual.containers import Vertical

from memoria.core.practice import practice_title
from memoria.store import drafts
from memoria.store.workdir import load_work_cfg
from memoria.tui.state import (
    AppState,
    CoverAll,
    DraftSaved,
    GotoMemorize,
    GotoSelect,
    LoadDraft,
    LoadText,
    PointerDown,
    PointerEnter,
    PointerUp,
    ReleaseDrag,
    RevealAll,
    SelectAll,
    SetLevel,
    ToggleHidden,
    Undo,
)
from memoria.tui.decorators import safe_action
from memoria.tui.views.input_dialog import TextDialog, TitleDialog
from memoria.tui.views.memorize import MemorizeView
from memoria.tui.views.selection import SelectionView
from memoria.tui.widgets import PracticeCanvas, SelectionCanvas


class MemoriaApp(App):
    CSS_PATH = "tui.css"
    TITLE = "Memoria"
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("escape", "back", "Back"),
        ("ctrl+z", "undo", "Undo"),
        ("a", "select_all", "Select All"),
        ("n", "next", "Next"),
        ("ctrl+s", "save", "Save"),
        ("r", "reveal_all", "Reveal All"),
        ("c", "cover_all", "Cover All"),
        ("1", "level(1)", "Level 1"),
        ("2", "level(2)", "Level 2"),
        ("3", "level(3)", "Level 3"),
    ]

    def __init__(
        self,
        text: str | None = None,
        title: str = "",
        draft: str | None = None,
        work_dir: Path | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.state: AppState | None = None
        self.views = {}
        self._initial_text = text
        self._initial_title = title
        self._draft_selector = draft
        self._work_dir = work_dir

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(id="main")
        yield Footer()

    def on_mount(self) -> None:
        config = None
        memoria_dir = None
        try:
            _, memoria_dir, config = load_work_cfg(self._work_dir)
        except RuntimeError as e:
            # Without a work directory the editor still runs; saving is off.
            self.notify(f"{e}; drafts cannot be saved", severity="warning")

        if memoria_dir is not None:
            logging.basicConfig(
                filename=memoria_dir / "tui.log",
                level=logging.DEBUG,
                format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            )

        self.state = AppState.from_config(config, memoria_dir)
        self.views = {
            "select": SelectionView(),
            "memorize": MemorizeView(),
        }

        if self._draft_selector is not None:
            self._open_draft(self._draft_selector)
        elif self._initial_text is not None:
            self.state.dispatch(LoadText(self._initial_text, self._initial_title))
            self._render_view()
        else:
            self._prompt_text()

    def _open_draft(self, selector: str) -> None:
        if self.state is None:
            return
        if self.state.memoria_dir is None:
            self.exit(message="Not a Memoria work (missing .memoria/)")
            return
        try:
            draft = drafts.load_draft(self.state.memoria_dir, selector)
        except (LookupError, ValueError) as e:
            logging.exception("Loading draft %s failed", selector)
            self.exit(message=str(e))
            return
        self.state.dispatch(LoadDraft(draft))
        self._render_view()

    def _prompt_text(self) -> None:
        async def on_text_result(text: str | None) -> None:
            if text is None:
                self.exit()
                return
            self.state.dispatch(LoadText(text, practice_title(text.strip())))
            self._render_view()

        self.push_screen(
            TextDialog("New Practice", "Paste the passage to practice:"),
            on_text_result,
        )

    # =====================
    # Selection
    # =====================

    @safe_action
    def action_undo(self) -> None:
        if not self.state.can_undo:
            return
        self.state.dispatch(Undo())
        self._refresh_view()

    @safe_action
    def action_select_all(self) -> None:
        self.state.dispatch(SelectAll())
        self._refresh_view()

    @safe_action
    def action_next(self) -> None:
        if self.state.view != "select":
            return
        if not self.state.can_proceed:
            self.notify("Select at least one word first", severity="warning")
            return
        self.state.dispatch(GotoMemorize())
        self._render_view()

    @safe_action
    def action_back(self) -> None:
        if self.state.view == "memorize":
            self.state.dispatch(GotoSelect())
            self._render_view()
            return
        if self.state.editor.dragging:
            self.state.dispatch(ReleaseDrag())
            self._refresh_view()

    # =====================
    # Memorization
    # =====================

    @safe_action
    def action_reveal_all(self) -> None:
        self.state.dispatch(RevealAll())
        self._refresh_view()

    @safe_action
    def action_cover_all(self) -> None:
        self.state.dispatch(CoverAll())
        self._refresh_view()

    @safe_action
    def action_level(self, level: int) -> None:
        self.state.dispatch(SetLevel(level))
        self._refresh_view()

    # =====================
    # Drafts
    # =====================

    @safe_action
    def action_save(self) -> None:
        if self.state.memoria_dir is None:
            self.notify("Not a Memoria work; run `memoria init` first", severity="error")
            return

        default = self.state.title or practice_title(self.state.source_text)

        async def on_title_result(title: str | None) -> None:
            if not title:
                return
            self._save_draft(title)

        self.push_screen(TitleDialog("Save Draft", "Title:", default), on_title_result)

    @safe_action
    def _save_draft(self, title: str) -> None:
        config = self.state.config
        try:
            draft = drafts.save_draft(
                self.state.memoria_dir,
                title,
                self.state.source_text,
                self.state.tokens,
                save_limit=config.save_limit if config else None,
                draft_id=self.state.draft_id,
            )
        except drafts.SaveLimitReached as e:
            self.notify(str(e), severity="error")
            return
        self.state.dispatch(DraftSaved(draft.id, draft.title))
        self.notify(f"Saved draft: {draft.title}")
        self._render_view()

    # =====================
    # Pointer events
    # =====================

    @safe_action
    def on_selection_canvas_pointer_down(self, message: SelectionCanvas.PointerDown) -> None:
        self.state.dispatch(PointerDown(message.index))
        self._refresh_view()

    @safe_action
    def on_selection_canvas_pointer_enter(self, message: SelectionCanvas.PointerEnter) -> None:
        self.state.dispatch(PointerEnter(message.index))
        self._refresh_view()

    @safe_action
    def on_selection_canvas_pointer_up(self, message: SelectionCanvas.PointerUp) -> None:
        self.state.dispatch(PointerUp())
        self._refresh_view()

    @safe_action
    def on_practice_canvas_word_clicked(self, message: PracticeCanvas.WordClicked) -> None:
        self.state.dispatch(ToggleHidden(message.index))
        self._refresh_view()

    @safe_action
    def on_app_blur(self, event: events.AppBlur) -> None:
        # A pointer-up may never arrive once focus is gone.
        if self.state.editor.dragging:
            self.state.dispatch(ReleaseDrag())
            self._refresh_view()

    # =====================
    # Rendering
    # =====================

    def _render_view(self) -> None:
        """Schedule a full view re-render (screen switch or new text).

        Textual's `remove_children()` / `mount()` are async; running them in
        an exclusive worker avoids briefly having duplicate ids in the DOM.
        """

        if self.state is None:
            return

        self.run_worker(
            self._render_view_async(),
            group="render",
            exclusive=True,
            exit_on_error=False,
        )

    async def _render_view_async(self) -> None:
        if self.state is None:
            return

        try:
            container = self.screen.query_one("#main")
        except NoMatches:
            return

        await container.remove_children()

        view = self.views[self.state.view]
        widgets = view.render(self.state)
        await container.mount_all(widgets)

    def _refresh_view(self) -> None:
        """Repaint the canvas and status lines in place (no remount)."""
        if self.state is None:
            return
        view = self.views[self.state.view]
        try:
            self.screen.query_one("#words").refresh(layout=True)
            self.screen.query_one("#status", Static).update(view.status(self.state))
        except NoMatches:
            return

        if isinstance(view, SelectionView):
            try:
                self.screen.query_one("#hint-bar", Static).update(view.hints(self.state))
                if self.state.diagnostics:
                    self.screen.query_one("#diagnostics", Static).update(
                        view.diagnostics(self.state)
                    )
            except NoMatches:
                pass


if __name__ == "__main__":
    MemoriaApp().run()
