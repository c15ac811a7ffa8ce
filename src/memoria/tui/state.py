"""
TUI state management and actions.

Architecture:
- Actions are frozen dataclasses representing state transitions
- reduce(state, action) applies one action to the state
- AppState.dispatch(action) mutates self by applying reduce
- Computed properties provide convenient access to derived state

Selection logic lives in memoria.core; the reducer only routes events to
the SelectionEditor and manages which screen is active.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, Union

from memoria.core.editor import SelectionEditor
from memoria.core.practice import LEVELS, MemorizationSession
from memoria.core.tokens import Token
from memoria.store.drafts import Draft
from memoria.store.workdir import WorkConfig


# =============================================================================
# Data Types
# =============================================================================

ViewName = Literal["select", "memorize"]


# =============================================================================
# Actions
# =============================================================================

@dataclass(frozen=True)
class LoadText:
    """Start a new selection session from raw text."""
    text: str
    title: str = ""


@dataclass(frozen=True)
class LoadDraft:
    """Resume a saved draft."""
    draft: Draft


@dataclass(frozen=True)
class PointerDown:
    index: int


@dataclass(frozen=True)
class PointerEnter:
    index: int


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class ReleaseDrag:
    """Abandon an in-progress drag without committing (focus lost)."""
    pass


@dataclass(frozen=True)
class SelectAll:
    pass


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class GotoMemorize:
    """Proceed to practice. Ignored while nothing is selected."""
    pass


@dataclass(frozen=True)
class GotoSelect:
    """Back to the selection screen."""
    pass


@dataclass(frozen=True)
class SetLevel:
    level: int


@dataclass(frozen=True)
class ToggleHidden:
    index: int


@dataclass(frozen=True)
class RevealAll:
    pass


@dataclass(frozen=True)
class CoverAll:
    pass


@dataclass(frozen=True)
class DraftSaved:
    draft_id: str
    title: str


Action = Union[
    LoadText,
    LoadDraft,
    PointerDown,
    PointerEnter,
    PointerUp,
    ReleaseDrag,
    SelectAll,
    Undo,
    GotoMemorize,
    GotoSelect,
    SetLevel,
    ToggleHidden,
    RevealAll,
    CoverAll,
    DraftSaved,
]


# =============================================================================
# Reducer
# =============================================================================

def reduce(state: "AppState", action: Action) -> None:
    """
    Apply an action to mutate state.

    All state changes flow through here. Conditions the UI should have
    prevented (undo with empty history, proceeding with no selection) are
    silent no-ops.
    """
    match action:
        case LoadText(text=text, title=title):
            state.editor.load_text(text)
            state.source_text = text
            state.title = title
            state.draft_id = None
            state.memorization = None
            state.view = "select"

        case LoadDraft(draft=draft):
            state.editor.load_tokens(draft.tokens)
            state.source_text = draft.original_text
            state.title = draft.title
            state.draft_id = draft.id
            state.memorization = None
            state.view = "select"

        case PointerDown(index=index):
            if state.view == "select":
                state.editor.pointer_down(index)

        case PointerEnter(index=index):
            if state.view == "select":
                state.editor.pointer_enter(index)

        case PointerUp():
            if state.view == "select":
                state.editor.pointer_up()

        case ReleaseDrag():
            state.editor.release()

        case SelectAll():
            if state.view == "select":
                state.editor.select_all()

        case Undo():
            if state.view == "select":
                state.editor.undo()

        case GotoMemorize():
            if state.view == "select" and state.editor.can_proceed:
                state.editor.release()
                state.memorization = MemorizationSession(
                    frozenset(state.editor.selected_indices()),
                    level=state.level,
                )
                state.view = "memorize"

        case GotoSelect():
            state.memorization = None
            state.view = "select"

        case SetLevel(level=level):
            if level in LEVELS:
                state.level = level
                if state.memorization is not None:
                    state.memorization.level = level

        case ToggleHidden(index=index):
            if state.memorization is not None:
                state.memorization.toggle(index)

        case RevealAll():
            if state.memorization is not None:
                state.memorization.reveal_all()

        case CoverAll():
            if state.memorization is not None:
                state.memorization.cover_all()

        case DraftSaved(draft_id=draft_id, title=title):
            state.draft_id = draft_id
            state.title = title


# =============================================================================
# App State
# =============================================================================

@dataclass
class AppState:
    """
    Central application state.

    This is a mutable dataclass. State changes happen via dispatch(action),
    which calls the reduce function to apply transitions.
    """

    view: ViewName = "select"

    editor: SelectionEditor = field(default_factory=SelectionEditor)
    memorization: Optional[MemorizationSession] = None

    # Text being worked on
    source_text: str = ""
    title: str = ""
    draft_id: Optional[str] = None

    # Difficulty carried into the next memorization session
    level: int = 3

    # Work context (loaded from .memoria/config.yml)
    config: Optional[WorkConfig] = None
    memoria_dir: Optional[Path] = None

    @classmethod
    def from_config(
        cls, config: Optional[WorkConfig], memoria_dir: Optional[Path] = None
    ) -> "AppState":
        if config is None:
            return cls(memoria_dir=memoria_dir)
        return cls(
            editor=SelectionEditor(max_depth=config.history_max_depth),
            level=config.practice_level,
            config=config,
            memoria_dir=memoria_dir,
        )

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def dispatch(self, action: Action) -> None:
        """Apply an action to update state."""
        reduce(self, action)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self.editor.tokens

    @property
    def can_undo(self) -> bool:
        return self.editor.can_undo()

    @property
    def can_proceed(self) -> bool:
        return self.editor.can_proceed

    @property
    def selected_count(self) -> int:
        return self.editor.state.selected_count

    @property
    def diagnostics(self) -> bool:
        """Show the diagnostics line (UI preference from config)."""
        return self.config is not None and self.config.diagnostics
