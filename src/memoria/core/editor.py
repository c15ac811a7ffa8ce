"""Word-selection editor: selection state, undo history and drag gestures.

This is the object the authoring screens talk to. It owns one invariant
that the parts alone cannot: a snapshot is pushed onto the history right
before each mutation, so undo restores the state prior to the latest one.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from memoria.core.drag import DragCommit, DragRecognizer
from memoria.core.history import HistoryStack
from memoria.core.selection import SelectionState
from memoria.core.tokens import Token

logger = logging.getLogger(__name__)


class SelectionEditor:
    def __init__(self, max_depth: Optional[int] = None) -> None:
        self.state = SelectionState()
        self.history = HistoryStack(max_depth=max_depth)
        self.drag = DragRecognizer()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_text(self, text: str) -> None:
        self._replace(SelectionState.from_text(text))

    def load_tokens(self, tokens: Iterable[Token]) -> None:
        """Load a saved token sequence (draft), keeping its selection."""
        self._replace(SelectionState(tuple(tokens)))

    def _replace(self, state: SelectionState) -> None:
        self.state = state
        self.history.clear()
        self.drag.release()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def click(self, index: int) -> None:
        self.history.push(self.state)
        self.state = self.state.toggle(index)

    def select_range(self, indices: Iterable[int]) -> None:
        self.history.push(self.state)
        self.state = self.state.set_selected(indices, True)

    def select_all(self) -> bool:
        """Select every remaining word. Returns False if nothing was left."""
        if not self.state.unselected_indices():
            return False
        self.history.push(self.state)
        self.state = self.state.select_all()
        return True

    def undo(self) -> bool:
        previous = self.history.pop()
        if previous is None:
            return False
        self.state = previous
        logger.debug("undo: %d snapshots left", len(self.history))
        return True

    # -------------------------------------------------------------------------
    # Pointer gestures
    # -------------------------------------------------------------------------

    def pointer_down(self, index: int) -> bool:
        return self.drag.pointer_down(self.state, index)

    def pointer_enter(self, index: int) -> None:
        self.drag.pointer_enter(self.state, index)

    def pointer_up(self) -> Optional[DragCommit]:
        commit = self.drag.pointer_up()
        if commit is None:
            return None

        logger.debug("drag commit: %s %s", commit.kind, sorted(commit.indices))
        if commit.kind == "toggle":
            (index,) = commit.indices
            self.click(index)
        else:
            self.select_range(commit.indices)
        return commit

    def release(self) -> None:
        """Abandon an in-progress drag (e.g. the window lost focus)."""
        self.drag.release()

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self.state.tokens

    @property
    def dragging(self) -> bool:
        return self.drag.dragging

    @property
    def temp_indices(self) -> frozenset[int]:
        return self.drag.temp_indices

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def selected_indices(self) -> list[int]:
        return self.state.selected_indices()

    @property
    def can_proceed(self) -> bool:
        return bool(self.selected_indices())

    def handoff(self) -> tuple[tuple[Token, ...], list[int]]:
        """Final tokens and selected indices for the next step."""
        return self.state.tokens, self.selected_indices()
