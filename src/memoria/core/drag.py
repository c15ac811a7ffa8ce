"""Drag gesture recognizer.

Turns pointer down / enter / up into a single selection commit:

    Idle --down(selectable)--> Dragging --enter(i)--> Dragging
    Dragging --up--> Idle   (commit)
    Dragging --release--> Idle   (no commit; focus lost)

On release of the pointer:
- nothing spanned             -> no commit
- only the start word spanned -> "toggle" (a plain click)
- anything else               -> "select" (drag paints on, never off)

A drag that wanders off and comes back to the start word is reported as a
click; the outcome is identical to selecting that one word.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from memoria.core.selection import SelectionState

CommitKind = Literal["toggle", "select"]


@dataclass(frozen=True)
class DragCommit:
    kind: CommitKind
    indices: frozenset[int]


class DragRecognizer:
    def __init__(self) -> None:
        self.start_index: Optional[int] = None
        self.temp_indices: frozenset[int] = frozenset()

    @property
    def dragging(self) -> bool:
        return self.start_index is not None

    def pointer_down(self, state: SelectionState, index: int) -> bool:
        """Start a drag on a selectable word. Returns False if ignored."""
        if not state.is_selectable(index):
            return False
        self.start_index = index
        self.temp_indices = frozenset({index})
        return True

    def pointer_enter(self, state: SelectionState, index: int) -> None:
        if self.start_index is None:
            return
        if not state.is_selectable(index):
            return
        self.temp_indices = frozenset(state.indices_between(self.start_index, index))

    def pointer_up(self) -> Optional[DragCommit]:
        if self.start_index is None:
            return None

        start = self.start_index
        spanned = self.temp_indices
        self.release()

        if not spanned:
            return None
        if spanned == {start}:
            return DragCommit("toggle", spanned)
        return DragCommit("select", spanned)

    def release(self) -> None:
        """Back to Idle without committing anything."""
        self.start_index = None
        self.temp_indices = frozenset()
