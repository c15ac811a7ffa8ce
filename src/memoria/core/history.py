"""Undo history of selection snapshots.

- Snapshots are pushed before every mutation, never after
- pop() returns None on an empty stack; callers check can_undo() first
- The stack is cleared whenever a new text or draft is loaded
"""

from __future__ import annotations

from typing import List, Optional

from memoria.core.selection import SelectionState


class HistoryStack:
    """Linear undo stack of SelectionState snapshots, oldest first."""

    def __init__(self, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be positive or None")
        self._snapshots: List[SelectionState] = []
        self._max_depth = max_depth

    @property
    def max_depth(self) -> Optional[int]:
        return self._max_depth

    def push(self, snapshot: SelectionState) -> None:
        """Record the state as it was before a mutation."""
        self._snapshots.append(snapshot)
        if self._max_depth is not None and len(self._snapshots) > self._max_depth:
            self._snapshots.pop(0)

    def pop(self) -> Optional[SelectionState]:
        """Remove and return the most recent snapshot, or None."""
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def can_undo(self) -> bool:
        return bool(self._snapshots)

    def clear(self) -> None:
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)
