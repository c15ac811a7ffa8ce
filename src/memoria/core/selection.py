"""Selection state: the ordered token sequence plus per-word flags.

SelectionState is an immutable value. Every operation returns a new state
and leaves the old one untouched, so a snapshot kept for undo can never be
changed by later edits.

Indices that do not address a word (NO_INDEX, stale indices from an older
tokenization) are ignored rather than rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from memoria.core.tokens import Token, Word, tokenize


@dataclass(frozen=True)
class SelectionState:
    tokens: tuple[Token, ...] = ()

    # word index -> position in tokens
    _positions: dict[int, int] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        positions = {
            t.index: pos for pos, t in enumerate(self.tokens) if isinstance(t, Word)
        }
        object.__setattr__(self, "_positions", positions)

    @classmethod
    def from_text(cls, text: str) -> "SelectionState":
        return cls(tokenize(text))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def words(self) -> list[Word]:
        return [t for t in self.tokens if isinstance(t, Word)]

    @property
    def word_count(self) -> int:
        return len(self._positions)

    @property
    def selected_count(self) -> int:
        return sum(1 for w in self.words if w.selected)

    def is_selectable(self, index: int) -> bool:
        return index in self._positions

    def is_selected(self, index: int) -> bool:
        pos = self._positions.get(index)
        if pos is None:
            return False
        return self.tokens[pos].selected

    def word(self, index: int) -> Word | None:
        pos = self._positions.get(index)
        if pos is None:
            return None
        return self.tokens[pos]

    def indices_between(self, lo: int, hi: int) -> list[int]:
        """Selectable indices in the inclusive range [lo, hi], ascending."""
        if lo > hi:
            lo, hi = hi, lo
        return [w.index for w in self.words if lo <= w.index <= hi]

    def selected_indices(self) -> list[int]:
        """Selected word indices in text order (never click order)."""
        return [w.index for w in self.words if w.selected]

    def unselected_indices(self) -> list[int]:
        return [w.index for w in self.words if not w.selected]

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def toggle(self, index: int) -> "SelectionState":
        pos = self._positions.get(index)
        if pos is None:
            return self
        word = self.tokens[pos]
        return self._with_token(pos, word.with_selected(not word.selected))

    def set_selected(self, indices: Iterable[int], value: bool) -> "SelectionState":
        targets = set(indices)
        if not targets & self._positions.keys():
            return self

        tokens = tuple(
            t.with_selected(value)
            if isinstance(t, Word) and t.index in targets
            else t
            for t in self.tokens
        )
        return SelectionState(tokens)

    def select_all(self) -> "SelectionState":
        return self.set_selected(self.unselected_indices(), True)

    def _with_token(self, pos: int, token: Token) -> "SelectionState":
        tokens = self.tokens[:pos] + (token,) + self.tokens[pos + 1 :]
        return SelectionState(tokens)
