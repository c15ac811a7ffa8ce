"""Memorization practice: hiding the selected words of a text.

Difficulty levels:
    3  every character masked        apple -> *****
    2  first letter kept             apple -> a****
    1  first and last letters kept   apple -> a***e
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Literal

from memoria.core.tokens import Token, Word

Level = Literal[1, 2, 3]
LEVELS: tuple[Level, ...] = (1, 2, 3)

MASK = "*"
TITLE_LENGTH = 50

_ENGLISH_RE = re.compile(r"^[A-Za-z]+$")
_CJK_RE = re.compile(
    "[㐀-䶿一-鿿\U00020000-\U0002a6df\U0002a700-\U0002ebef\U00030000-\U0003134f]"
)


def mask_word(text: str, level: int) -> str:
    if level not in LEVELS:
        raise ValueError(f"Unknown difficulty level: {level}")
    if not text:
        return text

    if _CJK_RE.search(text):
        return MASK * len(text)
    if not _ENGLISH_RE.match(text):
        return text

    if level == 3:
        return MASK * len(text)
    if level == 2:
        if len(text) == 1:
            return text
        return text[0] + MASK * (len(text) - 1)
    if len(text) <= 2:
        return text
    return text[0] + MASK * (len(text) - 2) + text[-1]


def practice_title(text: str) -> str:
    if len(text) > TITLE_LENGTH:
        return text[:TITLE_LENGTH] + "..."
    return text


@dataclass
class MemorizationSession:
    """Which selected words are currently covered, and how."""

    selected_indices: frozenset[int]
    level: int = 3
    hidden: set[int] = field(init=False, default_factory=set)

    def __post_init__(self) -> None:
        if self.level not in LEVELS:
            raise ValueError(f"Unknown difficulty level: {self.level}")
        self.selected_indices = frozenset(self.selected_indices)
        self.hidden = set(self.selected_indices)

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token], level: int = 3) -> "MemorizationSession":
        selected = {t.index for t in tokens if isinstance(t, Word) and t.selected}
        return cls(frozenset(selected), level=level)

    def toggle(self, index: int) -> None:
        if index not in self.selected_indices:
            return
        if index in self.hidden:
            self.hidden.discard(index)
        else:
            self.hidden.add(index)

    def reveal_all(self) -> None:
        self.hidden.clear()

    def cover_all(self) -> None:
        self.hidden = set(self.selected_indices)

    def is_hidden(self, index: int) -> bool:
        return index in self.hidden

    def display(self, token: Token) -> str:
        if isinstance(token, Word) and token.index in self.hidden:
            return mask_word(token.text, self.level)
        return token.text

    def render(self, tokens: Iterable[Token]) -> str:
        return "".join(self.display(t) for t in tokens)
