"""Proofreading answer sheet.

The author enters one sentence per line, then marks at most one wrong word
per line and types its correction.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from memoria.core.tokens import NO_INDEX

_CHUNK_RE = re.compile(r"\S+|\s+")
_PUNCT_RE = re.compile(r"^[^\w]+$")


@dataclass(frozen=True)
class ProofreadingWord:
    text: str
    index: int
    is_punctuation: bool


@dataclass(frozen=True)
class ProofreadingLine:
    text: str
    line_number: int
    words: tuple[ProofreadingWord, ...]

    @property
    def word_count(self) -> int:
        return sum(1 for w in self.words if w.index != NO_INDEX)

    def word(self, index: int) -> ProofreadingWord:
        for w in self.words:
            if w.index == index and index != NO_INDEX:
                return w
        raise IndexError(f"Line {self.line_number} has no word {index}")


@dataclass(frozen=True)
class ProofreadingAnswer:
    line_number: int
    word_index: int
    correction: str


def split_sentences(text: str) -> list[str]:
    """One sentence per non-blank line, trimmed."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def parse_line(sentence: str, line_number: int) -> ProofreadingLine:
    words: list[ProofreadingWord] = []
    next_index = 0
    for chunk in _CHUNK_RE.findall(sentence):
        if chunk.strip():
            words.append(
                ProofreadingWord(
                    text=chunk,
                    index=next_index,
                    is_punctuation=bool(_PUNCT_RE.match(chunk)),
                )
            )
            next_index += 1
        else:
            words.append(ProofreadingWord(text=chunk, index=NO_INDEX, is_punctuation=True))
    return ProofreadingLine(text=sentence, line_number=line_number, words=tuple(words))


@dataclass
class ProofreadingSheet:
    lines: list[ProofreadingLine]
    marked: dict[int, int] = field(default_factory=dict)
    corrections: dict[int, str] = field(default_factory=dict)

    @classmethod
    def from_sentences(cls, sentences: list[str]) -> "ProofreadingSheet":
        return cls([parse_line(s, n) for n, s in enumerate(sentences)])

    @classmethod
    def from_text(cls, text: str) -> "ProofreadingSheet":
        return cls.from_sentences(split_sentences(text))

    def _line(self, line_number: int) -> ProofreadingLine:
        if not 0 <= line_number < len(self.lines):
            raise IndexError(f"No line {line_number}")
        return self.lines[line_number]

    def mark(self, line_number: int, word_index: int) -> None:
        """Mark a word; marking the same word again clears the line."""
        self._line(line_number).word(word_index)

        if self.marked.get(line_number) == word_index:
            del self.marked[line_number]
            self.corrections.pop(line_number, None)
        else:
            self.marked[line_number] = word_index

    def set_correction(self, line_number: int, text: str) -> None:
        self._line(line_number)
        self.corrections[line_number] = text

    def answers(self) -> list[ProofreadingAnswer]:
        result = []
        for line_number in sorted(self.marked):
            correction = self.corrections.get(line_number, "").strip()
            if correction:
                result.append(
                    ProofreadingAnswer(line_number, self.marked[line_number], correction)
                )
        return result

    def is_complete(self) -> bool:
        if not self.marked:
            return False
        return all(self.corrections.get(n, "").strip() for n in self.marked)
