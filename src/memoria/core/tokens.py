"""Token kinds and the text tokenizer.

A text is split into a flat sequence of tokens. Only words are selectable;
everything else carries NO_INDEX and is skipped by selection operations.

- Word indices count 0, 1, 2, ... in text order
- Re-tokenizing yields a fresh sequence (old indices are meaningless)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Iterable, Literal, Union

NO_INDEX = -1

TokenKind = Literal["word", "punctuation", "space", "line_break", "paragraph_break"]


# =============================================================================
# Token kinds
# =============================================================================


@dataclass(frozen=True)
class Word:
    """A selectable word."""

    text: str
    index: int
    selected: bool = False

    kind: ClassVar[TokenKind] = "word"
    is_punctuation = False
    is_line_break = False
    is_paragraph_break = False

    def with_selected(self, value: bool) -> "Word":
        if value == self.selected:
            return self
        return replace(self, selected=value)


@dataclass(frozen=True)
class Punctuation:
    text: str

    kind: ClassVar[TokenKind] = "punctuation"
    index = NO_INDEX
    selected = False
    is_punctuation = True
    is_line_break = False
    is_paragraph_break = False


@dataclass(frozen=True)
class Space:
    text: str

    kind: ClassVar[TokenKind] = "space"
    index = NO_INDEX
    selected = False
    is_punctuation = True
    is_line_break = False
    is_paragraph_break = False


@dataclass(frozen=True)
class LineBreak:
    text: str = "\n"

    kind: ClassVar[TokenKind] = "line_break"
    index = NO_INDEX
    selected = False
    is_punctuation = True
    is_line_break = True
    is_paragraph_break = False


@dataclass(frozen=True)
class ParagraphBreak:
    text: str = "\n\n"

    kind: ClassVar[TokenKind] = "paragraph_break"
    index = NO_INDEX
    selected = False
    is_punctuation = True
    is_line_break = False
    is_paragraph_break = True


Token = Union[Word, Punctuation, Space, LineBreak, ParagraphBreak]

_PLAIN_KINDS = {
    "punctuation": Punctuation,
    "space": Space,
    "line_break": LineBreak,
    "paragraph_break": ParagraphBreak,
}


# =============================================================================
# Tokenizer
# =============================================================================

_CJK = "㐀-䶿一-鿿豈-﫿"

_TOKEN_RE = re.compile(
    rf"""
    (?P<paragraph>\r?\n(?:[ \t]*\r?\n)+)
  | (?P<line>\r?\n|\r)
  | (?P<space>[^\S\r\n]+)
  | (?P<cjk>[{_CJK}])
  | (?P<word>[^\W_{_CJK}]+(?:['’\-][^\W_{_CJK}]+)*)
  | (?P<punct>[^\s{_CJK}\w]+|_+)
    """,
    re.VERBOSE,
)


def tokenize(text: str) -> tuple[Token, ...]:
    """Split text into tokens, numbering words left to right."""
    tokens: list[Token] = []
    next_index = 0

    for match in _TOKEN_RE.finditer(text):
        group = match.lastgroup
        chunk = match.group()
        if group in ("word", "cjk"):
            tokens.append(Word(text=chunk, index=next_index))
            next_index += 1
        elif group == "paragraph":
            tokens.append(ParagraphBreak(chunk))
        elif group == "line":
            tokens.append(LineBreak(chunk))
        elif group == "space":
            tokens.append(Space(chunk))
        else:
            tokens.append(Punctuation(chunk))

    return tuple(tokens)


def selected_word_indices(tokens: Iterable[Token]) -> list[int]:
    """Indices of selected words, in text order."""
    return [t.index for t in tokens if isinstance(t, Word) and t.selected]


def join_tokens(tokens: Iterable[Token]) -> str:
    return "".join(t.text for t in tokens)


# =============================================================================
# Records (persistence)
# =============================================================================


def token_to_record(token: Token) -> dict[str, Any]:
    if isinstance(token, Word):
        return {
            "kind": "word",
            "text": token.text,
            "index": token.index,
            "selected": token.selected,
        }
    return {"kind": token.kind, "text": token.text}


def token_from_record(record: dict[str, Any]) -> Token:
    if not isinstance(record, dict):
        raise ValueError(f"Token record must be a mapping: {record!r}")
    kind = record.get("kind")
    text = record.get("text")
    if not isinstance(text, str):
        raise ValueError(f"Token record without text: {record!r}")

    if kind == "word":
        index = record.get("index")
        if not isinstance(index, int) or index < 0:
            raise ValueError(f"Word record with invalid index: {record!r}")
        return Word(text=text, index=index, selected=bool(record.get("selected", False)))

    cls = _PLAIN_KINDS.get(kind)
    if cls is None:
        raise ValueError(f"Unknown token kind: {kind!r}")
    return cls(text)


def tokens_to_records(tokens: Iterable[Token]) -> list[dict[str, Any]]:
    return [token_to_record(t) for t in tokens]


def tokens_from_records(records: Iterable[dict[str, Any]]) -> tuple[Token, ...]:
    """Rebuild a token sequence; word indices must be strictly increasing."""
    tokens = tuple(token_from_record(r) for r in records)

    last = NO_INDEX
    for token in tokens:
        if isinstance(token, Word):
            if token.index <= last:
                raise ValueError(
                    f"Word indices must increase: {token.index} after {last}"
                )
            last = token.index

    return tokens
