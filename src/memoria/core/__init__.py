"""Selection & history engine and the practice logic built on it.

Pure in-memory code: no I/O, no UI. The TUI and CLI layers drive it.
"""

from memoria.core.drag import DragCommit, DragRecognizer
from memoria.core.editor import SelectionEditor
from memoria.core.history import HistoryStack
from memoria.core.selection import SelectionState
from memoria.core.tokens import NO_INDEX, Token, Word, tokenize

__all__ = [
    "NO_INDEX",
    "DragCommit",
    "DragRecognizer",
    "HistoryStack",
    "SelectionEditor",
    "SelectionState",
    "Token",
    "Word",
    "tokenize",
]
