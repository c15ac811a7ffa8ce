from abc import ABC, abstractmethod
from typing import Iterable
from textual.widget import Widget
from memoria.tui.state import AppState


class View(ABC):
    name: str

    @abstractmethod
    def render(self, state: AppState) -> Iterable[Widget]: ...

    def status(self, state: AppState) -> str:
        """Text for the status line under the canvas."""
        return ""
