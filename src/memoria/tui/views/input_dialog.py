"""Modal dialogs: draft title and passage entry.

Both dismiss with the entered string, or None when cancelled.
"""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Button, Input, Static, TextArea


class _EntryDialog(Screen[str]):
    BINDINGS = [("escape", "cancel", "Cancel")]

    ok_label = "OK"
    cancel_label = "Cancel"
    empty_message = "Enter something first"

    def __init__(self, title: str, prompt: str):
        super().__init__()
        self._title = title
        self._prompt = prompt

    def entry(self) -> Widget:
        raise NotImplementedError

    def value(self) -> str:
        raise NotImplementedError

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static(self._title, id="dialog-title"),
            Static(self._prompt),
            self.entry(),
            Horizontal(
                Button(self.ok_label, id="ok", variant="primary"),
                Button(self.cancel_label, id="cancel"),
                id="dialog-buttons",
            ),
            id="dialog",
        )

    def accept(self) -> None:
        text = self.value()
        if not text.strip():
            self.notify(self.empty_message, severity="warning")
            return
        self.dismiss(text)

    def action_cancel(self) -> None:
        self.dismiss(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "ok":
            self.accept()
        else:
            self.action_cancel()


class TitleDialog(_EntryDialog):
    """Single-line title, prefilled; Enter accepts."""

    empty_message = "A draft needs a title"

    def __init__(self, title: str, prompt: str, default: str = ""):
        super().__init__(title, prompt)
        self._default = default

    def entry(self) -> Widget:
        return Input(value=self._default, id="input")

    def value(self) -> str:
        return self.query_one("#input", Input).value.strip()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.accept()


class TextDialog(_EntryDialog):
    """Multi-line text entry for a new passage."""

    ok_label = "Next"
    cancel_label = "Quit"
    empty_message = "Enter some text first"

    def entry(self) -> Widget:
        return TextArea("", id="text")

    def value(self) -> str:
        return self.query_one("#text", TextArea).text
