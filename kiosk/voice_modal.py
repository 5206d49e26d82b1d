"""Voice order prompt.

Speech capture is not wired up; the utterance is typed and then handled
exactly like recognized speech.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class VoiceOrderModal(ModalScreen[str | None]):
    """Prompt for an utterance such as "one americano please"."""

    CSS = """
    VoiceOrderModal {
        align: center middle;
        background: $background 60%;
    }

    #voice-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #voice-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #voice-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #voice-help {
        color: #dddddd;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.value = ""

    def compose(self) -> ComposeResult:
        with Container(id="voice-dialog"):
            yield Static("Voice Order", id="voice-title")
            yield Static("Say (type) the menu item you want", id="voice-prompt")
            yield Static(id="voice-value")
            yield Static("Enter confirm. Backspace delete. Esc cancel.", id="voice-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self.dismiss(self.value.strip() or None)
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.value += event.character
            self._refresh_content()
            event.stop()

    def _refresh_content(self) -> None:
        self.query_one("#voice-value", Static).update(f"{self.value}|")
