"""Help modal with frequently asked questions."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from kiosk.constant import HELP_FAQ


class HelpModal(ModalScreen[None]):
    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("question_mark", "close", "Close"),
    ]

    CSS = """
    HelpModal {
        align: center middle;
        background: $background 60%;
    }

    #help-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #help-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }
    """

    def compose(self) -> ComposeResult:
        body = Text(style="white")
        for idx, (question, answer) in enumerate(HELP_FAQ):
            if idx > 0:
                body.append("\n\n")
            body.append(question, style="bold white")
            body.append(f"\n{answer}")
        with Container(id="help-dialog"):
            yield Static("Frequently Asked Questions", id="help-title")
            yield Static(body, id="help-body")

    def action_close(self) -> None:
        self.dismiss()
