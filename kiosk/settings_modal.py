"""Accessibility settings modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from kiosk.models import ACCESSIBILITY_FLAGS
from kiosk.settings import SettingsStore

_FLAG_LABELS: dict[str, str] = {
    "large_text": "Large text",
    "high_contrast": "High contrast",
    "accessibility_mode": "Accessibility layout",
}


class SettingsModal(ModalScreen[None]):
    """The one screen allowed to change accessibility settings."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "toggle_current", "Toggle"),
        ("space", "toggle_current", "Toggle"),
    ]

    CSS = """
    SettingsModal {
        align: center middle;
        background: $background 60%;
    }

    #settings-dialog {
        width: 48;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #settings-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #settings-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, store: SettingsStore) -> None:
        super().__init__()
        self.store = store

    def compose(self) -> ComposeResult:
        with Container(id="settings-dialog"):
            yield Static("Accessibility", id="settings-title")
            yield Static(id="settings-body")
            yield Static("J/K/↑/↓ move, Enter toggle, Esc close", id="settings-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss()

    def action_move_cursor(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(ACCESSIBILITY_FLAGS)
        self._refresh_content()

    def action_toggle_current(self) -> None:
        self.store.toggle(ACCESSIBILITY_FLAGS[self.cursor_index])
        self._refresh_content()

    def _refresh_content(self) -> None:
        current = self.store.current
        content = Text(style="white")
        for idx, flag in enumerate(ACCESSIBILITY_FLAGS):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            enabled = getattr(current, flag)
            checked = "[x]" if enabled else "[ ]"
            content.append(f"{pointer}{checked} {_FLAG_LABELS[flag]}", style="bold white" if enabled else "white")
        self.query_one("#settings-body", Static).update(content)
