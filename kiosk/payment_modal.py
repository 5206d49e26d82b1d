"""Payment modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.css.query import NoMatches
from textual.screen import ModalScreen
from textual.widgets import Static

from kiosk.errors import InvalidState
from kiosk.models import AccessibilitySettings, PaymentAttempt, PaymentMethod, PaymentStatus
from kiosk.payment import PaymentEngine
from kiosk.rendering import format_payment_status, format_price


class PaymentModal(ModalScreen[PaymentAttempt | None]):
    """Choose a method, watch the attempt resolve, then acknowledge it.

    Dismisses with the acknowledged attempt, or None when the user backs
    out or cancels while processing.
    """

    BINDINGS = [
        ("c", "pay('card')", "Card"),
        ("h", "pay('cash')", "Cash"),
        ("enter", "acknowledge", "Done"),
        ("escape", "back", "Back"),
        ("q", "back", "Back"),
    ]

    CSS = """
    PaymentModal {
        align: center middle;
        background: $background 60%;
    }

    #payment-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #payment-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #payment-error {
        color: #ffb3b3;
    }

    #payment-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, engine: PaymentEngine, settings: AccessibilitySettings) -> None:
        super().__init__()
        self.engine = engine
        self.settings = settings
        self.error = ""
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        with Container(id="payment-dialog"):
            yield Static("Payment", id="payment-title")
            yield Static(id="payment-amount")
            yield Static(id="payment-status")
            yield Static(id="payment-error")
            yield Static(id="payment-help")

    def on_mount(self) -> None:
        self._unsubscribe = self.engine.subscribe(lambda _engine: self._refresh_content())
        self._refresh_content()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def action_pay(self, method: str) -> None:
        if self.engine.state is not PaymentStatus.IDLE:
            return
        try:
            self.engine.initiate(PaymentMethod(method))
        except InvalidState as exc:
            self.error = str(exc)
        else:
            self.error = ""
        self._refresh_content()

    def action_acknowledge(self) -> None:
        if self.engine.state not in {PaymentStatus.SUCCEEDED, PaymentStatus.FAILED}:
            return
        self.dismiss(self.engine.acknowledge())

    def action_back(self) -> None:
        state = self.engine.state
        if state is PaymentStatus.PROCESSING:
            self.engine.cancel()
            self.dismiss(None)
            return
        if state in {PaymentStatus.SUCCEEDED, PaymentStatus.FAILED}:
            self.action_acknowledge()
            return
        self.dismiss(None)

    def _refresh_content(self) -> None:
        state = self.engine.state
        attempt = self.engine.attempt

        amount = Text()
        if attempt is not None:
            amount.append(f"Amount {format_price(attempt.amount)}", style="bold")
        else:
            amount.append(f"Amount {format_price(self.engine.cart.total())}", style="bold")
        try:
            amount_widget = self.query_one("#payment-amount", Static)
        except NoMatches:
            return
        amount_widget.update(amount)
        self.query_one("#payment-status", Static).update(format_payment_status(state, attempt))
        self.query_one("#payment-error", Static).update(self.error)

        if state is PaymentStatus.IDLE:
            help_text = "C card, H cash, Esc back"
        elif state is PaymentStatus.PROCESSING:
            help_text = "Esc cancel payment"
        elif state is PaymentStatus.SUCCEEDED:
            help_text = "Enter finish"
        else:
            help_text = "Enter return to cart"
        if self.settings.large_text:
            help_text = help_text.upper()
        self.query_one("#payment-help", Static).update(help_text)
